# dealership/handlers/car_handler.py
from aiohttp import web
from ..models.car import CarCreate, CarFilters, CarUpdate
from ..models.category import CategoryCreate, CategoryUpdate
from ..utils import responses
from .base_handler import BaseHandler

FILTER_PARAMS = (
    'brand', 'model_name', 'category_id', 'available', 'year', 'min_price',
    'max_price', 'transmission', 'fuel_type', 'condition'
)


class CarHandler(BaseHandler):
    """Car listing routes; browsing is public"""

    async def create(self, request: web.Request) -> web.Response:
        manager_id = await self.authenticate_manager(request)
        car_data = await self.parse_body(request, CarCreate)

        car = await self.services.cars.create(car_data, manager_id)
        return responses.created(car, 'Car created successfully')

    async def find_all(self, request: web.Request) -> web.Response:
        filters = CarFilters.model_validate({
            key: request.query[key] for key in FILTER_PARAMS if request.query.get(key)
        })
        page, limit = self.pagination(request)

        result = await self.services.cars.find_all(
            filters, page, limit, request.query.get('sort')
        )
        return responses.paginated(
            result, {'filters': filters.model_dump(mode='json', exclude_none=True)}
        )

    async def find_by_id(self, request: web.Request) -> web.Response:
        car = await self.services.cars.find_by_id(self.path_id(request))
        return responses.success(car)

    async def update(self, request: web.Request) -> web.Response:
        manager_id = await self.authenticate_manager(request)
        car_data = await self.parse_body(request, CarUpdate)

        car = await self.services.cars.update(self.path_id(request), car_data, manager_id)
        return responses.success(car, 'Car updated successfully')

    async def remove(self, request: web.Request) -> web.Response:
        manager_id = await self.authenticate_manager(request)

        await self.services.cars.delete(self.path_id(request), manager_id)
        return responses.success(message='Car deleted successfully')


class CategoryHandler(BaseHandler):
    """Category routes"""

    async def get_all(self, request: web.Request) -> web.Response:
        categories = await self.services.categories.find_all()
        return responses.success(categories)

    async def create(self, request: web.Request) -> web.Response:
        await self.authenticate_manager(request)
        category_data = await self.parse_body(request, CategoryCreate)

        category = await self.services.categories.create(category_data)
        return responses.created(category, 'Category created successfully')

    async def update(self, request: web.Request) -> web.Response:
        await self.authenticate_manager(request)
        category_data = await self.parse_body(request, CategoryUpdate)

        category = await self.services.categories.update(self.path_id(request), category_data)
        return responses.success(category, 'Category updated successfully')

    async def delete(self, request: web.Request) -> web.Response:
        await self.authenticate_manager(request)

        await self.services.categories.delete(self.path_id(request))
        return responses.success(message='Category deleted successfully')
