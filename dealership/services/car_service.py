# dealership/services/car_service.py
import logging
from typing import Any, Dict, Optional, Tuple
from ..errors import ConflictError, ForbiddenError, NotFoundError, RequestValidationError
from ..models.base import PaginatedResult, Pagination
from ..models.car import SORTABLE_FIELDS, SPEC_FIELDS, Car, CarCreate, CarFilters, CarUpdate


def parse_sort(sort: Optional[str]) -> Tuple[str, bool]:
    """`price` -> ascending, `-price` -> descending; default newest first"""
    if not sort:
        return 'created_at', True

    field = sort[1:] if sort.startswith('-') else sort
    if field not in SORTABLE_FIELDS:
        raise RequestValidationError(f"Cannot sort by {field}")
    return field, sort.startswith('-')


class CarService:
    """Car listing management for managers, browsing for everyone"""

    def __init__(self, db):
        self.db = db
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def _spec(data: Dict[str, Any]) -> Dict[str, Any]:
        return {field: data[field] for field in SPEC_FIELDS if field in data}

    async def _ensure_category(self, category_id: int):
        if not await self.db.categories.get(category_id, active_only=True):
            raise NotFoundError('Category not found')

    async def create(self, data: CarCreate, manager_id: int) -> Car:
        values = data.model_dump()

        if await self.db.cars.find_duplicate(manager_id, self._spec(values)):
            raise ConflictError('Car already exists')

        await self._ensure_category(data.category_id)

        car = await self.db.cars.create({**values, 'manager_id': manager_id})
        self.logger.info(f"Car {car.car_id} ({car.brand} {car.model_name}) listed by manager {manager_id}")
        return car

    async def find_all(self, filters: Optional[CarFilters] = None, page: int = 1,
                       limit: int = 10, sort: Optional[str] = None) -> PaginatedResult:
        if page < 1 or limit < 1:
            raise RequestValidationError('Page and limit must be positive')

        sort_field, descending = parse_sort(sort)
        cars, total = await self.db.cars.find(
            filters or CarFilters(), page, limit, sort_field, descending
        )
        return PaginatedResult(items=cars, pagination=Pagination.build(page, limit, total))

    async def find_by_id(self, car_id: int) -> Car:
        car = await self.db.cars.get(car_id)
        if not car:
            raise NotFoundError('Car not found')
        return car

    async def _owned_car(self, car_id: int, manager_id: int, action: str) -> Car:
        car = await self.db.cars.get(car_id)
        if not car:
            raise NotFoundError('Car not found')

        if car.manager_id != manager_id:
            raise ForbiddenError(f'Not authorized to {action} this car')

        return car

    async def update(self, car_id: int, data: CarUpdate, manager_id: int) -> Car:
        car = await self._owned_car(car_id, manager_id, 'update')
        changes = data.model_dump(exclude_unset=True)

        if data.has_spec_changes():
            merged = {**car.model_dump(), **changes}
            duplicate = await self.db.cars.find_duplicate(
                manager_id, self._spec(merged), exclude_id=car_id
            )
            if duplicate:
                raise ConflictError('Car with these specifications already exists')

        if data.category_id is not None:
            await self._ensure_category(data.category_id)

        # An empty listing can never be marked available
        if changes.get('available') and car.quantity == 0:
            changes['available'] = False

        if not changes:
            return car

        updated = await self.db.cars.update(car_id, changes)
        if not updated:
            raise NotFoundError('Car not found after update')
        return updated

    async def delete(self, car_id: int, manager_id: int):
        await self._owned_car(car_id, manager_id, 'delete')
        await self.db.cars.delete(car_id)
        self.logger.info(f"Car {car_id} deleted by manager {manager_id}")
