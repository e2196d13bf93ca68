# dealership/handlers/order_handler.py
from aiohttp import web
from ..models.order import CreateOrderRequest, OrderFilters, UpdateOrderStatusRequest
from ..utils import responses
from .base_handler import BaseHandler

FILTER_PARAMS = ('status', 'payment_status', 'customer_id', 'car_id', 'start_date', 'end_date')


class OrderHandler(BaseHandler):
    """Order routes"""

    async def create_order(self, request: web.Request) -> web.Response:
        customer_id = await self.authenticate_customer(request)
        order_data = await self.parse_body(request, CreateOrderRequest)

        order = await self.services.orders.create_order(customer_id, order_data)
        return responses.created(order, 'Order created successfully. Please proceed with payment.')

    async def process_payment(self, request: web.Request) -> web.Response:
        customer_id = await self.authenticate_customer(request)

        order = await self.services.orders.process_payment(
            self.path_id(request, 'order_id'), customer_id
        )
        return responses.success(order, 'Payment processed successfully')

    async def update_order_status(self, request: web.Request) -> web.Response:
        manager_id = await self.authenticate_manager(request)
        update_data = await self.parse_body(request, UpdateOrderStatusRequest)

        order = await self.services.orders.update_order_status(
            self.path_id(request, 'order_id'), manager_id, update_data
        )
        return responses.success(order, 'Order status updated successfully')

    async def get_orders(self, request: web.Request) -> web.Response:
        await self.authenticate_manager(request)
        filters = OrderFilters.model_validate({
            key: request.query[key] for key in FILTER_PARAMS if request.query.get(key)
        })
        page, limit = self.pagination(request, self.services.order_settings.page_size)

        result = await self.services.orders.get_orders(filters, page, limit)
        return responses.paginated(result)

    async def get_my_orders(self, request: web.Request) -> web.Response:
        customer_id = await self.authenticate_customer(request)
        page, limit = self.pagination(request, self.services.order_settings.page_size)

        result = await self.services.orders.get_customer_orders(customer_id, page, limit)
        return responses.paginated(result)

    async def get_order_by_id(self, request: web.Request) -> web.Response:
        role, user_id = await self.authenticate(request)

        order = await self.services.orders.get_order_by_id(
            self.path_id(request, 'order_id'), requester_id=user_id, requester_role=role
        )
        return responses.success(order)
