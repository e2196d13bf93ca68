# dealership/handlers/account_handler.py
from aiohttp import web
from ..models.user import (
    ChangePasswordRequest,
    CustomerProfileUpdate,
    CustomerRegister,
    LoginRequest,
    ManagerProfileUpdate,
    ManagerRegister,
)
from ..utils import responses
from .base_handler import BaseHandler


class ManagerHandler(BaseHandler):
    """Manager account routes"""

    async def register(self, request: web.Request) -> web.Response:
        data = await self.parse_body(request, ManagerRegister)
        result = await self.services.managers.register(data)
        return responses.created(result, 'Manager registered successfully')

    async def login(self, request: web.Request) -> web.Response:
        data = await self.parse_body(request, LoginRequest)
        result = await self.services.managers.login(data)
        return responses.success(result, 'Login successful')

    async def get_profile(self, request: web.Request) -> web.Response:
        manager_id = await self.authenticate_manager(request)
        return responses.success(await self.services.managers.get_profile(manager_id))

    async def update_profile(self, request: web.Request) -> web.Response:
        manager_id = await self.authenticate_manager(request)
        data = await self.parse_body(request, ManagerProfileUpdate)

        manager = await self.services.managers.update_profile(manager_id, data)
        return responses.success(manager, 'Profile updated successfully')

    async def change_password(self, request: web.Request) -> web.Response:
        manager_id = await self.authenticate_manager(request)
        data = await self.parse_body(request, ChangePasswordRequest)

        await self.services.managers.change_password(manager_id, data)
        return responses.success(message='Password changed successfully')


class CustomerHandler(BaseHandler):
    """Customer account routes"""

    async def register(self, request: web.Request) -> web.Response:
        data = await self.parse_body(request, CustomerRegister)
        result = await self.services.customers.register(data)
        return responses.created(result, 'Customer registered successfully')

    async def login(self, request: web.Request) -> web.Response:
        data = await self.parse_body(request, LoginRequest)
        result = await self.services.customers.login(data)
        return responses.success(result, 'Login successful')

    async def get_profile(self, request: web.Request) -> web.Response:
        customer_id = await self.authenticate_customer(request)
        return responses.success(await self.services.customers.get_profile(customer_id))

    async def update_profile(self, request: web.Request) -> web.Response:
        customer_id = await self.authenticate_customer(request)
        data = await self.parse_body(request, CustomerProfileUpdate)

        customer = await self.services.customers.update_profile(customer_id, data)
        return responses.success(customer, 'Profile updated successfully')

    async def find_all(self, request: web.Request) -> web.Response:
        await self.authenticate_manager(request)
        page, limit = self.pagination(request)

        result = await self.services.customers.find_all(page, limit)
        return responses.paginated(result)
