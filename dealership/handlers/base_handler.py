# dealership/handlers/base_handler.py
import json
from typing import Tuple
from aiohttp import web
from ..errors import BadRequestError, RequestValidationError, UnauthorizedError
from ..models.user import UserRole
from ..utils.security import verify_token


class BaseHandler:
    """Shared request helpers for the HTTP handlers"""

    def __init__(self, services):
        self.services = services

    @staticmethod
    async def parse_body(request: web.Request, model):
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise BadRequestError('Invalid JSON body')

        if not isinstance(payload, dict):
            raise BadRequestError('Request body must be a JSON object')

        return model.model_validate(payload)

    @staticmethod
    def path_id(request: web.Request, name: str = 'id') -> int:
        return int(request.match_info[name])

    @staticmethod
    def query_int(request: web.Request, name: str, default: int) -> int:
        value = request.query.get(name)
        if value is None or value == '':
            return default
        try:
            return int(value)
        except ValueError:
            raise RequestValidationError(f"{name} must be an integer")

    def pagination(self, request: web.Request, default_limit: int = 10) -> Tuple[int, int]:
        page = self.query_int(request, 'page', 1)
        limit = self.query_int(request, 'limit', default_limit)
        if page < 1 or limit < 1:
            raise RequestValidationError('Page and limit must be positive')
        return page, limit

    async def authenticate(self, request: web.Request, *roles: UserRole) -> Tuple[UserRole, int]:
        """Verify the bearer token and return (role, user id)"""
        header = request.headers.get('Authorization', '')
        if not header.startswith('Bearer '):
            raise UnauthorizedError('No token provided')

        claims = verify_token(self.services.auth_settings, header[len('Bearer '):])
        if not claims:
            raise UnauthorizedError('Invalid token')

        role, user_id = claims
        if roles and role not in roles:
            raise UnauthorizedError('Invalid token')

        if role == UserRole.MANAGER:
            await self.services.managers.authenticate(user_id)
        else:
            await self.services.customers.authenticate(user_id)

        return role, user_id

    async def authenticate_manager(self, request: web.Request) -> int:
        return (await self.authenticate(request, UserRole.MANAGER))[1]

    async def authenticate_customer(self, request: web.Request) -> int:
        return (await self.authenticate(request, UserRole.CUSTOMER))[1]
