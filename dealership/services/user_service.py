# dealership/services/user_service.py
import asyncio
import logging
from datetime import datetime, timezone
from ..config import AuthSettings
from ..errors import ConflictError, NotFoundError, UnauthorizedError
from ..models.base import PaginatedResult, Pagination
from ..models.user import (
    ChangePasswordRequest,
    Customer,
    CustomerAuth,
    CustomerRegister,
    LoginRequest,
    Manager,
    ManagerAuth,
    ManagerRegister,
    UserRole,
)
from ..utils.security import generate_token_pair, hash_password, verify_password


class AccountService:
    """Shared account logic for managers and customers"""
    role: UserRole = None
    label: str = "User"

    def __init__(self, db, auth_settings: AuthSettings):
        self.db = db
        self.auth_settings = auth_settings
        self.logger = logging.getLogger(__name__)

    @property
    def accounts(self):
        raise NotImplementedError

    async def _register(self, data):
        existing = await self.accounts.get_by_email(data.email)
        if existing:
            raise ConflictError('Email already exists')

        password_hash = await asyncio.to_thread(hash_password, data.password)
        values = data.model_dump(exclude={'password'})
        account = await self.accounts.create({**values, 'password_hash': password_hash})
        self.logger.info(f"{self.label} {account.email} registered")
        return account

    async def _login(self, data: LoginRequest):
        account = await self.accounts.get_by_email(data.email)
        if not account or not account.is_active:
            raise UnauthorizedError('Invalid credentials')

        is_valid = await asyncio.to_thread(verify_password, account.password_hash, data.password)
        if not is_valid:
            raise UnauthorizedError('Invalid credentials')

        return await self.accounts.update(
            self._id(account), {'last_login_at': datetime.now(timezone.utc)}
        )

    def _id(self, account) -> int:
        raise NotImplementedError

    def _tokens(self, account):
        return generate_token_pair(self.auth_settings, self.role, self._id(account))

    async def _get(self, account_id: int):
        account = await self.accounts.get(account_id)
        if not account:
            raise NotFoundError(f'{self.label} not found')
        return account

    async def authenticate(self, account_id: int):
        """Resolve the account behind a verified token"""
        account = await self.accounts.get(account_id)
        if not account or not account.is_active:
            raise UnauthorizedError('Unauthorized')
        return account.public()

    async def get_profile(self, account_id: int):
        return (await self._get(account_id)).public()

    async def update_profile(self, account_id: int, data):
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return await self.get_profile(account_id)

        account = await self.accounts.update(account_id, changes)
        if not account:
            raise NotFoundError(f'{self.label} not found')
        return account.public()


class ManagerService(AccountService):
    role = UserRole.MANAGER
    label = "Manager"

    @property
    def accounts(self):
        return self.db.managers

    def _id(self, account: Manager) -> int:
        return account.manager_id

    async def register(self, data: ManagerRegister) -> ManagerAuth:
        manager = await self._register(data)
        return ManagerAuth(manager=manager.public(), tokens=self._tokens(manager))

    async def login(self, data: LoginRequest) -> ManagerAuth:
        manager = await self._login(data)
        return ManagerAuth(manager=manager.public(), tokens=self._tokens(manager))

    async def change_password(self, manager_id: int, data: ChangePasswordRequest):
        manager = await self._get(manager_id)

        is_valid = await asyncio.to_thread(
            verify_password, manager.password_hash, data.current_password
        )
        if not is_valid:
            raise UnauthorizedError('Current password is incorrect')

        password_hash = await asyncio.to_thread(hash_password, data.new_password)
        await self.accounts.update(manager_id, {'password_hash': password_hash})
        self.logger.info(f"Manager {manager_id} changed password")


class CustomerService(AccountService):
    role = UserRole.CUSTOMER
    label = "Customer"

    @property
    def accounts(self):
        return self.db.customers

    def _id(self, account: Customer) -> int:
        return account.customer_id

    async def register(self, data: CustomerRegister) -> CustomerAuth:
        customer = await self._register(data)
        return CustomerAuth(customer=customer.public(), tokens=self._tokens(customer))

    async def login(self, data: LoginRequest) -> CustomerAuth:
        customer = await self._login(data)
        return CustomerAuth(customer=customer.public(), tokens=self._tokens(customer))

    async def find_all(self, page: int = 1, limit: int = 10) -> PaginatedResult:
        customers, total = await self.accounts.list(page, limit)
        return PaginatedResult(
            items=[customer.public() for customer in customers],
            pagination=Pagination.build(page, limit, total)
        )
