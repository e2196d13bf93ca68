"""Manager and customer accounts"""
import pytest
from dealership.errors import ConflictError, UnauthorizedError
from dealership.models.user import (
    ChangePasswordRequest,
    CustomerProfileUpdate,
    CustomerRegister,
    LoginRequest,
    ManagerRegister,
    UserRole,
)
from dealership.services import CustomerService, ManagerService
from dealership.utils.security import verify_token


@pytest.fixture
def managers(db, auth_settings):
    return ManagerService(db, auth_settings)


@pytest.fixture
def customers(db, auth_settings):
    return CustomerService(db, auth_settings)


def manager_signup():
    return ManagerRegister(name='Dana', email='Dana@Dealership.test', password='secret123')


async def test_register_manager_issues_tokens(managers, auth_settings):
    result = await managers.register(manager_signup())

    assert result.manager.email == 'dana@dealership.test'
    claims = verify_token(auth_settings, result.tokens.access_token)
    assert claims == (UserRole.MANAGER, result.manager.manager_id)


async def test_register_duplicate_email(managers):
    await managers.register(manager_signup())

    with pytest.raises(ConflictError, match="Email already exists"):
        await managers.register(manager_signup())


async def test_login(managers):
    await managers.register(manager_signup())

    result = await managers.login(LoginRequest(email='dana@dealership.test', password='secret123'))
    assert result.manager.last_login_at is not None

    with pytest.raises(UnauthorizedError, match="Invalid credentials"):
        await managers.login(LoginRequest(email='dana@dealership.test', password='wrong-one'))


async def test_change_password(managers):
    registered = await managers.register(manager_signup())
    manager_id = registered.manager.manager_id

    with pytest.raises(UnauthorizedError, match="Current password is incorrect"):
        await managers.change_password(
            manager_id, ChangePasswordRequest(current_password='nope-nope', new_password='newpass1')
        )

    await managers.change_password(
        manager_id, ChangePasswordRequest(current_password='secret123', new_password='newpass1')
    )
    await managers.login(LoginRequest(email='dana@dealership.test', password='newpass1'))


async def test_authenticate_inactive_account(managers, db, manager):
    await db.managers.update(manager.manager_id, {'is_active': False})

    with pytest.raises(UnauthorizedError):
        await managers.authenticate(manager.manager_id)


async def test_customer_profile(customers):
    registered = await customers.register(
        CustomerRegister(name='Alex', email='alex@example.com', phone='+15550100', password='secret123')
    )
    customer_id = registered.customer.customer_id

    updated = await customers.update_profile(customer_id, CustomerProfileUpdate(phone='+15550199'))
    assert updated.phone == '+15550199'
    assert updated.name == 'Alex'


async def test_customer_listing_hides_credentials(customers, customer, other_customer):
    result = await customers.find_all(page=1, limit=1)

    assert result.pagination.total == 2
    assert result.pagination.pages == 2
    assert 'password_hash' not in result.items[0].model_dump()
