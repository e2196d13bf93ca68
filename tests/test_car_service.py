"""Car listings"""
from decimal import Decimal
import pytest
from pydantic import ValidationError
from dealership.errors import ConflictError, ForbiddenError, NotFoundError, RequestValidationError
from dealership.models.car import CarCreate, CarFilters, CarUpdate
from dealership.services import CarService
from dealership.services.car_service import parse_sort
from tests.conftest import car_values


@pytest.fixture
def cars(db):
    return CarService(db)


def new_car(category, **overrides):
    values = car_values(category.category_id, 0, **overrides)
    values.pop('manager_id')
    return CarCreate(**values)


@pytest.fixture
async def other_manager(db):
    return await db.managers.create({
        'name': 'Lee Manager',
        'email': 'lee@dealership.test',
        'password_hash': 'not-a-real-hash',
    })


async def test_create_car(cars, category, manager):
    car = await cars.create(new_car(category), manager.manager_id)

    assert car.manager_id == manager.manager_id
    assert car.quantity == 5
    assert car.available


async def test_create_duplicate_car(cars, category, manager):
    await cars.create(new_car(category), manager.manager_id)

    with pytest.raises(ConflictError, match="Car already exists"):
        await cars.create(new_car(category, color='Black'), manager.manager_id)


async def test_vin_is_unique_across_managers(cars, category, manager, other_manager):
    await cars.create(new_car(category), manager.manager_id)

    with pytest.raises(ConflictError):
        await cars.create(new_car(category), other_manager.manager_id)


async def test_create_car_in_inactive_category(cars, db, category, manager):
    await db.categories.update(category.category_id, {'is_active': False})

    with pytest.raises(NotFoundError, match="Category not found"):
        await cars.create(new_car(category), manager.manager_id)


async def test_create_car_rejects_bad_year(category):
    with pytest.raises(ValidationError):
        new_car(category, year=1850)


async def test_update_by_other_manager(cars, car, other_manager):
    with pytest.raises(ForbiddenError, match="Not authorized to update this car"):
        await cars.update(car.car_id, CarUpdate(price=Decimal('1')), other_manager.manager_id)


async def test_update_price(cars, car, manager):
    updated = await cars.update(car.car_id, CarUpdate(price=Decimal('33000')), manager.manager_id)
    assert updated.price == Decimal('33000')
    assert updated.quantity == 5


async def test_update_into_duplicate_spec(cars, category, manager):
    first = await cars.create(new_car(category), manager.manager_id)
    second = await cars.create(new_car(category, vin='ABC123456789XYZ999'), manager.manager_id)

    with pytest.raises(ConflictError, match="Car with these specifications already exists"):
        await cars.update(second.car_id, CarUpdate(vin=first.vin), manager.manager_id)


def test_update_cannot_touch_quantity():
    with pytest.raises(ValidationError):
        CarUpdate(quantity=10)


async def test_sold_out_car_stays_unavailable(cars, db, car, manager):
    await db.cars.decrement_stock(car.car_id, 5)

    updated = await cars.update(car.car_id, CarUpdate(available=True), manager.manager_id)
    assert not updated.available


async def test_delete_car(cars, car, manager, other_manager):
    with pytest.raises(ForbiddenError):
        await cars.delete(car.car_id, other_manager.manager_id)

    await cars.delete(car.car_id, manager.manager_id)
    with pytest.raises(NotFoundError):
        await cars.find_by_id(car.car_id)


async def test_find_all_filters_and_sorts(cars, category, manager):
    await cars.create(new_car(category), manager.manager_id)
    await cars.create(new_car(category, brand='Honda', model_name='CR-V',
                              price=Decimal('38000'), vin='HONDA0000001'), manager.manager_id)
    await cars.create(new_car(category, brand='Tesla', model_name='Model 3',
                              price=Decimal('45000'), vin='TESLA0000001'), manager.manager_id)

    by_brand = await cars.find_all(CarFilters(brand='hon'))
    assert [c.brand for c in by_brand.items] == ['Honda']

    priced = await cars.find_all(CarFilters(min_price=Decimal('36000')), sort='-price')
    assert [c.brand for c in priced.items] == ['Tesla', 'Honda']

    paged = await cars.find_all(page=2, limit=2, sort='price')
    assert paged.pagination.total == 3
    assert [c.brand for c in paged.items] == ['Tesla']


def test_parse_sort():
    assert parse_sort(None) == ('created_at', True)
    assert parse_sort('price') == ('price', False)
    assert parse_sort('-year') == ('year', True)
    with pytest.raises(RequestValidationError):
        parse_sort('password')
