"""Stock movements on car listings"""
import pytest
from dealership.errors import ConflictError, NotFoundError
from dealership.services import InventoryService


@pytest.fixture
def inventory(db):
    return InventoryService(db)


async def test_check_availability(inventory, car):
    found = await inventory.check_availability(car.car_id, 5)
    assert found.car_id == car.car_id


async def test_check_availability_short(inventory, car):
    with pytest.raises(ConflictError, match="Insufficient stock available"):
        await inventory.check_availability(car.car_id, 6)


async def test_check_availability_missing(inventory):
    with pytest.raises(NotFoundError):
        await inventory.check_availability(42, 1)


async def test_decrement_to_zero_hides_car(inventory, car):
    updated = await inventory.decrement(car.car_id, 5)
    assert updated.quantity == 0
    assert not updated.available
    assert not updated.in_stock


async def test_decrement_more_than_stock(inventory, db, car):
    with pytest.raises(ConflictError, match="Car no longer available"):
        await inventory.decrement(car.car_id, 6)
    assert (await db.cars.get(car.car_id)).quantity == 5


async def test_restore_makes_car_available(inventory, car):
    await inventory.decrement(car.car_id, 5)

    restored = await inventory.restore(car.car_id, 2)
    assert restored.quantity == 2
    assert restored.available


async def test_restore_missing_car(inventory):
    with pytest.raises(NotFoundError):
        await inventory.restore(42, 1)


async def test_movement_inside_transaction_rolls_back(inventory, db, car):
    with pytest.raises(RuntimeError):
        async with db.transaction() as session:
            await inventory.decrement(car.car_id, 2, session=session)
            raise RuntimeError("abort")

    assert (await db.cars.get(car.car_id)).quantity == 5
