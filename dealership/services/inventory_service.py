# dealership/services/inventory_service.py
import logging
from ..errors import ConflictError, NotFoundError
from ..models.car import Car


class InventoryService:
    """Guards the quantity/available pair of car listings.

    Every stock movement goes through here. Pass `session` to run the
    movement inside a caller's transaction.
    """

    def __init__(self, db):
        self.db = db
        self.logger = logging.getLogger(__name__)

    def _cars(self, session=None):
        return session.cars if session is not None else self.db.cars

    async def check_availability(self, car_id: int, quantity: int) -> Car:
        """Return the car if it is listed as available with enough units"""
        car = await self.db.cars.get(car_id)
        if not car:
            raise NotFoundError('Car not found')

        if not car.available or car.quantity < quantity:
            raise ConflictError('Insufficient stock available')

        return car

    async def decrement(self, car_id: int, quantity: int, session=None) -> Car:
        car = await self._cars(session).decrement_stock(car_id, quantity)
        if car is None:
            raise ConflictError('Car no longer available')

        self.logger.info(f"Car {car_id} stock -{quantity} -> {car.quantity}")
        return car

    async def restore(self, car_id: int, quantity: int, session=None) -> Car:
        car = await self._cars(session).restore_stock(car_id, quantity)
        if car is None:
            raise NotFoundError('Car not found')

        self.logger.info(f"Car {car_id} stock +{quantity} -> {car.quantity}")
        return car
