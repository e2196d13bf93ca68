"""Shared fixtures: in-memory storage, a scripted payment processor and sample data"""
from decimal import Decimal
from typing import List
import pytest
from dealership.config import AuthSettings, OrderSettings
from dealership.database import MemoryDatabase
from dealership.models.car import Condition, FuelType, Transmission
from dealership.models.order import Order
from dealership.services import OrderService, PaymentProcessor, PaymentResult
from dealership.utils.identifiers import generate_reference


class ScriptedPaymentProcessor(PaymentProcessor):
    """Plays back queued outcomes; succeeds once the queue is empty"""

    def __init__(self):
        self.outcomes: List[bool] = []
        self.attempts: List[int] = []

    def queue(self, *outcomes: bool):
        self.outcomes.extend(outcomes)

    async def attempt(self, order: Order) -> PaymentResult:
        self.attempts.append(order.order_id)
        if self.outcomes and not self.outcomes.pop(0):
            return PaymentResult(success=False, error="Card declined")
        return PaymentResult(success=True, transaction_id=generate_reference("TXN_"))


def car_values(category_id: int, manager_id: int, **overrides):
    values = {
        'brand': 'Toyota',
        'model_name': 'Camry',
        'year': 2015,
        'price': Decimal('35000'),
        'category_id': category_id,
        'manager_id': manager_id,
        'mileage': 0,
        'transmission': Transmission.AUTOMATIC,
        'fuel_type': FuelType.HYBRID,
        'engine_size': Decimal('2.5'),
        'color': 'Silver',
        'vin': 'ABC123456789XYZ001',
        'available': True,
        'condition': Condition.NEW,
        'quantity': 5,
    }
    values.update(overrides)
    return values


@pytest.fixture
def db():
    return MemoryDatabase()


@pytest.fixture
def order_settings():
    return OrderSettings(payment_processing_delay=0)


@pytest.fixture
def auth_settings():
    return AuthSettings(secret_key="test-secret")


@pytest.fixture
def payments():
    return ScriptedPaymentProcessor()


@pytest.fixture
def order_service(db, payments, order_settings):
    return OrderService(db, payments, order_settings)


@pytest.fixture
async def manager(db):
    return await db.managers.create({
        'name': 'Dana Manager',
        'email': 'dana@dealership.test',
        'password_hash': 'not-a-real-hash',
    })


@pytest.fixture
async def customer(db):
    return await db.customers.create({
        'name': 'Alex Buyer',
        'email': 'alex@example.com',
        'phone': '+15550100',
        'password_hash': 'not-a-real-hash',
    })


@pytest.fixture
async def other_customer(db):
    return await db.customers.create({
        'name': 'Sam Buyer',
        'email': 'sam@example.com',
        'phone': '+15550101',
        'password_hash': 'not-a-real-hash',
    })


@pytest.fixture
async def category(db):
    return await db.categories.create({'name': 'Sedan', 'description': 'Three-box passenger car'})


@pytest.fixture
async def car(db, category, manager):
    return await db.cars.create(car_values(category.category_id, manager.manager_id))
