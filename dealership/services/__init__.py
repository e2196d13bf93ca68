from .car_service import CarService
from .category_service import CategoryService
from .inventory_service import InventoryService
from .order_service import OrderService
from .payment_service import (
    GatewayPaymentProcessor,
    PaymentProcessor,
    PaymentResult,
    SimulatedPaymentProcessor,
)
from .user_service import CustomerService, ManagerService

__all__ = [
    'CarService',
    'CategoryService',
    'InventoryService',
    'OrderService',
    'PaymentProcessor',
    'PaymentResult',
    'SimulatedPaymentProcessor',
    'GatewayPaymentProcessor',
    'CustomerService',
    'ManagerService',
]
