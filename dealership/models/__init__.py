from .base import TimeStampedModel, Pagination, PaginatedResult
from .category import Category, CategoryCreate, CategoryUpdate
from .car import Car, CarCreate, CarUpdate, CarFilters, Transmission, FuelType, Condition
from .user import (
    UserRole, Manager, ManagerPublic, Customer, CustomerPublic, LoginRequest,
    ManagerRegister, CustomerRegister, ManagerProfileUpdate, CustomerProfileUpdate,
    ChangePasswordRequest, TokenPair, ManagerAuth, CustomerAuth
)
from .order import (
    Order, OrderDetails, OrderSummary, OrderStatus, PaymentStatus, CreateOrderRequest,
    UpdateOrderStatusRequest, OrderFilters, can_transition
)

__all__ = [
    'TimeStampedModel', 'Pagination', 'PaginatedResult',
    'Category', 'CategoryCreate', 'CategoryUpdate',
    'Car', 'CarCreate', 'CarUpdate', 'CarFilters', 'Transmission', 'FuelType', 'Condition',
    'UserRole', 'Manager', 'ManagerPublic', 'Customer', 'CustomerPublic', 'LoginRequest',
    'ManagerRegister', 'CustomerRegister', 'ManagerProfileUpdate', 'CustomerProfileUpdate',
    'ChangePasswordRequest', 'TokenPair', 'ManagerAuth', 'CustomerAuth',
    'Order', 'OrderDetails', 'OrderSummary', 'OrderStatus', 'PaymentStatus', 'CreateOrderRequest',
    'UpdateOrderStatusRequest', 'OrderFilters', 'can_transition',
]
