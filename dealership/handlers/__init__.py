"""HTTP handlers"""
from .account_handler import CustomerHandler, ManagerHandler
from .base_handler import BaseHandler
from .car_handler import CarHandler, CategoryHandler
from .middleware import error_middleware, request_logger
from .order_handler import OrderHandler

__all__ = [
    'BaseHandler',
    'CarHandler',
    'CategoryHandler',
    'CustomerHandler',
    'ManagerHandler',
    'OrderHandler',
    'error_middleware',
    'request_logger',
]
