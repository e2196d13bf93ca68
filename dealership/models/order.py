# dealership/models/order.py
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, FrozenSet, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from .base import TimeStampedModel
from .car import Car
from .user import CustomerPublic, ManagerPublic


class OrderStatus(str, Enum):
    PENDING_PAYMENT = "pending_payment"
    PAID = "paid"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# Allowed forward moves. CANCELLED is reachable but no operation triggers it yet.
ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING_PAYMENT: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.CONFIRMED, OrderStatus.REJECTED}),
    OrderStatus.CONFIRMED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REJECTED: frozenset(),
}

# Statuses a manager may set on a paid order
MANAGER_DECISIONS = (OrderStatus.CONFIRMED, OrderStatus.REJECTED)


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS.get(current, frozenset())


class Order(TimeStampedModel):
    """Order for N units of one car listing"""
    order_id: int
    car_id: int
    customer_id: int
    quantity: int
    total_price: Decimal
    status: OrderStatus = OrderStatus.PENDING_PAYMENT
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: str
    transaction_id: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    notes: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return not ORDER_TRANSITIONS[self.status]


class OrderDetails(Order):
    """Order with its car, customer and approver resolved"""
    car: Optional[Car] = None
    customer: Optional[CustomerPublic] = None
    approver: Optional[ManagerPublic] = None


class CreateOrderRequest(BaseModel):
    car_id: int
    quantity: int = Field(ge=1)
    notes: Optional[str] = None


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus
    notes: Optional[str] = None

    @field_validator('status')
    @classmethod
    def check_decision(cls, value: OrderStatus) -> OrderStatus:
        if value not in MANAGER_DECISIONS:
            raise ValueError("Status must be either confirmed or rejected")
        return value


class OrderFilters(BaseModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    customer_id: Optional[int] = None
    car_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator('start_date', 'end_date')
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Dates without an offset are read as UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class CarSummary(BaseModel):
    car_id: int
    brand: str
    model_name: str
    year: int
    price: Decimal

    model_config = ConfigDict(protected_namespaces=())


class CustomerSummary(BaseModel):
    customer_id: int
    name: str
    email: str


class ManagerSummary(BaseModel):
    manager_id: int
    name: str
    email: str


class OrderSummary(Order):
    """List entry: the order plus a short view of its car and parties"""
    car: Optional[CarSummary] = None
    customer: Optional[CustomerSummary] = None
    approver: Optional[ManagerSummary] = None
