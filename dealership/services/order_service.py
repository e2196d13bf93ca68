# dealership/services/order_service.py
import logging
from datetime import datetime, timezone
from typing import List, Optional
from ..config import OrderSettings
from ..errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PaymentFailedError,
    RequestValidationError,
)
from ..models.base import PaginatedResult, Pagination
from ..models.order import (
    CarSummary,
    CreateOrderRequest,
    CustomerSummary,
    ManagerSummary,
    Order,
    OrderDetails,
    OrderFilters,
    OrderStatus,
    OrderSummary,
    PaymentStatus,
    UpdateOrderStatusRequest,
    can_transition,
)
from ..models.user import UserRole
from ..utils.identifiers import generate_reference
from .inventory_service import InventoryService
from .payment_service import PaymentProcessor


class OrderService:
    """Order lifecycle: creation, payment, manager decision and queries"""

    def __init__(self, db, payment_processor: PaymentProcessor, settings: OrderSettings):
        self.db = db
        self.payment_processor = payment_processor
        self.settings = settings
        self.inventory = InventoryService(db)
        self.logger = logging.getLogger(__name__)

    def _check_notes(self, notes: Optional[str]):
        if notes is not None and len(notes) > self.settings.notes_max_length:
            raise RequestValidationError(
                f"Notes cannot exceed {self.settings.notes_max_length} characters"
            )

    async def create_order(self, customer_id: int, order_data: CreateOrderRequest) -> Order:
        """Price and persist a pending order; stock is checked, not reserved"""
        self._check_notes(order_data.notes)
        if order_data.quantity > self.settings.max_quantity:
            raise RequestValidationError(
                f"Quantity cannot exceed {self.settings.max_quantity}"
            )

        car = await self.inventory.check_availability(order_data.car_id, order_data.quantity)

        order = await self.db.orders.create({
            'car_id': car.car_id,
            'customer_id': customer_id,
            'quantity': order_data.quantity,
            'total_price': car.price * order_data.quantity,
            'payment_reference': generate_reference(self.settings.payment_reference_prefix),
            'notes': order_data.notes,
            'status': OrderStatus.PENDING_PAYMENT,
            'payment_status': PaymentStatus.PENDING,
        })

        self.logger.info(
            f"Order {order.order_id} created for customer {customer_id}: "
            f"{order.quantity} x car {car.car_id}, total {order.total_price}"
        )
        return order

    async def process_payment(self, order_id: int, customer_id: int) -> Order:
        """Charge a pending order and take its units out of stock.

        Runs as one transaction: the order and car rows are re-read under
        lock, so two attempts on the same order (or on the last units of a
        car) cannot both succeed. A declined attempt commits only
        `payment_status = failed` and leaves the order retryable.
        """
        async with self.db.transaction() as session:
            order = await session.orders.get_for_update(order_id)
            if not order:
                raise NotFoundError('Order not found')

            if order.customer_id != customer_id:
                raise ConflictError('Not authorized to process this order')

            if order.status != OrderStatus.PENDING_PAYMENT:
                raise ConflictError('Order is not in pending payment status')

            car = await session.cars.get_for_update(order.car_id)
            if not car or car.quantity < order.quantity:
                raise ConflictError('Car no longer available')

            result = await self.payment_processor.attempt(order)

            if result.success:
                await self.inventory.decrement(order.car_id, order.quantity, session=session)
                order = await session.orders.update(order_id, {
                    'status': OrderStatus.PAID,
                    'payment_status': PaymentStatus.COMPLETED,
                    'transaction_id': result.transaction_id,
                })
            else:
                order = await session.orders.update(order_id, {
                    'payment_status': PaymentStatus.FAILED,
                })

        if not result.success:
            self.logger.warning(f"Payment failed for order {order_id}: {result.error}")
            raise PaymentFailedError(f"Payment failed: {result.error}")

        self.logger.info(f"Order {order_id} paid, transaction {order.transaction_id}")
        return order

    async def update_order_status(self, order_id: int, manager_id: int,
                                  update_data: UpdateOrderStatusRequest) -> Order:
        """Confirm or reject a paid order; rejection puts the units back"""
        self._check_notes(update_data.notes)

        async with self.db.transaction() as session:
            order = await session.orders.get_for_update(order_id)
            if not order:
                raise NotFoundError('Order not found')

            if order.status != OrderStatus.PAID or not can_transition(order.status, update_data.status):
                raise ConflictError('Order must be paid before status update')

            if update_data.status == OrderStatus.REJECTED:
                if await session.cars.get_for_update(order.car_id):
                    await self.inventory.restore(order.car_id, order.quantity, session=session)
                else:
                    self.logger.warning(
                        f"Car {order.car_id} of rejected order {order_id} no longer exists"
                    )

            changes = {
                'status': update_data.status,
                'approved_by': manager_id,
                'approved_at': datetime.now(timezone.utc),
            }
            if update_data.notes is not None:
                changes['notes'] = update_data.notes
            order = await session.orders.update(order_id, changes)

        self.logger.info(f"Order {order_id} {order.status.value} by manager {manager_id}")
        return order

    async def _summarize(self, orders: List[Order], with_parties: bool) -> List[OrderSummary]:
        """Attach car, customer and approver views, one lookup per table"""
        cars = await self.db.cars.get_many([o.car_id for o in orders])
        customers, approvers = {}, {}
        if with_parties:
            customers = await self.db.customers.get_many([o.customer_id for o in orders])
            approvers = await self.db.managers.get_many(
                [o.approved_by for o in orders if o.approved_by]
            )

        summaries = []
        for order in orders:
            car = cars.get(order.car_id)
            customer = customers.get(order.customer_id)
            approver = approvers.get(order.approved_by)
            summaries.append(OrderSummary(
                **order.model_dump(),
                car=CarSummary.model_validate(car.model_dump()) if car else None,
                customer=CustomerSummary.model_validate(customer.model_dump()) if customer else None,
                approver=ManagerSummary.model_validate(approver.model_dump()) if approver else None,
            ))
        return summaries

    async def _find(self, filters: OrderFilters, page: int, limit: Optional[int],
                    with_parties: bool) -> PaginatedResult:
        limit = limit or self.settings.page_size
        if page < 1 or limit < 1:
            raise RequestValidationError('Page and limit must be positive')

        orders, total = await self.db.orders.find(filters, page, limit)
        return PaginatedResult(
            items=await self._summarize(orders, with_parties),
            pagination=Pagination.build(page, limit, total)
        )

    async def get_orders(self, filters: Optional[OrderFilters] = None, page: int = 1,
                         limit: Optional[int] = None) -> PaginatedResult:
        """All orders matching `filters`, newest first, with car and parties"""
        return await self._find(filters or OrderFilters(), page, limit, with_parties=True)

    async def get_customer_orders(self, customer_id: int, page: int = 1,
                                  limit: Optional[int] = None) -> PaginatedResult:
        """The customer's own orders with their cars"""
        return await self._find(OrderFilters(customer_id=customer_id), page, limit,
                                with_parties=False)

    async def get_order_by_id(self, order_id: int, requester_id: Optional[int] = None,
                              requester_role: Optional[UserRole] = None) -> OrderDetails:
        """Order with car, customer and approver resolved.

        Customers only see their own orders.
        """
        order = await self.db.orders.get(order_id)
        if not order:
            raise NotFoundError('Order not found')

        if requester_role == UserRole.CUSTOMER and order.customer_id != requester_id:
            raise ForbiddenError('Not authorized to view this order')

        car = await self.db.cars.get(order.car_id)
        customer = await self.db.customers.get(order.customer_id)
        approver = await self.db.managers.get(order.approved_by) if order.approved_by else None

        return OrderDetails(
            **order.model_dump(),
            car=car,
            customer=customer.public() if customer else None,
            approver=approver.public() if approver else None,
        )
