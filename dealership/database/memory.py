# dealership/database/memory.py
"""In-process storage with the same repository surface as `Database`.

A transaction works on a private copy of the tables and swaps it in on
commit; on error the copy is dropped. Transactions and writes made outside a
transaction are serialized by one asyncio.Lock. Plain reads take no lock and
see the last committed state, so they never wait behind a running
transaction (such as a payment waiting on its processor).
"""
import asyncio
import logging
from contextlib import asynccontextmanager, nullcontext
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Tuple
from ..errors import ConflictError
from ..models.car import Car, CarFilters
from ..models.category import Category
from ..models.order import Order, OrderFilters
from ..models.user import Customer, Manager

TABLES = ("categories", "cars", "orders", "managers", "customers")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryState:
    def __init__(self):
        self.tables: Dict[str, Dict[int, Any]] = {name: {} for name in TABLES}
        self.sequences: Dict[str, int] = {name: 0 for name in TABLES}

    def copy(self) -> "MemoryState":
        state = MemoryState()
        state.tables = {name: dict(rows) for name, rows in self.tables.items()}
        state.sequences = dict(self.sequences)
        return state

    def replace(self, other: "MemoryState"):
        self.tables = other.tables
        self.sequences = other.sequences


class MemoryRepository:
    table: str = ""
    key: str = ""
    model = None
    label: str = "Record"
    unique_fields: Tuple[str, ...] = ()

    def __init__(self, state: MemoryState, lock: Optional[asyncio.Lock] = None):
        self.state = state
        self._lock = lock

    def _guard(self):
        return self._lock if self._lock is not None else nullcontext()

    @property
    def _rows(self) -> Dict[int, Any]:
        return self.state.tables[self.table]

    def _check_unique(self, values: Dict[str, Any], exclude_id: Optional[int] = None):
        for field in self.unique_fields:
            value = values.get(field)
            if value is None:
                continue
            for item_id, record in self._rows.items():
                if item_id != exclude_id and getattr(record, field) == value:
                    raise ConflictError(f"{self.label} already exists")

    def _page(self, predicate: Callable[[Any], bool], sort_key: Callable[[Any], Any],
              descending: bool, page: int, limit: int) -> Tuple[List[Any], int]:
        matched = sorted(
            (record for record in self._rows.values() if predicate(record)),
            key=sort_key,
            reverse=descending
        )
        start = (page - 1) * limit
        return matched[start:start + limit], len(matched)

    async def get(self, item_id: int):
        return self._rows.get(item_id)

    async def get_many(self, item_ids: List[int]) -> Dict[int, Any]:
        rows = self._rows
        return {item_id: rows[item_id] for item_id in set(item_ids) if item_id in rows}

    async def get_for_update(self, item_id: int):
        # Transactions are already exclusive
        return await self.get(item_id)

    async def create(self, data: Dict[str, Any]):
        async with self._guard():
            self._check_unique(data)
            self.state.sequences[self.table] += 1
            now = _now()
            record = self.model.model_validate({
                **data,
                self.key: self.state.sequences[self.table],
                'created_at': now,
                'updated_at': now,
            })
            self._rows[getattr(record, self.key)] = record
            return record

    async def update(self, item_id: int, data: Dict[str, Any]):
        async with self._guard():
            current = self._rows.get(item_id)
            if current is None:
                return None
            self._check_unique(data, exclude_id=item_id)
            record = self.model.model_validate({
                **current.model_dump(),
                **data,
                'updated_at': _now(),
            })
            self._rows[item_id] = record
            return record


class MemoryCategoryRepository(MemoryRepository):
    table = "categories"
    key = "category_id"
    model = Category
    label = "Category"

    async def get(self, category_id: int, active_only: bool = False) -> Optional[Category]:
        category = self._rows.get(category_id)
        if category is None or (active_only and not category.is_active):
            return None
        return category

    async def list(self, active_only: bool = True) -> List[Category]:
        return sorted(
            (c for c in self._rows.values() if c.is_active or not active_only),
            key=lambda c: c.name
        )


class MemoryCarRepository(MemoryRepository):
    table = "cars"
    key = "car_id"
    model = Car
    label = "Car"
    unique_fields = ("vin",)

    async def find_duplicate(self, manager_id: int, spec: Dict[str, Any],
                             exclude_id: Optional[int] = None) -> Optional[Car]:
        for car in self._rows.values():
            if car.car_id == exclude_id or car.manager_id != manager_id:
                continue
            if all(getattr(car, field) == value for field, value in spec.items()):
                return car
        return None

    async def find(self, filters: CarFilters, page: int, limit: int,
                   sort_field: str = "created_at", descending: bool = True) -> Tuple[List[Car], int]:
        def matches(car: Car) -> bool:
            if filters.brand and filters.brand.lower() not in car.brand.lower():
                return False
            if filters.model_name and filters.model_name.lower() not in car.model_name.lower():
                return False
            for field in ('category_id', 'available', 'year', 'transmission',
                          'fuel_type', 'condition'):
                expected = getattr(filters, field)
                if expected is not None and getattr(car, field) != expected:
                    return False
            if filters.min_price is not None and car.price < filters.min_price:
                return False
            if filters.max_price is not None and car.price > filters.max_price:
                return False
            return True

        return self._page(matches, lambda c: (getattr(c, sort_field), c.car_id),
                          descending, page, limit)

    async def delete(self, car_id: int) -> bool:
        async with self._guard():
            return self._rows.pop(car_id, None) is not None

    async def decrement_stock(self, car_id: int, quantity: int) -> Optional[Car]:
        async with self._guard():
            car = self._rows.get(car_id)
            if car is None or car.quantity < quantity:
                return None
            remaining = car.quantity - quantity
            car = car.model_copy(update={
                'quantity': remaining,
                'available': remaining > 0,
                'updated_at': _now(),
            })
            self._rows[car_id] = car
            return car

    async def restore_stock(self, car_id: int, quantity: int) -> Optional[Car]:
        async with self._guard():
            car = self._rows.get(car_id)
            if car is None:
                return None
            car = car.model_copy(update={
                'quantity': car.quantity + quantity,
                'available': True,
                'updated_at': _now(),
            })
            self._rows[car_id] = car
            return car


class MemoryOrderRepository(MemoryRepository):
    table = "orders"
    key = "order_id"
    model = Order
    label = "Order"
    unique_fields = ("payment_reference", "transaction_id")

    async def find(self, filters: OrderFilters, page: int, limit: int) -> Tuple[List[Order], int]:
        def matches(order: Order) -> bool:
            for field in ('status', 'payment_status', 'customer_id', 'car_id'):
                expected = getattr(filters, field)
                if expected is not None and getattr(order, field) != expected:
                    return False
            if filters.start_date and order.created_at < filters.start_date:
                return False
            if filters.end_date and order.created_at > filters.end_date:
                return False
            return True

        return self._page(matches, lambda o: (o.created_at, o.order_id), True, page, limit)


class MemoryUserRepository(MemoryRepository):
    unique_fields = ("email",)

    async def get_by_email(self, email: str):
        for user in self._rows.values():
            if user.email == email:
                return user
        return None

    async def list(self, page: int, limit: int):
        return self._page(lambda u: True,
                          lambda u: (u.created_at, getattr(u, self.key)),
                          True, page, limit)


class MemoryManagerRepository(MemoryUserRepository):
    table = "managers"
    key = "manager_id"
    model = Manager
    label = "Manager"


class MemoryCustomerRepository(MemoryUserRepository):
    table = "customers"
    key = "customer_id"
    model = Customer
    label = "Customer"


class MemorySession:
    def __init__(self, state: MemoryState, lock: Optional[asyncio.Lock] = None):
        self.categories = MemoryCategoryRepository(state, lock)
        self.cars = MemoryCarRepository(state, lock)
        self.orders = MemoryOrderRepository(state, lock)
        self.managers = MemoryManagerRepository(state, lock)
        self.customers = MemoryCustomerRepository(state, lock)


class MemoryDatabase(MemorySession):
    """Storage kept in process memory, for tests and sandbox runs"""

    def __init__(self):
        self.state = MemoryState()
        self._lock = asyncio.Lock()
        self.logger = logging.getLogger(__name__)
        super().__init__(self.state, self._lock)

    async def connect(self):
        self.logger.info("Using in-memory storage")

    async def close(self):
        pass

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[MemorySession]:
        async with self._lock:
            working = self.state.copy()
            yield MemorySession(working)
            self.state.replace(working)
