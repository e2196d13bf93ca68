# dealership/database/repositories.py
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import asyncpg
from ..errors import ConflictError
from ..models.car import Car, CarFilters
from ..models.category import Category
from ..models.order import Order, OrderFilters
from ..models.user import Customer, Manager


def _param(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class PgRepository:
    """Table access over an asyncpg pool or a single connection"""
    table: str = ""
    key: str = ""
    model = None
    label: str = "Record"

    def __init__(self, executor):
        # Pool outside a transaction, Connection inside one
        self.executor = executor

    def _to_model(self, row):
        return self.model.model_validate(dict(row)) if row else None

    async def get(self, item_id: int):
        row = await self.executor.fetchrow(
            f"SELECT * FROM {self.table} WHERE {self.key} = $1", item_id
        )
        return self._to_model(row)

    async def get_many(self, item_ids: List[int]) -> Dict[int, Any]:
        """Rows for the given ids, keyed by id; missing ids are left out"""
        if not item_ids:
            return {}
        rows = await self.executor.fetch(
            f"SELECT * FROM {self.table} WHERE {self.key} = ANY($1::bigint[])",
            list(set(item_ids))
        )
        return {row[self.key]: self._to_model(row) for row in rows}

    async def get_for_update(self, item_id: int):
        """Read a row and lock it until the surrounding transaction ends"""
        row = await self.executor.fetchrow(
            f"SELECT * FROM {self.table} WHERE {self.key} = $1 FOR UPDATE", item_id
        )
        return self._to_model(row)

    async def create(self, data: Dict[str, Any]):
        columns = list(data.keys())
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        try:
            row = await self.executor.fetchrow(f"""
                INSERT INTO {self.table} ({', '.join(columns)})
                VALUES ({placeholders})
                RETURNING *
            """, *[_param(v) for v in data.values()])
        except asyncpg.UniqueViolationError as e:
            raise ConflictError(f"{self.label} already exists") from e
        return self._to_model(row)

    async def update(self, item_id: int, data: Dict[str, Any]):
        query_parts = []
        params = []
        param_count = 1

        for key, value in data.items():
            query_parts.append(f"{key} = ${param_count}")
            params.append(_param(value))
            param_count += 1

        query_parts.append("updated_at = CURRENT_TIMESTAMP")
        params.append(item_id)
        query = f"""
            UPDATE {self.table}
            SET {', '.join(query_parts)}
            WHERE {self.key} = ${param_count}
            RETURNING *
        """

        try:
            row = await self.executor.fetchrow(query, *params)
        except asyncpg.UniqueViolationError as e:
            raise ConflictError(f"{self.label} already exists") from e
        return self._to_model(row)

    async def _page(self, where: List[str], params: List[Any], order_by: str,
                    page: int, limit: int) -> Tuple[List[Any], int]:
        where_sql = " AND ".join(where) if where else "TRUE"
        total = await self.executor.fetchval(
            f"SELECT COUNT(*) FROM {self.table} WHERE {where_sql}", *params
        )
        n = len(params)
        rows = await self.executor.fetch(f"""
            SELECT * FROM {self.table}
            WHERE {where_sql}
            ORDER BY {order_by}
            LIMIT ${n + 1} OFFSET ${n + 2}
        """, *params, limit, (page - 1) * limit)
        return [self._to_model(row) for row in rows], total or 0


class PgCategoryRepository(PgRepository):
    table = "categories"
    key = "category_id"
    model = Category
    label = "Category"

    async def get(self, category_id: int, active_only: bool = False) -> Optional[Category]:
        row = await self.executor.fetchrow(f"""
            SELECT * FROM categories
            WHERE category_id = $1 {'AND is_active = true' if active_only else ''}
        """, category_id)
        return self._to_model(row)

    async def list(self, active_only: bool = True) -> List[Category]:
        rows = await self.executor.fetch(f"""
            SELECT * FROM categories
            {'WHERE is_active = true' if active_only else ''}
            ORDER BY name
        """)
        return [self._to_model(row) for row in rows]


class PgCarRepository(PgRepository):
    table = "cars"
    key = "car_id"
    model = Car
    label = "Car"

    async def find_duplicate(self, manager_id: int, spec: Dict[str, Any],
                             exclude_id: Optional[int] = None) -> Optional[Car]:
        query = "SELECT * FROM cars WHERE manager_id = $1"
        params = [manager_id]
        param_index = 2

        for field, value in spec.items():
            query += f" AND {field} = ${param_index}"
            params.append(_param(value))
            param_index += 1

        if exclude_id is not None:
            query += f" AND car_id <> ${param_index}"
            params.append(exclude_id)

        row = await self.executor.fetchrow(query + " LIMIT 1", *params)
        return self._to_model(row)

    async def find(self, filters: CarFilters, page: int, limit: int,
                   sort_field: str = "created_at", descending: bool = True) -> Tuple[List[Car], int]:
        where = []
        params = []

        def add(clause: str, value: Any):
            params.append(_param(value))
            where.append(clause.format(p=f"${len(params)}"))

        if filters.brand:
            add("brand ILIKE '%' || {p} || '%'", filters.brand)
        if filters.model_name:
            add("model_name ILIKE '%' || {p} || '%'", filters.model_name)
        if filters.category_id is not None:
            add("category_id = {p}", filters.category_id)
        if filters.available is not None:
            add("available = {p}", filters.available)
        if filters.year is not None:
            add("year = {p}", filters.year)
        if filters.transmission:
            add("transmission = {p}", filters.transmission)
        if filters.fuel_type:
            add("fuel_type = {p}", filters.fuel_type)
        if filters.condition:
            add("condition = {p}", filters.condition)
        if filters.min_price is not None:
            add("price >= {p}", filters.min_price)
        if filters.max_price is not None:
            add("price <= {p}", filters.max_price)

        order_by = f"{sort_field} {'DESC' if descending else 'ASC'}, car_id DESC"
        return await self._page(where, params, order_by, page, limit)

    async def delete(self, car_id: int) -> bool:
        result = await self.executor.execute(
            "DELETE FROM cars WHERE car_id = $1", car_id
        )
        return result == "DELETE 1"

    async def decrement_stock(self, car_id: int, quantity: int) -> Optional[Car]:
        """Take units out of stock; None when fewer than `quantity` remain"""
        row = await self.executor.fetchrow("""
            UPDATE cars
            SET quantity = quantity - $1,
                available = (quantity - $1) > 0,
                updated_at = CURRENT_TIMESTAMP
            WHERE car_id = $2 AND quantity >= $1
            RETURNING *
        """, quantity, car_id)
        return self._to_model(row)

    async def restore_stock(self, car_id: int, quantity: int) -> Optional[Car]:
        row = await self.executor.fetchrow("""
            UPDATE cars
            SET quantity = quantity + $1,
                available = true,
                updated_at = CURRENT_TIMESTAMP
            WHERE car_id = $2
            RETURNING *
        """, quantity, car_id)
        return self._to_model(row)


class PgOrderRepository(PgRepository):
    table = "orders"
    key = "order_id"
    model = Order
    label = "Order"

    async def find(self, filters: OrderFilters, page: int, limit: int) -> Tuple[List[Order], int]:
        where = []
        params = []

        def add(clause: str, value: Any):
            params.append(_param(value))
            where.append(clause.format(p=f"${len(params)}"))

        if filters.status:
            add("status = {p}", filters.status)
        if filters.payment_status:
            add("payment_status = {p}", filters.payment_status)
        if filters.customer_id is not None:
            add("customer_id = {p}", filters.customer_id)
        if filters.car_id is not None:
            add("car_id = {p}", filters.car_id)
        if filters.start_date:
            add("created_at >= {p}", filters.start_date)
        if filters.end_date:
            add("created_at <= {p}", filters.end_date)

        return await self._page(where, params, "created_at DESC, order_id DESC", page, limit)


class PgUserRepository(PgRepository):

    async def get_by_email(self, email: str):
        row = await self.executor.fetchrow(
            f"SELECT * FROM {self.table} WHERE email = $1", email
        )
        return self._to_model(row)

    async def list(self, page: int, limit: int):
        return await self._page([], [], f"created_at DESC, {self.key} DESC", page, limit)


class PgManagerRepository(PgUserRepository):
    table = "managers"
    key = "manager_id"
    model = Manager
    label = "Manager"


class PgCustomerRepository(PgUserRepository):
    table = "customers"
    key = "customer_id"
    model = Customer
    label = "Customer"
