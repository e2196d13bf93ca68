# dealership/database/database.py
import asyncpg
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional
from .repositories import (
    PgCarRepository,
    PgCategoryRepository,
    PgCustomerRepository,
    PgManagerRepository,
    PgOrderRepository,
)


class Session:
    """Repositories sharing one executor"""

    def __init__(self, executor):
        self.categories = PgCategoryRepository(executor)
        self.cars = PgCarRepository(executor)
        self.orders = PgOrderRepository(executor)
        self.managers = PgManagerRepository(executor)
        self.customers = PgCustomerRepository(executor)


class Database:
    """PostgreSQL storage on an asyncpg pool"""

    def __init__(self, dsn: str, min_size: int = 2, max_size: int = 10):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.pool: Optional[asyncpg.Pool] = None
        self._session: Optional[Session] = None
        self.logger = logging.getLogger(__name__)

    async def connect(self):
        """Open the pool and apply pending migrations"""
        try:
            self.pool = await asyncpg.create_pool(
                self.dsn,
                min_size=self.min_size,
                max_size=self.max_size
            )

            await self._run_migrations()
            self._session = Session(self.pool)

            self.logger.info("Database connection established")
        except Exception as e:
            self.logger.error(f"Database connection failed: {e}")
            raise

    async def close(self):
        if self.pool:
            await self.pool.close()
            self._session = None
            self.logger.info("Database connection closed")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Session]:
        """Yield repositories bound to one connection inside a transaction"""
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                yield Session(conn)

    def _require_session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Database is not connected")
        return self._session

    @property
    def categories(self):
        return self._require_session().categories

    @property
    def cars(self):
        return self._require_session().cars

    @property
    def orders(self):
        return self._require_session().orders

    @property
    def managers(self):
        return self._require_session().managers

    @property
    def customers(self):
        return self._require_session().customers

    async def _run_migrations(self):
        try:
            migrations_path = Path(__file__).parent / "migrations"

            async with self.pool.acquire() as conn:
                await conn.execute("""
                    CREATE TABLE IF NOT EXISTS migrations (
                        id SERIAL PRIMARY KEY,
                        name VARCHAR(255) NOT NULL,
                        applied_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
                    )
                """)

                for migration_file in sorted(migrations_path.glob("*.sql")):
                    migration_name = migration_file.name

                    is_applied = await conn.fetchval(
                        "SELECT COUNT(*) FROM migrations WHERE name = $1",
                        migration_name
                    )

                    if not is_applied:
                        async with conn.transaction():
                            await conn.execute(migration_file.read_text())
                            await conn.execute(
                                "INSERT INTO migrations (name) VALUES ($1)",
                                migration_name
                            )

                        self.logger.info(f"Migration {migration_name} applied")

        except Exception as e:
            self.logger.error(f"Running migrations failed: {e}")
            raise
