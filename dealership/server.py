# dealership/server.py
import logging
from typing import Optional
from aiohttp import web
from .config import AuthSettings, Config, OrderSettings
from .database import create_database
from .handlers import (
    CarHandler,
    CategoryHandler,
    CustomerHandler,
    ManagerHandler,
    OrderHandler,
    error_middleware,
    request_logger,
)
from .services import (
    CarService,
    CategoryService,
    CustomerService,
    GatewayPaymentProcessor,
    ManagerService,
    OrderService,
    PaymentProcessor,
    SimulatedPaymentProcessor,
)
from .utils import responses

logger = logging.getLogger(__name__)


class Services:
    """Everything the handlers need, wired against one storage backend"""

    def __init__(self, db, payment_processor: PaymentProcessor,
                 order_settings: OrderSettings, auth_settings: AuthSettings):
        self.db = db
        self.order_settings = order_settings
        self.auth_settings = auth_settings
        self.orders = OrderService(db, payment_processor, order_settings)
        self.cars = CarService(db)
        self.categories = CategoryService(db)
        self.managers = ManagerService(db, auth_settings)
        self.customers = CustomerService(db, auth_settings)


def default_payment_processor(settings: OrderSettings) -> PaymentProcessor:
    if Config.PAYMENT_GATEWAY_URL:
        return GatewayPaymentProcessor(Config.PAYMENT_GATEWAY_URL)
    return SimulatedPaymentProcessor(settings)


class DealershipServer:
    def __init__(self, db=None, payment_processor: Optional[PaymentProcessor] = None,
                 order_settings: Optional[OrderSettings] = None,
                 auth_settings: Optional[AuthSettings] = None,
                 api_prefix: Optional[str] = None):
        """Build the application; omitted collaborators come from Config"""
        order_settings = order_settings or Config.order_settings()
        self.db = db if db is not None else create_database(Config)
        self.services = Services(
            self.db,
            payment_processor or default_payment_processor(order_settings),
            order_settings,
            auth_settings or Config.auth_settings(),
        )
        self.api_prefix = (api_prefix if api_prefix is not None else Config.API_PREFIX).rstrip('/')
        self.runner: Optional[web.AppRunner] = None

        self.app = web.Application(middlewares=[request_logger, error_middleware])
        self.app.on_startup.append(self._on_startup)
        self.app.on_cleanup.append(self._on_cleanup)
        self.setup_routes()

    async def _on_startup(self, app: web.Application):
        await self.db.connect()

    async def _on_cleanup(self, app: web.Application):
        await self.db.close()

    @staticmethod
    async def health(request: web.Request) -> web.Response:
        return responses.success({'status': 'ok'})

    def setup_routes(self):
        """Register the HTTP routes"""
        orders = OrderHandler(self.services)
        cars = CarHandler(self.services)
        categories = CategoryHandler(self.services)
        managers = ManagerHandler(self.services)
        customers = CustomerHandler(self.services)
        prefix = self.api_prefix

        self.app.router.add_routes([
            web.get('/health', self.health),

            # Orders; my-orders must precede the id route
            web.post(f'{prefix}/orders', orders.create_order),
            web.get(f'{prefix}/orders', orders.get_orders),
            web.get(f'{prefix}/orders/my-orders', orders.get_my_orders),
            web.get(r'%s/orders/{order_id:\d+}' % prefix, orders.get_order_by_id),
            web.post(r'%s/orders/{order_id:\d+}/payment' % prefix, orders.process_payment),
            web.patch(r'%s/orders/{order_id:\d+}/status' % prefix, orders.update_order_status),

            # Categories
            web.get(f'{prefix}/cars/categories', categories.get_all),
            web.post(f'{prefix}/cars/categories', categories.create),
            web.put(r'%s/cars/categories/{id:\d+}' % prefix, categories.update),
            web.delete(r'%s/cars/categories/{id:\d+}' % prefix, categories.delete),

            # Cars
            web.get(f'{prefix}/cars', cars.find_all),
            web.post(f'{prefix}/cars', cars.create),
            web.get(r'%s/cars/{id:\d+}' % prefix, cars.find_by_id),
            web.put(r'%s/cars/{id:\d+}' % prefix, cars.update),
            web.delete(r'%s/cars/{id:\d+}' % prefix, cars.remove),

            # Managers
            web.post(f'{prefix}/managers/register', managers.register),
            web.post(f'{prefix}/managers/login', managers.login),
            web.get(f'{prefix}/managers/profile', managers.get_profile),
            web.patch(f'{prefix}/managers/profile', managers.update_profile),
            web.post(f'{prefix}/managers/change-password', managers.change_password),

            # Customers
            web.post(f'{prefix}/customers/register', customers.register),
            web.post(f'{prefix}/customers/login', customers.login),
            web.get(f'{prefix}/customers/profile', customers.get_profile),
            web.patch(f'{prefix}/customers/profile', customers.update_profile),
            web.get(f'{prefix}/customers', customers.find_all),
        ])

    async def start(self, host: Optional[str] = None, port: Optional[int] = None):
        host = host or Config.HOST
        port = port or Config.PORT

        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        site = web.TCPSite(self.runner, host, port)
        await site.start()
        logger.info(f"Server listening on http://{host}:{port}{self.api_prefix}")

    async def stop(self):
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
