"""Payment processors"""
import random
from datetime import datetime, timezone
from decimal import Decimal
import pytest
from aiohttp import web
from dealership.config import OrderSettings
from dealership.models.order import Order
from dealership.services import GatewayPaymentProcessor, SimulatedPaymentProcessor


@pytest.fixture
def order():
    return Order(
        order_id=1,
        car_id=1,
        customer_id=1,
        quantity=2,
        total_price=Decimal('70000'),
        payment_reference='PAY_test',
        created_at=datetime.now(timezone.utc),
    )


async def test_simulator_always_succeeds(order):
    processor = SimulatedPaymentProcessor(
        OrderSettings(payment_processing_delay=0, payment_success_rate=1.0)
    )
    result = await processor.attempt(order)

    assert result.success
    assert result.transaction_id.startswith('TXN_')
    assert result.error is None


async def test_simulator_always_fails(order):
    processor = SimulatedPaymentProcessor(
        OrderSettings(payment_processing_delay=0, payment_success_rate=0.0)
    )
    result = await processor.attempt(order)

    assert not result.success
    assert result.transaction_id is None
    assert result.error == 'Payment processing failed'


async def test_simulator_is_reproducible_with_seed(order):
    settings = OrderSettings(payment_processing_delay=0, payment_success_rate=0.5)
    first = SimulatedPaymentProcessor(settings, random.Random(7))
    second = SimulatedPaymentProcessor(settings, random.Random(7))

    outcomes = [(await first.attempt(order)).success for _ in range(20)]
    assert outcomes == [(await second.attempt(order)).success for _ in range(20)]


async def test_transaction_ids_are_unique(order):
    processor = SimulatedPaymentProcessor(
        OrderSettings(payment_processing_delay=0, payment_success_rate=1.0)
    )
    ids = {(await processor.attempt(order)).transaction_id for _ in range(10)}
    assert len(ids) == 10


def gateway_app(status=200, payload=None):
    received = []

    async def charge(request):
        received.append(await request.json())
        return web.json_response(payload or {}, status=status)

    app = web.Application()
    app.router.add_post('/charge', charge)
    return app, received


async def test_gateway_success(aiohttp_server, order):
    app, received = gateway_app(payload={'success': True, 'transaction_id': 'GW-1'})
    server = await aiohttp_server(app)

    result = await GatewayPaymentProcessor(str(server.make_url('/charge'))).attempt(order)

    assert result.success
    assert result.transaction_id == 'GW-1'
    assert received == [{'reference': 'PAY_test', 'amount': '70000'}]


async def test_gateway_decline(aiohttp_server, order):
    app, _ = gateway_app(payload={'success': False, 'error': 'Insufficient funds'})
    server = await aiohttp_server(app)

    result = await GatewayPaymentProcessor(str(server.make_url('/charge'))).attempt(order)

    assert not result.success
    assert result.error == 'Insufficient funds'


async def test_gateway_error_status(aiohttp_server, order):
    app, _ = gateway_app(status=503)
    server = await aiohttp_server(app)

    result = await GatewayPaymentProcessor(str(server.make_url('/charge'))).attempt(order)

    assert not result.success
    assert result.error == 'Payment gateway responded with 503'


async def test_gateway_unreachable(order):
    processor = GatewayPaymentProcessor('http://127.0.0.1:1/charge', timeout=2)

    result = await processor.attempt(order)

    assert not result.success
    assert result.error == 'Payment gateway unavailable'
