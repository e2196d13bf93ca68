# dealership/services/payment_service.py
import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import Optional
import aiohttp
from pydantic import BaseModel
from ..config import OrderSettings
from ..models.order import Order
from ..utils.identifiers import generate_reference

logger = logging.getLogger(__name__)


class PaymentResult(BaseModel):
    success: bool
    transaction_id: Optional[str] = None
    error: Optional[str] = None


class PaymentProcessor(ABC):
    """Charges an order; the order lifecycle only depends on this"""

    @abstractmethod
    async def attempt(self, order: Order) -> PaymentResult:
        ...


class SimulatedPaymentProcessor(PaymentProcessor):
    """Sandbox gateway: waits, then succeeds with the configured probability"""

    def __init__(self, settings: OrderSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random()

    async def attempt(self, order: Order) -> PaymentResult:
        await asyncio.sleep(self.settings.payment_processing_delay)

        if self.rng.random() < self.settings.payment_success_rate:
            return PaymentResult(
                success=True,
                transaction_id=generate_reference(self.settings.transaction_prefix)
            )

        return PaymentResult(success=False, error=self.settings.payment_error_message)


class GatewayPaymentProcessor(PaymentProcessor):
    """Charges through an HTTP gateway.

    POSTs `{"reference", "amount"}` and expects
    `{"success", "transaction_id", "error"}` back.
    """

    def __init__(self, gateway_url: str, timeout: float = 10.0):
        self.gateway_url = gateway_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def attempt(self, order: Order) -> PaymentResult:
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(
                    self.gateway_url,
                    json={
                        "reference": order.payment_reference,
                        "amount": str(order.total_price)
                    }
                ) as response:
                    if response.status != 200:
                        return PaymentResult(
                            success=False,
                            error=f"Payment gateway responded with {response.status}"
                        )

                    data = await response.json()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Payment gateway unreachable for {order.payment_reference}: {e}")
            return PaymentResult(success=False, error="Payment gateway unavailable")

        if data.get("success") and data.get("transaction_id"):
            return PaymentResult(success=True, transaction_id=data["transaction_id"])

        return PaymentResult(
            success=False,
            error=data.get("error") or "Payment declined"
        )
