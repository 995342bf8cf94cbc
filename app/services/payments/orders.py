import json
import logging
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from app.core.errors import GatewayError, InvalidAmount, NotConfigured
from app.schemas.payments import OrderHandle, OrderRequest
from .base import PaymentsProvider

logger = logging.getLogger(__name__)


def to_minor_units(amount: Decimal) -> int:
    """major -> minor currency units, rounding half up (49.995 -> 5000)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def make_receipt() -> str:
    return f"receipt_{int(time.time() * 1000)}"


class OrderService:
    def __init__(self, gateway: PaymentsProvider, public_key: Optional[str], default_currency: str = "INR"):
        self.gateway = gateway
        self.public_key = public_key
        self.default_currency = default_currency

    def create_order(self, req: OrderRequest) -> OrderHandle:
        """validate the amount and ask the gateway for an order.

        no retry on gateway failure, the browser decides whether to try again.
        """
        currency = (req.currency or self.default_currency).upper()
        logger.info(f"Creating order amount={req.amount} currency={currency} items={len(req.items)}")

        if req.amount is None or not req.amount.is_finite() or req.amount <= 0:
            logger.info(f"Invalid amount received: {req.amount}")
            raise InvalidAmount()
        if not self.public_key:
            raise NotConfigured("Payment gateway key id not configured")

        amount_minor = to_minor_units(req.amount)
        if amount_minor <= 0:
            # rounds to nothing, e.g. 0.001
            raise InvalidAmount()
        receipt = make_receipt()
        notes = {"order_items": json.dumps([item.model_dump(mode="json") for item in req.items])}

        started = time.perf_counter()
        try:
            order = self.gateway.create_order(amount_minor, currency, receipt, notes)
        except GatewayError as e:
            logger.error(f"Gateway failed to create order receipt={receipt}: {e.provider_message}")
            raise GatewayError(e.provider_message, message="Failed to create order", status=e.upstream_status) from e

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Order created order_id={order.id} amount={order.amount} "
            f"currency={order.currency} in {elapsed_ms:.0f}ms"
        )
        return OrderHandle(
            order_id=order.id,
            amount_minor=order.amount,
            currency=order.currency,
            public_key=self.public_key,
        )
