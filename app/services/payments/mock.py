import secrets
import time
from typing import Any, Dict, Optional

from app.schemas.payments import GatewayOrder, PaymentDetails
from .base import PaymentsProvider


class MockPayments(PaymentsProvider):
    """offline gateway for local development, every payment comes back captured."""

    name = "mock"

    def __init__(self, currency: str = "INR"):
        self.currency = currency
        # only the latest order, an offline checkout pays for one order at a time
        self.last_order: Optional[GatewayOrder] = None

    def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        order = GatewayOrder(
            id=f"order_{secrets.token_hex(7)}",
            amount=amount_minor,
            currency=currency,
            receipt=receipt,
            status="created",
        )
        self.last_order = order
        return order

    def fetch_payment(self, payment_id: str) -> PaymentDetails:
        order = self.last_order
        return PaymentDetails(
            id=payment_id,
            order_id=order.id if order else None,
            amount=order.amount if order else 0,
            currency=order.currency if order else self.currency,
            status="captured",
            method="card",
            created_at=int(time.time()),
        )

    def health_check(self) -> Dict[str, str]:
        return {"status": "ok", "provider": "mock"}
