"""
Pytest configuration and fixtures for the checkout API tests.
Provides a fake gateway, known secrets and a TestClient wired through
dependency overrides.
"""
import json
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.core.config import Settings
from app.core.errors import GatewayError
from app.core.security import compute_signature, payment_signature_message
from app.main import app
from app.schemas.payments import GatewayOrder, PaymentDetails
from app.services.fulfillment import FulfillmentSink
from app.services.payments.base import PaymentsProvider

KEY_ID = "rzp_test_key123"
KEY_SECRET = "order_secret_abc"
WEBHOOK_SECRET = "webhook_secret_xyz"


class FakeGateway(PaymentsProvider):
    """records calls, can be told to fail."""

    name = "fake"

    def __init__(self):
        self.created: List[Dict[str, Any]] = []
        self.fetched: List[str] = []
        self.fail_create: Optional[str] = None
        self.fail_fetch: Optional[str] = None

    def create_order(self, amount_minor, currency, receipt, notes=None):
        self.created.append(
            {"amount": amount_minor, "currency": currency, "receipt": receipt, "notes": notes}
        )
        if self.fail_create:
            raise GatewayError(self.fail_create)
        return GatewayOrder(id="order_test001", amount=amount_minor, currency=currency, receipt=receipt, status="created")

    def fetch_payment(self, payment_id):
        self.fetched.append(payment_id)
        if self.fail_fetch:
            raise GatewayError(self.fail_fetch)
        return PaymentDetails(
            id=payment_id,
            order_id="order_test001",
            amount=4999,
            currency="INR",
            status="captured",
            method="upi",
            created_at=1700000000,
        )

    def health_check(self):
        return {"status": "ok", "provider": "fake"}


class RecordingFulfillment(FulfillmentSink):
    def __init__(self):
        self.calls: List[tuple] = []
        self.explode = False

    def _record(self, *call):
        self.calls.append(call)
        if self.explode:
            raise RuntimeError("fulfillment down")

    def payment_captured(self, payment):
        self._record("payment_captured", payment)

    def payment_failed(self, payment, error_description):
        self._record("payment_failed", payment, error_description)

    def order_paid(self, order):
        self._record("order_paid", order)


@pytest.fixture
def test_settings():
    s = Settings()
    s.RAZORPAY_KEY_ID = KEY_ID
    s.RAZORPAY_KEY_SECRET = KEY_SECRET
    s.RAZORPAY_WEBHOOK_SECRET = WEBHOOK_SECRET
    s.DEFAULT_CURRENCY = "INR"
    return s


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def fulfillment():
    return RecordingFulfillment()


@pytest.fixture
def client(test_settings, gateway, fulfillment):
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_gateway] = lambda: gateway
    app.dependency_overrides[deps.get_fulfillment] = lambda: fulfillment
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def sign_confirmation(order_id: str, payment_id: str, secret: str = KEY_SECRET) -> str:
    return compute_signature(secret, payment_signature_message(order_id, payment_id))


def webhook_body(event: str, **payload: Any) -> bytes:
    body: Dict[str, Any] = {"entity": "event", "event": event, "payload": payload, "created_at": 1700000000}
    return json.dumps(body).encode("utf-8")
