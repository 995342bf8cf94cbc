"""
Unit tests for WebhookHandler.
"""
import json

import pytest

from app.core.errors import InvalidPayload, NotConfigured, SignatureMismatch
from app.core.security import compute_signature
from app.services.payments.webhooks import WebhookHandler, parse_event
from tests.conftest import KEY_SECRET, WEBHOOK_SECRET, webhook_body

PAYMENT_ENTITY = {
    "id": "pay_abc123",
    "entity": "payment",
    "order_id": "order_test001",
    "amount": 4999,
    "currency": "INR",
    "status": "captured",
    "method": "card",
    "created_at": 1700000000,
}


@pytest.fixture
def handler(fulfillment):
    return WebhookHandler(WEBHOOK_SECRET, fulfillment)


def signed(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
    return compute_signature(secret, body)


class TestSignature:
    def test_not_configured_rejects_everything(self, fulfillment):
        handler = WebhookHandler(None, fulfillment)
        body = webhook_body("payment.captured", payment={"entity": PAYMENT_ENTITY})

        with pytest.raises(NotConfigured):
            handler.handle(body, signed(body))
        with pytest.raises(NotConfigured):
            handler.handle(body, "bogus")

        assert fulfillment.calls == []

    def test_bad_signature(self, handler, fulfillment):
        body = webhook_body("payment.captured", payment={"entity": PAYMENT_ENTITY})

        with pytest.raises(SignatureMismatch):
            handler.handle(body, "0" * 64)

        assert fulfillment.calls == []

    def test_missing_signature(self, handler):
        body = webhook_body("order.paid", order={"entity": {"id": "order_test001"}})

        with pytest.raises(SignatureMismatch):
            handler.handle(body, None)

    def test_order_secret_does_not_sign_webhooks(self, handler):
        body = webhook_body("payment.captured", payment={"entity": PAYMENT_ENTITY})

        with pytest.raises(SignatureMismatch):
            handler.handle(body, signed(body, secret=KEY_SECRET))

    def test_signature_is_over_raw_bytes(self, handler, fulfillment):
        body = b'{"payload": {"payment": {"entity": ' + json.dumps(PAYMENT_ENTITY).encode() + b'}}, "event": "payment.captured"}'
        reserialized = json.dumps(json.loads(body), sort_keys=True).encode()

        with pytest.raises(SignatureMismatch):
            handler.handle(reserialized, signed(body))

        ack = handler.handle(body, signed(body))
        assert ack.received is True


class TestDispatch:
    def test_payment_captured(self, handler, fulfillment):
        body = webhook_body("payment.captured", payment={"entity": PAYMENT_ENTITY})

        ack = handler.handle(body, signed(body))

        assert ack.received is True
        assert len(fulfillment.calls) == 1
        kind, payment = fulfillment.calls[0]
        assert kind == "payment_captured"
        assert payment.id == "pay_abc123"
        assert payment.amount == 4999

    def test_payment_failed_carries_error_description(self, handler, fulfillment):
        entity = dict(PAYMENT_ENTITY, status="failed", error_description="Payment was declined by the bank")
        body = webhook_body("payment.failed", payment={"entity": entity})

        handler.handle(body, signed(body))

        kind, payment, error = fulfillment.calls[0]
        assert kind == "payment_failed"
        assert error == "Payment was declined by the bank"

    def test_order_paid(self, handler, fulfillment):
        order = {"id": "order_test001", "amount": 4999, "amount_paid": 4999, "currency": "INR", "status": "paid"}
        body = webhook_body("order.paid", order={"entity": order}, payment={"entity": PAYMENT_ENTITY})

        handler.handle(body, signed(body))

        kind, entity = fulfillment.calls[0]
        assert kind == "order_paid"
        assert entity.id == "order_test001"

    def test_unknown_event_is_acknowledged(self, handler, fulfillment):
        body = webhook_body("refund.processed", refund={"entity": {"id": "rfnd_1"}})

        ack = handler.handle(body, signed(body))

        assert ack.received is True
        assert fulfillment.calls == []

    def test_fulfillment_failure_still_acknowledged(self, handler, fulfillment):
        fulfillment.explode = True
        body = webhook_body("payment.captured", payment={"entity": PAYMENT_ENTITY})

        ack = handler.handle(body, signed(body))

        assert ack.received is True
        assert len(fulfillment.calls) == 1


class TestPayload:
    @pytest.mark.parametrize("body", [b"not json", b"[1, 2, 3]", b'{"payload": {}}', b"\xff\xfe"])
    def test_unparseable_body(self, handler, body):
        with pytest.raises(InvalidPayload):
            handler.handle(body, signed(body))

    def test_handled_kind_without_entity(self, handler, fulfillment):
        body = webhook_body("payment.captured")

        with pytest.raises(InvalidPayload):
            handler.handle(body, signed(body))

        assert fulfillment.calls == []

    def test_event_id_from_header(self):
        event = parse_event(webhook_body("order.paid"), event_id="evt_hdr")

        assert event.id == "evt_hdr"

    def test_event_id_in_body_wins(self):
        body = json.dumps({"event": "x.y", "id": "evt_body"}).encode()

        event = parse_event(body, event_id="evt_hdr")

        assert event.id == "evt_body"
