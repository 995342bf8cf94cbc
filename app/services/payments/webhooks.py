import json
import logging
import time
from typing import Callable, Dict, Optional

from pydantic import ValidationError

from app.core.errors import InvalidPayload, NotConfigured, SignatureMismatch
from app.core.security import signature_preview, verify_signature
from app.schemas.payments import WebhookAck, WebhookEvent
from app.services.fulfillment import FulfillmentSink

logger = logging.getLogger(__name__)


def parse_event(raw_body: bytes, event_id: Optional[str] = None) -> WebhookEvent:
    try:
        data = json.loads(raw_body)
    except ValueError as e:
        raise InvalidPayload() from e
    if not isinstance(data, dict):
        raise InvalidPayload()
    try:
        event = WebhookEvent.model_validate(data)
    except ValidationError as e:
        raise InvalidPayload() from e
    if not event.id and event_id:
        event.id = event_id
    return event


class WebhookHandler:
    """verifies and dispatches Razorpay webhook events.

    the signature covers the raw request body exactly as received, so the body
    must never be re-serialized before checking it.
    """

    def __init__(self, webhook_secret: Optional[str], fulfillment: FulfillmentSink):
        self.webhook_secret = webhook_secret
        self.fulfillment = fulfillment
        self._handlers: Dict[str, Callable[[WebhookEvent], None]] = {
            "payment.captured": self._payment_captured,
            "payment.failed": self._payment_failed,
            "order.paid": self._order_paid,
        }

    def handle(self, raw_body: bytes, signature: Optional[str], event_id: Optional[str] = None) -> WebhookAck:
        started = time.perf_counter()
        logger.info(f"Webhook received has_signature={bool(signature)} has_secret={bool(self.webhook_secret)}")

        if not self.webhook_secret:
            logger.warning("Webhook rejected: secret not configured")
            raise NotConfigured("Webhook secret not configured")

        ok = verify_signature(self.webhook_secret, raw_body, signature)
        logger.info(f"Webhook signature received={signature_preview(signature)} match={ok}")
        if not ok:
            logger.warning("Webhook signature verification failed")
            raise SignatureMismatch("Invalid webhook signature")

        event = parse_event(raw_body, event_id)
        logger.info(f"Webhook event kind={event.event} id={event.id}")

        handler = self._handlers.get(event.event)
        if handler is None:
            logger.info(f"Unhandled webhook event type: {event.event}")
        else:
            # entity shape is part of parsing, a broken one is a bad payload
            try:
                handler(event)
            except (KeyError, ValidationError) as e:
                logger.error(f"Malformed {event.event} payload: {e}")
                raise InvalidPayload() from e

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"Webhook processed kind={event.event} in {elapsed_ms:.0f}ms")
        return WebhookAck()

    def _deliver(self, event: WebhookEvent, send: Callable[[], None]) -> None:
        # the gateway only needs to know we got it, fulfillment problems stay on our side
        try:
            send()
        except Exception:
            logger.exception(f"Fulfillment failed for {event.event} event id={event.id}")

    def _payment_captured(self, event: WebhookEvent) -> None:
        payment = event.payment()
        self._deliver(event, lambda: self.fulfillment.payment_captured(payment))

    def _payment_failed(self, event: WebhookEvent) -> None:
        payment = event.payment()
        self._deliver(event, lambda: self.fulfillment.payment_failed(payment, payment.error_description))

    def _order_paid(self, event: WebhookEvent) -> None:
        order = event.order()
        self._deliver(event, lambda: self.fulfillment.order_paid(order))
