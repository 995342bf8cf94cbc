import logging
from typing import Optional

from app.schemas.payments import OrderEntity, PaymentDetails

logger = logging.getLogger(__name__)


class FulfillmentSink:
    """receives verified payment outcomes from webhooks (architecture-ready)."""

    def payment_captured(self, payment: PaymentDetails) -> None:  # pragma: no cover
        raise NotImplementedError

    def payment_failed(self, payment: PaymentDetails, error_description: Optional[str]) -> None:  # pragma: no cover
        raise NotImplementedError

    def order_paid(self, order: OrderEntity) -> None:  # pragma: no cover
        raise NotImplementedError


class LoggingFulfillment(FulfillmentSink):
    """no order store yet, so outcomes only go to the log."""

    def payment_captured(self, payment: PaymentDetails) -> None:
        logger.info(f"Payment captured payment_id={payment.id} order_id={payment.order_id} amount={payment.amount}")

    def payment_failed(self, payment: PaymentDetails, error_description: Optional[str]) -> None:
        logger.info(f"Payment failed payment_id={payment.id} order_id={payment.order_id} error={error_description}")

    def order_paid(self, order: OrderEntity) -> None:
        logger.info(f"Order paid order_id={order.id} amount={order.amount_paid or order.amount}")
