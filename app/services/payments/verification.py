import logging
from typing import Optional

from app.core.errors import GatewayError, MissingFields, NotConfigured
from app.core.security import payment_signature_message, signature_preview, verify_signature
from app.schemas.payments import PaymentConfirmation, VerificationResult
from .base import PaymentsProvider

logger = logging.getLogger(__name__)

INVALID_SIGNATURE = "Invalid payment signature"


class VerificationService:
    """checks a checkout confirmation posted back by the browser.

    a bad signature is a normal "not verified" result, not an exception.
    once the signature is good, failing to fetch the payment from the gateway
    still counts as verified, only the details are left out.
    """

    def __init__(self, gateway: PaymentsProvider, order_secret: Optional[str]):
        self.gateway = gateway
        self.order_secret = order_secret

    def verify_payment(self, confirmation: PaymentConfirmation) -> VerificationResult:
        order_id = confirmation.razorpay_order_id
        payment_id = confirmation.razorpay_payment_id
        signature = confirmation.razorpay_signature

        missing = [
            name
            for name, value in (
                ("razorpay_order_id", order_id),
                ("razorpay_payment_id", payment_id),
                ("razorpay_signature", signature),
            )
            if not value
        ]
        if missing:
            logger.info(f"Missing payment details: {', '.join(missing)}")
            raise MissingFields(missing)
        if not self.order_secret:
            raise NotConfigured("Payment gateway secret not configured")

        logger.info(f"Verifying payment order_id={order_id} payment_id={payment_id}")
        ok = verify_signature(self.order_secret, payment_signature_message(order_id, payment_id), signature)
        logger.info(f"Signature check received={signature_preview(signature)} match={ok}")
        if not ok:
            logger.warning(f"Invalid payment signature for order_id={order_id} payment_id={payment_id}")
            return VerificationResult(verified=False, error=INVALID_SIGNATURE)

        try:
            payment = self.gateway.fetch_payment(payment_id)
        except (GatewayError, NotConfigured) as e:
            logger.error(f"Payment verified but fetching details failed payment_id={payment_id}: {e}")
            return VerificationResult(verified=True)

        logger.info(
            f"Payment verified payment_id={payment.id} order_id={payment.order_id} "
            f"amount={payment.amount} status={payment.status} method={payment.method}"
        )
        return VerificationResult(verified=True, payment=payment)
