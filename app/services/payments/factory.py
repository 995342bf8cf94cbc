import logging

from app.core.config import Settings
from .base import PaymentsProvider
from .mock import MockPayments
from .razorpay import RazorpayGateway

logger = logging.getLogger(__name__)


def get_payments_provider(settings: Settings) -> PaymentsProvider:
    provider = (settings.PAYMENTS_PROVIDER or "razorpay").lower()
    if provider == "mock":
        return MockPayments(currency=settings.DEFAULT_CURRENCY)
    if provider != "razorpay":
        logger.warning(f"Unknown PAYMENTS_PROVIDER '{provider}', using razorpay")
    return RazorpayGateway(
        key_id=settings.RAZORPAY_KEY_ID,
        key_secret=settings.RAZORPAY_KEY_SECRET,
        base_url=settings.RAZORPAY_API_BASE,
        timeout=settings.GATEWAY_TIMEOUT_SECONDS,
    )
