import threading
from typing import Optional

from fastapi import Depends

from app.core.config import Settings, settings as app_settings
from app.services.catalog import ProductCatalog, get_default_catalog
from app.services.fulfillment import FulfillmentSink, LoggingFulfillment
from app.services.payments.base import PaymentsProvider
from app.services.payments.factory import get_payments_provider
from app.services.payments.orders import OrderService
from app.services.payments.verification import VerificationService
from app.services.payments.webhooks import WebhookHandler

# one gateway per settings object, rebuilt only when the settings change
_gateway: Optional[PaymentsProvider] = None
_gateway_settings: Optional[Settings] = None
_gateway_lock = threading.Lock()


def get_settings() -> Settings:
    return app_settings


def get_gateway(settings: Settings = Depends(get_settings)) -> PaymentsProvider:
    global _gateway, _gateway_settings
    with _gateway_lock:
        if _gateway is None or _gateway_settings is not settings:
            if _gateway is not None:
                _gateway.close()
            _gateway = get_payments_provider(settings)
            _gateway_settings = settings
        return _gateway


def get_catalog() -> ProductCatalog:
    return get_default_catalog()


def get_fulfillment() -> FulfillmentSink:
    return LoggingFulfillment()


def get_order_service(
    settings: Settings = Depends(get_settings),
    gateway: PaymentsProvider = Depends(get_gateway),
) -> OrderService:
    return OrderService(gateway, public_key=settings.RAZORPAY_KEY_ID, default_currency=settings.DEFAULT_CURRENCY)


def get_verification_service(
    settings: Settings = Depends(get_settings),
    gateway: PaymentsProvider = Depends(get_gateway),
) -> VerificationService:
    return VerificationService(gateway, order_secret=settings.RAZORPAY_KEY_SECRET)


def get_webhook_handler(
    settings: Settings = Depends(get_settings),
    fulfillment: FulfillmentSink = Depends(get_fulfillment),
) -> WebhookHandler:
    return WebhookHandler(settings.RAZORPAY_WEBHOOK_SECRET, fulfillment)


def close_gateway() -> None:
    global _gateway, _gateway_settings
    with _gateway_lock:
        if _gateway is not None:
            _gateway.close()
        _gateway = None
        _gateway_settings = None
