from fastapi import APIRouter, Depends, Header, Request

from app.api.deps import get_settings, get_webhook_handler
from app.core.config import Settings
from app.schemas.health import WebhookHealthOut
from app.schemas.payments import WebhookAck
from app.services.payments.webhooks import WebhookHandler

router = APIRouter(prefix="/webhook", tags=["webhooks"])


@router.post("", response_model=WebhookAck)
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: str | None = Header(None),
    x_razorpay_event_id: str | None = Header(None),
    handler: WebhookHandler = Depends(get_webhook_handler),
):
    """
    Handle Razorpay webhook events.

    Handled events: payment.captured, payment.failed, order.paid.
    Anything else is acknowledged and ignored.
    """
    # raw body, the signature is over these exact bytes (don't call request.json())
    payload_bytes = await request.body()
    return handler.handle(payload_bytes, x_razorpay_signature, event_id=x_razorpay_event_id)


@router.get("/health", response_model=WebhookHealthOut)
def webhook_health(settings: Settings = Depends(get_settings)):
    """health check for webhook endpoint."""
    return WebhookHealthOut(status="ok", webhook_secret_configured=settings.webhook_configured)
