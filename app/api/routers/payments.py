from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_order_service, get_verification_service
from app.schemas.payments import (
    CreateOrderResponse,
    OrderRequest,
    PaymentConfirmation,
    VerifyPaymentResponse,
)
from app.services.payments.orders import OrderService
from app.services.payments.verification import VerificationService

router = APIRouter(tags=["payments"])

DETAILS_UNAVAILABLE = "Payment verified but could not fetch details"


@router.post("/create-order", response_model=CreateOrderResponse)
def create_order(payload: OrderRequest, service: OrderService = Depends(get_order_service)):
    handle = service.create_order(payload)
    return CreateOrderResponse.from_handle(handle)


@router.post("/verify-payment", response_model=VerifyPaymentResponse, response_model_exclude_none=True)
def verify_payment(payload: PaymentConfirmation, service: VerificationService = Depends(get_verification_service)):
    result = service.verify_payment(payload)
    if not result.verified:
        return JSONResponse(status_code=400, content={"success": False, "error": result.error})
    if result.details_missing:
        return VerifyPaymentResponse(success=True, message=DETAILS_UNAVAILABLE)
    return VerifyPaymentResponse(success=True, payment=result.payment)
