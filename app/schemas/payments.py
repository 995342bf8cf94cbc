from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderItem(BaseModel):
    # the storefront posts "price", keep "unit_price" as our own name
    model_config = ConfigDict(populate_by_name=True)

    name: str
    unit_price: Decimal = Field(..., alias="price")
    quantity: int = Field(default=1, ge=1)


class OrderRequest(BaseModel):
    # amount is checked by the order service so a missing or zero amount
    # gets the same "Invalid amount" answer as a negative one
    amount: Optional[Decimal] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    items: List[OrderItem] = Field(default_factory=list)


class OrderHandle(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str
    amount_minor: int
    currency: str
    public_key: str


class CreateOrderResponse(BaseModel):
    orderId: str
    amount: int
    currency: str
    keyId: str

    @classmethod
    def from_handle(cls, handle: OrderHandle) -> "CreateOrderResponse":
        return cls(
            orderId=handle.order_id,
            amount=handle.amount_minor,
            currency=handle.currency,
            keyId=handle.public_key,
        )


class PaymentConfirmation(BaseModel):
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None


class PaymentDetails(BaseModel):
    id: str
    order_id: Optional[str] = None
    amount: int
    currency: str
    status: str
    method: Optional[str] = None
    created_at: Optional[int] = None
    error_description: Optional[str] = None


class VerificationResult(BaseModel):
    verified: bool
    payment: Optional[PaymentDetails] = None
    error: Optional[str] = None

    @property
    def details_missing(self) -> bool:
        return self.verified and self.payment is None


class VerifyPaymentResponse(BaseModel):
    success: bool
    payment: Optional[PaymentDetails] = None
    message: Optional[str] = None
    error: Optional[str] = None


class GatewayOrder(BaseModel):
    id: str
    amount: int
    currency: str
    receipt: Optional[str] = None
    status: Optional[str] = None


# webhook envelope

class OrderEntity(BaseModel):
    id: str
    amount: Optional[int] = None
    amount_paid: Optional[int] = None
    currency: Optional[str] = None
    receipt: Optional[str] = None
    status: Optional[str] = None


class WebhookEvent(BaseModel):
    event: str
    id: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[int] = None

    def _entity(self, name: str) -> Dict[str, Any]:
        wrapper = self.payload.get(name)
        if not isinstance(wrapper, dict) or not isinstance(wrapper.get("entity"), dict):
            raise KeyError(name)
        return wrapper["entity"]

    def payment(self) -> PaymentDetails:
        return PaymentDetails.model_validate(self._entity("payment"))

    def order(self) -> OrderEntity:
        return OrderEntity.model_validate(self._entity("order"))


class WebhookAck(BaseModel):
    received: bool = True
