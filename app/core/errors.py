"""error types raised by the payment flow.

each error knows the HTTP status it maps to and the message that is safe to
show the caller. anything more detailed stays in the server logs.
"""
from typing import Optional


class AppError(Exception):
    status_code: int = 500
    message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        if message:
            self.message = message
        super().__init__(self.message)


class PaymentValidationError(AppError):
    """bad or missing input, the caller's fault."""
    status_code = 400
    message = "Invalid request"


class InvalidAmount(PaymentValidationError):
    message = "Invalid amount"


class MissingFields(PaymentValidationError):
    message = "Missing payment details"

    def __init__(self, missing: Optional[list] = None, message: Optional[str] = None):
        self.missing = list(missing or [])
        super().__init__(message)


class SignatureMismatch(AppError):
    """a signature did not match, possibly a forged confirmation or event."""
    status_code = 400
    message = "Invalid signature"


class GatewayError(AppError):
    """upstream provider failure.

    `provider_message` keeps what the provider said for the logs, the public
    message stays generic.
    """
    status_code = 500
    message = "Payment gateway error"

    def __init__(self, provider_message: str, message: Optional[str] = None, status: Optional[int] = None):
        self.provider_message = provider_message
        self.upstream_status = status
        super().__init__(message)

    def __str__(self) -> str:
        return self.provider_message


class NotConfigured(AppError):
    status_code = 400
    message = "Payment gateway not configured"


class InvalidPayload(AppError):
    status_code = 500
    message = "Failed to process webhook"


class ProductNotFound(AppError):
    status_code = 404
    message = "Product not found"
