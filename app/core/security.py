"""keyed signatures shared by payment confirmations and webhooks.

Razorpay signs two things with HMAC-SHA256 and hex encodes the digest:

- checkout confirmations: "{order_id}|{payment_id}" keyed with the API key secret
- webhooks: the raw request body keyed with the webhook secret

the two secrets are different and must never be swapped.
"""
import hashlib
import hmac
from typing import Optional, Union

Message = Union[str, bytes]


def _as_bytes(value: Message) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def compute_signature(secret: str, message: Message) -> str:
    return hmac.new(_as_bytes(secret), _as_bytes(message), hashlib.sha256).hexdigest()


def verify_signature(secret: Optional[str], message: Message, provided: Optional[str]) -> bool:
    """check `provided` against the expected signature in constant time.

    an empty secret or empty signature never verifies.
    """
    if not secret or not provided:
        return False
    expected = compute_signature(secret, message)
    try:
        return hmac.compare_digest(expected, provided)
    except TypeError:
        # compare_digest refuses non-ascii str input
        return False


def payment_signature_message(order_id: str, payment_id: str) -> str:
    return f"{order_id}|{payment_id}"


def signature_preview(value: Optional[str]) -> str:
    """short form of a signature for logs. never compare these."""
    if not value:
        return "<none>"
    return value[:10] + "..."
