import logging
import threading
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from app.core.errors import GatewayError, NotConfigured
from app.schemas.payments import GatewayOrder, PaymentDetails
from .base import PaymentsProvider

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.razorpay.com/v1"


def _provider_message(response: httpx.Response) -> str:
    """pull error.description out of a Razorpay error body if there is one."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("description"):
        return str(error["description"])
    return f"HTTP {response.status_code}"


class RazorpayGateway(PaymentsProvider):
    """thin client for the Razorpay orders/payments REST API."""

    name = "razorpay"

    def __init__(
        self,
        key_id: Optional[str],
        key_secret: Optional[str],
        base_url: str = DEFAULT_API_BASE,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    def _http(self) -> httpx.Client:
        if not self.key_id or not self.key_secret:
            raise NotConfigured("Payment gateway credentials not configured")
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self.base_url,
                    auth=(self.key_id, self.key_secret),
                    timeout=self.timeout,
                    transport=self._transport,
                )
            return self._client

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        client = self._http()
        try:
            r = client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise GatewayError(f"Razorpay request timed out after {self.timeout}s: {e}") from e
        except httpx.HTTPError as e:
            raise GatewayError(f"Razorpay request failed: {e}") from e

        if r.status_code >= 400:
            raise GatewayError(_provider_message(r), status=r.status_code)
        try:
            return r.json()
        except ValueError as e:
            raise GatewayError("Razorpay returned a non-JSON response", status=r.status_code) from e

    def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        payload = {
            "amount": amount_minor,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        data = self._request("POST", "/orders", json=payload)
        try:
            return GatewayOrder.model_validate(data)
        except ValidationError as e:
            raise GatewayError(f"Unexpected order response from Razorpay: {e}") from e

    def fetch_payment(self, payment_id: str) -> PaymentDetails:
        data = self._request("GET", f"/payments/{payment_id}")
        try:
            return PaymentDetails.model_validate(data)
        except ValidationError as e:
            raise GatewayError(f"Unexpected payment response from Razorpay: {e}") from e

    def health_check(self) -> Dict[str, str]:
        """check Razorpay config status without calling the API."""
        if not self.key_id:
            return {"status": "misconfigured", "reason": "missing_key_id"}
        if not self.key_secret:
            return {"status": "misconfigured", "reason": "missing_key_secret"}
        return {"status": "configured", "key_id_prefix": self.key_id[:8] + "..."}

    def close(self) -> None:
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None
