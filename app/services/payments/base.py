from typing import Any, Dict, Optional

from app.schemas.payments import GatewayOrder, PaymentDetails


class PaymentsProvider:
    """base payments gateway interface.

    implementations raise GatewayError on any upstream failure (timeouts
    included) and NotConfigured when credentials are missing.
    """

    name = "base"

    def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:  # pragma: no cover
        raise NotImplementedError

    def fetch_payment(self, payment_id: str) -> PaymentDetails:  # pragma: no cover
        raise NotImplementedError

    def health_check(self) -> Dict[str, str]:  # pragma: no cover
        return {"status": "skipped", "reason": "not_implemented"}

    def close(self) -> None:
        pass
