import os
from typing import List
from dotenv import load_dotenv

# grab env vars from .env file
load_dotenv()


def _split_csv(raw: str | None) -> List[str]:
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


class Settings:
    # app settings
    APP_ENV: str = os.getenv("APP_ENV", "dev")
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("PORT") or os.getenv("APP_PORT") or "5000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS stuff
    ALLOWED_ORIGINS: List[str] = _split_csv(
        os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:3001")
    )

    # Razorpay credentials, the key id is the only one safe to hand to the browser
    RAZORPAY_KEY_ID: str | None = os.getenv("RAZORPAY_KEY_ID")
    RAZORPAY_KEY_SECRET: str | None = os.getenv("RAZORPAY_KEY_SECRET")
    RAZORPAY_WEBHOOK_SECRET: str | None = os.getenv("RAZORPAY_WEBHOOK_SECRET")
    RAZORPAY_API_BASE: str = os.getenv("RAZORPAY_API_BASE", "https://api.razorpay.com/v1")

    # payment provider selection
    PAYMENTS_PROVIDER: str = os.getenv("PAYMENTS_PROVIDER", "razorpay").lower()
    GATEWAY_TIMEOUT_SECONDS: float = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "10"))
    DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "INR").upper()

    @property
    def gateway_configured(self) -> bool:
        return bool(self.RAZORPAY_KEY_ID and self.RAZORPAY_KEY_SECRET)

    @property
    def webhook_configured(self) -> bool:
        return bool(self.RAZORPAY_WEBHOOK_SECRET)


settings = Settings()
