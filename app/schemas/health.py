from typing import Dict

from pydantic import BaseModel


class HealthOut(BaseModel):
    status: str
    message: str
    timestamp: str
    uptime: float
    gateway: Dict[str, str]


class WebhookHealthOut(BaseModel):
    status: str
    webhook_secret_configured: bool
