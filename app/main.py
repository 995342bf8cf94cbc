import logging
import time
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import AppError, GatewayError, InvalidPayload, SignatureMismatch
from app.core.logging import configure_logging, log_requests
from app.api.api import router as api_router
from app.api.deps import close_gateway, get_gateway
from app.schemas.health import HealthOut
from app.services.payments.base import PaymentsProvider

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

app = FastAPI(title="Razorpay Checkout API", version="0.1.0")

# set up CORS so the storefront can talk to us
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.middleware("http")(log_requests)

# mount our API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if isinstance(exc, (GatewayError, InvalidPayload)):
        # full detail stays server side
        logger.error(f"{request.method} {request.url.path} failed: {exc} cause={exc.__cause__!r}")
    elif isinstance(exc, SignatureMismatch):
        logger.warning(f"{request.method} {request.url.path} signature mismatch")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"{request.method} {request.url.path} invalid request: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} unhandled error")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.on_event("startup")
def on_startup():
    logger.info(f"Starting in {settings.APP_ENV} with provider={settings.PAYMENTS_PROVIDER}")
    if not settings.gateway_configured:
        logger.warning("Set RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET in your .env file")
    if not settings.webhook_configured:
        logger.warning("RAZORPAY_WEBHOOK_SECRET not set, webhooks will be rejected")


@app.on_event("shutdown")
def on_shutdown():
    close_gateway()


@app.get("/api/health", response_model=HealthOut)
def health(gateway: PaymentsProvider = Depends(get_gateway)):
    return HealthOut(
        status="OK",
        message="Server is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - STARTED_AT, 3),
        gateway=gateway.health_check(),
    )
