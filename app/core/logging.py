import logging
import time

from fastapi import Request

logger = logging.getLogger("app.requests")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    # replace whatever handler uvicorn or basicConfig put there first
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


async def log_requests(request: Request, call_next):
    """http middleware: one line in, one line out per request."""
    started = time.perf_counter()
    client = request.client.host if request.client else None
    logger.info(
        f"{request.method} {request.url.path} ip={client} "
        f"ua={request.headers.get('user-agent')}"
    )
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} in {elapsed_ms:.1f}ms")
    return response
