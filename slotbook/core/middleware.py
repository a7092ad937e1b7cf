# slotbook/core/middleware.py
"""Request tracing and access logging"""
import logging
import time
import uuid

from starlette.requests import Request

from slotbook.utils.my_logging import correlation_id_var

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Adopt the caller's correlation id (or mint one) for the whole request"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    token = correlation_id_var.set(correlation_id)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token)

    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """One line per request with status and duration; 5xx logged as errors"""
    started = time.perf_counter()
    client = request.client.host if request.client else "unknown"
    logger.debug(f"{request.method} {request.url.path} from {client}")

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    log = logger.error if response.status_code >= 500 else logger.info
    log(
        f"{request.method} {request.url.path} -> {response.status_code} in {duration_ms}ms",
        extra={"client": client, "status_code": response.status_code, "duration_ms": duration_ms},
    )
    return response
