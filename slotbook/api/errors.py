# ============================================================================
# slotbook/api/errors.py
# Maps engine failures onto HTTP responses
# ============================================================================
import logging

from fastapi import FastAPI
from sqlalchemy.exc import DBAPIError
from starlette.requests import Request
from starlette.responses import JSONResponse

from slotbook.core.exceptions import SchedulingError, StoreUnavailable

logger = logging.getLogger(__name__)


def _render(request: Request, error: SchedulingError) -> JSONResponse:
    headers = {"Retry-After": "1"} if error.retryable else None
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        headers = dict(headers or {}, **{"X-Correlation-ID": correlation_id})
    return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)


async def scheduling_error_handler(request: Request, error: SchedulingError) -> JSONResponse:
    log = logger.warning if error.status_code >= 500 else logger.info
    log(f"{request.method} {request.url.path} -> {error.code}: {error.message}")
    return _render(request, error)


async def store_error_handler(request: Request, error: DBAPIError) -> JSONResponse:
    """Driver errors that escaped a service are treated as transient"""
    logger.error(f"{request.method} {request.url.path} store failure: {error}")
    return _render(request, StoreUnavailable())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SchedulingError, scheduling_error_handler)
    app.add_exception_handler(DBAPIError, store_error_handler)
