# ===== slotbook/api/middleware/rate_limit_middleware.py =====
from collections import deque
from typing import Deque, Dict
import logging
import math
from time import monotonic

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-client-IP rate limiting over a sliding window.

    Every client gets `max_requests` requests per `window_seconds`. Past
    that the request is answered with 429 and a Retry-After header
    counting down to when the oldest request in the window expires.
    Counters live in process memory, so each worker limits on its own.
    """

    def __init__(self, app, max_requests: int = 100, window_seconds: float = 900):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.request_times: Dict[str, Deque[float]] = {}

    @staticmethod
    def client_key(request: Request) -> str:
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next):
        client = self.client_key(request)
        now = monotonic()

        window = self.request_times.setdefault(client, deque())
        while window and now - window[0] >= self.window_seconds:
            window.popleft()

        if len(window) >= self.max_requests:
            retry_after = max(1, math.ceil(self.window_seconds - (now - window[0])))
            logger.warning(f"Rate limit hit for {client} on {request.method} {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "error": "rate_limited",
                    "message": "Too many requests from this IP, please try again later.",
                    "retry_after": retry_after,
                },
                headers={"Retry-After": str(retry_after)},
            )

        window.append(now)
        return await call_next(request)
