"""
Glee Threads Backend — Rate Limiting Middleware
=================================================

What:  Per-IP sliding window rate limiter.
Why:   The public write endpoints (subscribe, orders, coupon verify, upload)
       are unauthenticated; this bounds how fast one client can hit them.
How:   Keeps each IP's request timestamps in memory, drops the ones older
       than the window, and rejects with 429 once the window is full.

Limitations:
    State is per process. Multiple uvicorn workers each enforce their own
    window; a shared store (Redis) would be needed for a global limit.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Configuration (from settings):
        rate_limit_requests: Max requests per window
        rate_limit_window:   Window duration in seconds

    Exceptions raised inside BaseHTTPMiddleware bypass the app's exception
    handlers, so the 429 response is built here from RateLimitExceededError.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    # Sweep idle IPs every N recorded requests.
    CLEANUP_EVERY = 1000

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window_start = now - settings.rate_limit_window

        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        if len(timestamps) >= settings.rate_limit_requests:
            retry_after = int(timestamps[0] + settings.rate_limit_window - now) + 1
            exc = RateLimitExceededError(retry_after=retry_after)
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(timestamps),
                settings.rate_limit_window,
            )
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.message, "details": exc.context},
                headers={"Retry-After": str(retry_after)},
            )

        timestamps.append(now)
        self._recorded += 1
        if self._recorded % self.CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Remove IPs with no requests inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
