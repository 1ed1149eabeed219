"""
Glee Threads Backend — Request ID Middleware
==============================================

What:  Assigns a short correlation ID to each request and echoes it back.
Why:   Access log lines, error log lines and the client's X-Request-ID header
       share one value, so a storefront bug report can be traced to the log.
How:   Uses the client-supplied X-Request-ID header when present, otherwise a
       fresh UUID prefix; stored in a ContextVar and in request.state.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same thread each see their own ID.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Stores the request ID for loggers and handlers, adds it to the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
