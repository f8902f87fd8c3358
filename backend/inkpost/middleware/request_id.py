"""
Inkpost Backend — Request ID Middleware
=========================================

What:  Assigns a short correlation ID to each request and returns it in
       the X-Request-ID response header.
How:   Reuses the client's X-Request-ID when present, otherwise generates
       one; stores it in a ContextVar read by loggers and error handlers.
Who:   Applied to every request via Starlette middleware.
When:  First middleware in the chain.

Every error envelope carries the same ID as `request_id`, so a user
reporting a failure can quote it and the matching server log lines can be
found directly.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns and echoes X-Request-ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough for correlation and readable in logs
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
