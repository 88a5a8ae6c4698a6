"""
Cash Card API: Request ID Middleware
====================================

What:  Assigns an ID to each incoming request and returns it in the response.
How:   Reuses the client's X-Request-ID header or generates a short UUID,
       stores it in a ContextVar and on request.state, and echoes it back.
       RequestIDFilter copies the current ID onto every log record.
When:  Runs before RequestLoggingMiddleware, so access log lines carry the ID.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDFilter(logging.Filter):
    """Adds `record.request_id` so formatters can use %(request_id)s."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if present
        2. Otherwise generate the first 8 characters of a UUID4
        3. Store in the ContextVar (loggers) and request.state (handlers)
        4. Add X-Request-ID to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        return response
