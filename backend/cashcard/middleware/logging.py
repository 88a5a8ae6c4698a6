"""
Cash Card API: Request Logging Middleware
=========================================

What:  One access log line per HTTP request.
How:   Times the downstream call and logs method, path, status and duration
       on the `cashcard.access` logger, with the fields also attached as
       `extra` for structured handlers. The request ID is stamped on the
       record by RequestIDFilter, not repeated in the message.
When:  After RequestIDMiddleware (the request ID is already set).

Log levels by outcome:
    5xx                        → ERROR   (store failure)
    404 under /cashcards/      → INFO    (lookup answered "absent")
    other 4xx                  → WARNING (route or method the API does not serve)
    everything else            → INFO

/health is not logged. Request bodies and headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("cashcard.access")

CARD_LOOKUP_PREFIX = "/cashcards/"
UNLOGGED_PATHS = frozenset({"/health"})


def access_log_level(path: str, status: int) -> int:
    """Pick the log level for a finished request."""
    if status >= 500:
        return logging.ERROR
    if status == 404 and path.startswith(CARD_LOOKUP_PREFIX):
        return logging.INFO
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access log line for each cash card API request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        client_ip = request.client.host if request.client else "unknown"
        status = response.status_code

        logger.log(
            access_log_level(path, status),
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
