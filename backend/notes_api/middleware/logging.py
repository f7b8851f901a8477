"""
Notes API — Request Logging Middleware
========================================

What:  One access log line per HTTP request.
How:   Times the request, then logs method, path, status, duration, request
       id and client address on the `notes_api.access` logger.

Log level follows the status class: 5xx → ERROR, 4xx → WARNING,
everything else → INFO. Request bodies are never logged.

An exception that escapes the route and its exception handlers is logged
with its traceback and answered with a plain-text 500 here.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from notes_api.exceptions import UNEXPECTED_ERROR_MESSAGE
from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")

# Polled by monitors every few seconds; not worth a log line each
SILENT_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SILENT_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception:
            # Answered inside RequestIDMiddleware, so the 500 carries
            # X-Request-ID and is logged below like any other response
            rid = getattr(request.state, "request_id", "") or request_id_var.get("")
            logger.error("[%s] Unexpected error on %s %s", rid, method, path, exc_info=True)
            response = PlainTextResponse(UNEXPECTED_ERROR_MESSAGE, status_code=500)

        duration_ms = (time.perf_counter() - start_time) * 1000
        # Set by RequestIDMiddleware, which wraps this one
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
