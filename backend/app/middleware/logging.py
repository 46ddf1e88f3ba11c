"""
Bahía Escondida Cashless — Request Logging Middleware
=======================================================

What:  One access-log line per HTTP request with status and duration.
How:   Measures from middleware entry to response, picks the log level from
       the status class, and attaches the fields as `extra` for structured
       handlers.

Log line:
    POST /api/transacciones 201 12.3ms [a1b2c3d4] from 10.0.0.12

Not logged: request bodies (guest names, documents, room numbers).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("cashless.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Levels:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    GET / is polled by load balancers and is not logged.
    """

    SKIPPED_PATHS = {"/"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
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
