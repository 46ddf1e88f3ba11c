"""
Bahía Escondida Cashless — Request ID Middleware
==================================================

What:  Assigns a correlation ID to each request and returns it in X-Request-ID.
How:   Reuses a client-sent X-Request-ID or generates a short UUID, stores it
       in a ContextVar (for loggers and exception handlers) and in request.state.
When:  Wraps every request; registered after the logging middleware so it
       runs first.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID header when present (POS terminal traces)
        2. Otherwise generate the first 8 chars of a UUID4
        3. Store it in request_id_var and request.state.request_id
        4. Echo it in the response X-Request-ID header
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
