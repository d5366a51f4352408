"""
Spa Booking API - Request ID Middleware
========================================

What:  Tags each request with a short ID and echoes it in X-Request-ID.
Why:   Error bodies carry the same ID, so a failed booking reported by a
       customer can be found in the server log.
How:   Honour an incoming X-Request-ID (the frontend may set one), otherwise
       generate one; keep it in a ContextVar for loggers and error handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # An empty header counts as absent; 8 chars is enough for correlation
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
