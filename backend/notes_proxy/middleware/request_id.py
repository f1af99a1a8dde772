"""
Notes Proxy — Request ID Middleware
====================================

What:  Assigns a correlation ID to each incoming request and returns it to the client.
How:   Reuses the client's X-Request-ID header or generates a short UUID, stores
       it in a ContextVar for loggers and services, and echoes it in the response.
Who:   Applied to every request of both the standalone server and the function app.

The ID also appears in every error body, so a user-reported failure can be
matched to the server log line for the same request.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if present
        2. Otherwise generate an 8-character UUID prefix
        3. Store in ContextVar and request.state
        4. Add to response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
