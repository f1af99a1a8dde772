"""
Notes Proxy — Unexpected Error Middleware
==========================================

What:  Turns any exception that escapes a route into the generic 500 error body.
How:   Installed as the innermost middleware, so the response still passes
       through CORS and RequestIDMiddleware on the way out and carries the
       Access-Control-Allow-Origin and X-Request-ID headers.

Application exceptions (NotesProxyError, HTTPException) never reach this
layer; FastAPI's exception handlers answer them first.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_proxy.exception_handlers import unexpected_error_response
from notes_proxy.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = request_id_var.get("")
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            return unexpected_error_response(rid)
