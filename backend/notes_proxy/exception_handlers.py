"""
Notes Proxy — Global Exception Handlers
========================================

What:  Maps exception types to HTTP status codes and the JSON error body.
How:   FastAPI's exception_handler hooks intercept specific exception types.
Who:   Registered on both the standalone app (main.py) and the function app.

Handler hierarchy:
    RequestError            → 400 / 405 (malformed body, wrong method)
    ValidationError         → 400 Bad Request (client can fix the input)
    GenerationError         → 500 Internal Server Error (blocked or failed)
    StarletteHTTPException  → same status, same body shape (router 404/405)
    Exception (fallback)    → 500 Internal Server Error (unexpected errors that
                              escape UnexpectedErrorMiddleware)

Security: Handlers NEVER expose stack traces or provider exception objects in
the API response. Details are logged server-side.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_proxy.exceptions import (
    GenerationBlockedError,
    GenerationError,
    NotesProxyError,
    RequestError,
    ValidationError,
)
from notes_proxy.middleware.request_id import REQUEST_ID_HEADER, request_id_var
from notes_proxy.schemas.proxy import ErrorResponse

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


def error_response(exc: NotesProxyError) -> JSONResponse:
    """Serialize an application exception into the standard error body."""
    body = ErrorResponse(
        error=exc.message,
        code=exc.code,
        details=exc.details,
        request_id=request_id_var.get("") or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


def unexpected_error_response(request_id: str = "") -> JSONResponse:
    """Generic 500 body; the exception itself is only ever logged."""
    body = ErrorResponse(
        error=UNEXPECTED_ERROR_MESSAGE,
        code="internal_server_error",
        request_id=request_id or None,
    )
    headers = {REQUEST_ID_HEADER: request_id} if request_id else None
    return JSONResponse(
        status_code=500,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the global exception handlers on an application instance."""

    @app.exception_handler(RequestError)
    async def handle_request_error(request: Request, exc: RequestError):
        """Unusable HTTP request — content type, JSON syntax or method."""
        logger.warning("[%s] Request rejected: %s", request_id_var.get(""), exc.message)
        return error_response(exc)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid input — tell them what's wrong and how to fix it."""
        logger.warning(
            "[%s] Validation error (%s): %s",
            request_id_var.get(""),
            exc.code,
            exc.message,
        )
        return error_response(exc)

    @app.exception_handler(GenerationError)
    async def handle_generation_error(request: Request, exc: GenerationError):
        """Gemini did not produce text — blocked or failed."""
        rid = request_id_var.get("")
        if isinstance(exc, GenerationBlockedError):
            logger.warning("[%s] Generation blocked: %s", rid, exc.message)
        else:
            logger.error("[%s] Generation failed: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Router-level errors (unknown path, wrong method) in the same body shape."""
        body = ErrorResponse(
            error=str(exc.detail),
            code=HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
            request_id=request_id_var.get("") or None,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(exclude_none=True),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Last resort for errors raised outside UnexpectedErrorMiddleware.

        Runs after RequestIDMiddleware has finished, so the ID is read from
        request.state instead of the context variable.
        """
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return unexpected_error_response(rid)
