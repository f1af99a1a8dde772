"""
Notes Proxy — Function-Style Deployment
========================================

What:  A second ASGI application shaped like a single HTTP cloud function.
How:   Every route accepts any method and checks it by hand, the way a
       function-as-a-service handler does: bare OPTIONS → 204, anything but
       POST → 405. Validation, prompts and the Gemini call are the same
       ProxyService used by the standalone server.
Who:   Deployed with any ASGI runtime, e.g. `uvicorn notes_proxy.function_app:app`.

Routes:
    /            → revise (the note app's single-function endpoint)
    /revise      → revise
    /synthesize  → synthesize

CORS: any origin, POST and OPTIONS, Content-Type header.
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.responses import Response

from notes_proxy import __version__
from notes_proxy.exception_handlers import register_exception_handlers
from notes_proxy.exceptions import MethodNotAllowedError
from notes_proxy.lifecycle import lifespan
from notes_proxy.middleware.errors import UnexpectedErrorMiddleware
from notes_proxy.middleware.logging import RequestLoggingMiddleware
from notes_proxy.middleware.request_id import RequestIDMiddleware
from notes_proxy.routes.proxy import get_proxy_service
from notes_proxy.services.proxy_service import ProxyService
from notes_proxy.services.validation import decode_json_body

logger = logging.getLogger(__name__)

ACCEPTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

Operation = Callable[[ProxyService, Dict[str, Any]], Awaitable[BaseModel]]


async def handle_function_call(
    request: Request,
    service: ProxyService,
    operation: Operation,
) -> Response:
    """
    Method check → body decode → operation, as one function invocation.

    Raises:
        MethodNotAllowedError: Method other than POST/OPTIONS.
        MalformedRequestError: Content-Type or body unusable.
    """
    if request.method == "OPTIONS":
        return Response(status_code=204)
    if request.method != "POST":
        raise MethodNotAllowedError(request.method)

    payload = decode_json_body(request.headers.get("content-type"), await request.body())
    result = await operation(service, payload)
    return JSONResponse(status_code=200, content=result.model_dump())


def create_function_app() -> FastAPI:
    app = FastAPI(
        title="Notes Proxy Function",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(UnexpectedErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.api_route("/", methods=ACCEPTED_METHODS)
    @app.api_route("/revise", methods=ACCEPTED_METHODS)
    async def revise_note(
        request: Request,
        service: ProxyService = Depends(get_proxy_service),
    ) -> Response:
        return await handle_function_call(request, service, ProxyService.revise)

    @app.api_route("/synthesize", methods=ACCEPTED_METHODS)
    async def synthesize_notes(
        request: Request,
        service: ProxyService = Depends(get_proxy_service),
    ) -> Response:
        return await handle_function_call(request, service, ProxyService.synthesize)

    return app


app = create_function_app()
