"""
Notes Proxy — FastAPI Application Factory
==========================================

What:  Creates and configures the standalone FastAPI application.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Started by uvicorn (uvicorn notes_proxy.main:app, or python -m notes_proxy).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌──────┐ ┌──────┐ ┌───────┐ │
    │  │ Req ID │→│ Logging │→│ GZip │→│ CORS │→│ Error │ │
    │  └────────┘ └─────────┘ └──────┘ └──────┘ └───────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌─────────────────┐ ┌──────────┐  │
    │  │ POST /revise │ │ POST /synthesize│ │GET health│  │
    │  └──────────────┘ └─────────────────┘ └──────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Method→405 │ Generation→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle: see notes_proxy.lifecycle (logging, configuration check, Gemini handle).
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from notes_proxy import __version__
from notes_proxy.config import settings
from notes_proxy.exception_handlers import register_exception_handlers
from notes_proxy.lifecycle import lifespan
from notes_proxy.middleware.errors import UnexpectedErrorMiddleware
from notes_proxy.middleware.logging import RequestLoggingMiddleware
from notes_proxy.middleware.request_id import RequestIDMiddleware
from notes_proxy.routes import health, proxy


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the standalone FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notes Proxy API",
        description=(
            "Revises and synthesizes notes with Google Gemini. "
            "The note app sends note text; the generated text is relayed back verbatim."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = first to run)

    # Innermost: unexpected errors become a 500 that still passes through CORS
    app.add_middleware(UnexpectedErrorMiddleware)

    # CORS: answers preflight OPTIONS requests and adds CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_methods_list,
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Synthesized texts can be long
    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(proxy.router)
    app.include_router(health.router)

    return app


# uvicorn expects `notes_proxy.main:app` to be importable
app = create_app()
