"""
Notes Proxy — Application Lifecycle
====================================

What:  Logging setup and the startup/shutdown lifespan shared by both apps.
Who:   Used by the standalone server (main.py) and the function app
       (function_app.py); neither app imports the other.

Startup:
    1. Initialize logging
    2. Validate configuration (missing GEMINI_API_KEY aborts startup)
    3. Build the process-wide Gemini handle
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from notes_proxy.config import settings
from notes_proxy.exceptions import ConfigurationMissingError
from notes_proxy.services.gemini_service import get_llm_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    When:   Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, configuration check, provider handle.

    A missing credential is fatal: the exception propagates out of the
    lifespan and the server refuses to start.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("%s starting up...", app.title)

    try:
        settings.validate_required()
    except ConfigurationMissingError as e:
        logger.critical("%s", e.message)
        logger.critical("Fix the configuration and restart the server.")
        raise

    get_llm_service()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Shutdown complete.")
