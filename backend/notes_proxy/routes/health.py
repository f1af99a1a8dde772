"""
Notes Proxy — Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Asks the generation provider for a lightweight connectivity check.

Status levels:
    - healthy:   Gemini reachable (HTTP 200)
    - degraded:  Gemini unreachable (HTTP 200, flagged for monitoring)
"""

import logging
import time

from fastapi import APIRouter, Depends

from notes_proxy import __version__
from notes_proxy.schemas.proxy import HealthResponse
from notes_proxy.services.gemini_service import get_llm_service
from notes_proxy.services.llm_base import LLMService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(llm: LLMService = Depends(get_llm_service)) -> HealthResponse:
    gemini_status = "available"
    overall = "healthy"

    try:
        if not await llm.health_check():
            gemini_status = "unavailable"
            overall = "degraded"
    except Exception as e:
        gemini_status = "unavailable"
        overall = "degraded"
        logger.warning("Health check: Gemini unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        gemini=gemini_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
