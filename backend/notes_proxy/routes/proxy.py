"""
Notes Proxy — Revise & Synthesize Route Handlers
=================================================

What:  POST /revise and POST /synthesize for the standalone server.
How:   Decode the raw JSON body, delegate to ProxyService, return its response model.
Who:   Called by the note app's service layer (see notes_proxy.client).

Why the body is decoded by hand instead of a Pydantic body parameter:
    Each validation failure must map to a specific error kind (missing_field,
    invalid_mode, insufficient_documents, ...) with a 400 status, instead of
    FastAPI's generic 422.

Error responses (handled by global exception handlers):
    HTTP 400: malformed body or field validation failure
    HTTP 405: non-POST method (router-level)
    HTTP 500: Gemini blocked the response or the call failed
"""

import logging

from fastapi import APIRouter, Depends, Request

from notes_proxy.schemas.proxy import ErrorResponse, ReviseResponse, SynthesizeResponse
from notes_proxy.services.gemini_service import get_llm_service
from notes_proxy.services.llm_base import LLMService
from notes_proxy.services.proxy_service import ProxyService
from notes_proxy.services.validation import decode_json_body

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Proxy"])

ERROR_RESPONSES = {
    400: {"description": "Malformed body or invalid fields", "model": ErrorResponse},
    405: {"description": "Method not allowed", "model": ErrorResponse},
    500: {"description": "Generation blocked or failed", "model": ErrorResponse},
}


def get_proxy_service(llm: LLMService = Depends(get_llm_service)) -> ProxyService:
    return ProxyService(llm)


@router.post(
    "/revise",
    response_model=ReviseResponse,
    responses=ERROR_RESPONSES,
    summary="Revise a single note",
    description=(
        "Body: {content, mode: light|deep|custom, prompt?}. "
        "`prompt` is required for custom mode."
    ),
)
async def revise(
    request: Request,
    service: ProxyService = Depends(get_proxy_service),
) -> ReviseResponse:
    payload = decode_json_body(request.headers.get("content-type"), await request.body())
    return await service.revise(payload)


@router.post(
    "/synthesize",
    response_model=SynthesizeResponse,
    responses=ERROR_RESPONSES,
    summary="Combine several notes into one text",
    description=(
        "Body: {notes: [{id?, title?, content}] (at least 2), "
        "mode: coherent_text|summary|custom, prompt?}."
    ),
)
async def synthesize(
    request: Request,
    service: ProxyService = Depends(get_proxy_service),
) -> SynthesizeResponse:
    payload = decode_json_body(request.headers.get("content-type"), await request.body())
    return await service.synthesize(payload)
