"""
Notes Proxy — Proxy Service (Request Orchestrator)
===================================================

What:  Runs one revise or synthesize request end-to-end.
How:   validate → build prompt → one provider call → wrap the text in a response model.
Who:   Called by the standalone routes and by the function adapter.

Request lifecycle:
    Received → Validated → Prompted → Dispatched → Succeeded | Failed(kind)

    Validation failures are raised before the provider is touched. Provider
    failures arrive already translated (GenerationBlockedError /
    GenerationFailedError) and propagate to the global exception handlers.

Design Decision:
    ProxyService is stateless: it holds only the read-only provider handle,
    so concurrent requests share nothing mutable.
"""

import logging
from typing import Any, Dict

from notes_proxy.middleware.request_id import request_id_var
from notes_proxy.schemas.proxy import ReviseResponse, SynthesizeResponse
from notes_proxy.services.llm_base import LLMService
from notes_proxy.services.prompt_builder import (
    build_revision_prompt,
    build_synthesis_prompt,
)
from notes_proxy.services.validation import (
    parse_revision_request,
    parse_synthesis_request,
)

logger = logging.getLogger(__name__)


class ProxyService:
    def __init__(self, llm: LLMService):
        self.llm = llm

    async def revise(self, payload: Dict[str, Any]) -> ReviseResponse:
        """
        Revise a single note.

        Args:
            payload: Decoded JSON body `{content, mode, prompt?}`.

        Returns:
            ReviseResponse with the generated text, unmodified.

        Raises:
            ValidationError subclasses: invalid body (no provider call made)
            GenerationBlockedError / GenerationFailedError: provider outcome
        """
        request = parse_revision_request(payload)
        rid = request_id_var.get("")
        logger.info(
            "[%s] /revise request received (mode: %s, content: %d chars)",
            rid,
            request.mode.value,
            len(request.content),
        )

        prompt = build_revision_prompt(request.content, request.mode, request.instruction)
        revised = await self.llm.generate(prompt)

        logger.info("[%s] /revise request successful", rid)
        return ReviseResponse(revisedContent=revised)

    async def synthesize(self, payload: Dict[str, Any]) -> SynthesizeResponse:
        """
        Combine two or more notes into one text.

        Args:
            payload: Decoded JSON body `{notes: [...], mode, prompt?}`.
        """
        request = parse_synthesis_request(payload)
        rid = request_id_var.get("")
        logger.info(
            "[%s] /synthesize request received (mode: %s, notes: %d)",
            rid,
            request.mode.value,
            len(request.documents),
        )

        prompt = build_synthesis_prompt(request.documents, request.mode, request.instruction)
        synthesized = await self.llm.generate(prompt)

        logger.info("[%s] /synthesize request successful", rid)
        return SynthesizeResponse(synthesizedContent=synthesized)
