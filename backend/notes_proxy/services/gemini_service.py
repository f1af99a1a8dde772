"""
Notes Proxy — Google Gemini Service Implementation
===================================================

What:  Concrete LLM service using the Google Gemini API for note revision and synthesis.
How:   Sends the prompt to Gemini as the sole input, bounded by a timeout, and
       translates blocked or failed responses into the application's exceptions.
Who:   Built once per process (lazily, normally during startup); called by
       ProxyService for every revise/synthesize request.

Response Interpretation:
    prompt_feedback.block_reason set        → GenerationBlockedError(reason)
    no candidates                           → GenerationBlockedError (generic)
    finish_reason SAFETY/RECITATION/...     → GenerationBlockedError(reason)
    candidate without content parts         → GenerationFailedError
    timeout / network / SDK error           → GenerationFailedError
    otherwise                               → concatenated text of the parts, verbatim

There are no retries: a failed call is reported and the client may resubmit.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import google.generativeai as genai
from google.generativeai.types import (
    BlockedPromptException,
    HarmBlockThreshold,
    HarmCategory,
    StopCandidateException,
)

from notes_proxy.config import settings
from notes_proxy.exceptions import GenerationBlockedError, GenerationFailedError
from notes_proxy.middleware.request_id import request_id_var
from notes_proxy.services.llm_base import LLMService

logger = logging.getLogger(__name__)

# Finish reasons meaning the provider withheld the output
BLOCKING_FINISH_REASONS = {
    "SAFETY",
    "RECITATION",
    "BLOCKLIST",
    "PROHIBITED_CONTENT",
    "SPII",
}

SAFETY_CATEGORIES = (
    HarmCategory.HARM_CATEGORY_HARASSMENT,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


def _enum_name(value: Any) -> Optional[str]:
    """
    Name of a provider enum value, or None for unset/unspecified values.

    Accepts proto enums, plain strings and ints (0 means unspecified).
    """
    if value is None:
        return None
    name = getattr(value, "name", None)
    if not isinstance(name, str):
        if isinstance(value, int):
            return None if value == 0 else str(value)
        name = str(value)
    if not name or name.endswith("UNSPECIFIED"):
        return None
    return name


class GeminiService(LLMService):
    """
    Google Gemini implementation of the generation provider.

    Model selection, generation parameters and safety thresholds come from
    settings and are passed to the SDK unchanged.
    """

    def __init__(self):
        """
        Configure the SDK and build the model handle.

        Raises:
            ConfigurationMissingError: GEMINI_API_KEY is not configured.
        """
        settings.validate_required()
        genai.configure(api_key=settings.gemini_api_key)

        self.timeout = settings.generation_timeout
        self.model = genai.GenerativeModel(
            model_name=settings.gemini_model,
            generation_config=self.generation_config(),
            safety_settings=self.safety_settings(),
        )

        logger.info(
            "GeminiService initialized with model=%s, timeout=%.0fs, safety=%s",
            settings.gemini_model,
            self.timeout,
            settings.gemini_safety_threshold,
        )

    @staticmethod
    def generation_config() -> Dict[str, Any]:
        return {
            "temperature": settings.gemini_temperature,
            "top_p": settings.gemini_top_p,
            "top_k": settings.gemini_top_k,
            "max_output_tokens": settings.gemini_max_output_tokens,
            "response_mime_type": "text/plain",
        }

    @staticmethod
    def safety_settings() -> Dict[Any, Any]:
        threshold = HarmBlockThreshold[settings.gemini_safety_threshold]
        return {category: threshold for category in SAFETY_CATEGORIES}

    async def generate(self, prompt: str) -> str:
        """
        Send one prompt to Gemini and return its text.

        Flow:
            1. Call generate_content_async, bounded by the configured timeout
            2. Translate SDK exceptions into GenerationBlocked/GenerationFailed
            3. Inspect the response for provider blocks
            4. Return the candidate text verbatim

        Raises:
            GenerationBlockedError: Output withheld by the provider
            GenerationFailedError: Any other failure
        """
        rid = request_id_var.get("")
        start_time = time.perf_counter()

        logger.info("[%s] Calling Gemini (prompt: %d chars)", rid, len(prompt))

        try:
            response = await asyncio.wait_for(
                self.model.generate_content_async(
                    prompt,
                    request_options={"timeout": self.timeout},
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, TimeoutError):
            logger.error("[%s] Gemini call timed out after %.0fs", rid, self.timeout)
            raise GenerationFailedError(
                message="The request to Gemini timed out.",
                details=f"No response within {self.timeout:.0f} seconds",
                context={"request_id": rid},
            )
        except BlockedPromptException as e:
            logger.warning("[%s] Gemini blocked the prompt: %s", rid, e)
            raise GenerationBlockedError(context={"request_id": rid})
        except StopCandidateException as e:
            candidate = e.args[0] if e.args else None
            reason = _enum_name(getattr(candidate, "finish_reason", None))
            logger.warning("[%s] Gemini stopped the candidate: %s", rid, reason)
            raise GenerationBlockedError(reason=reason, context={"request_id": rid})
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "[%s] Gemini API call failed after %.0fms: %s",
                rid,
                duration_ms,
                str(e),
                exc_info=True,
            )
            raise GenerationFailedError(
                details=str(e) or type(e).__name__,
                context={"request_id": rid, "error_type": type(e).__name__},
            )

        text = self._extract_text(response, rid)

        logger.info(
            "[%s] Gemini call completed in %.0fms, received %d chars",
            rid,
            (time.perf_counter() - start_time) * 1000,
            len(text),
        )
        return text

    @staticmethod
    def _extract_text(response: Any, rid: str = "") -> str:
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = _enum_name(getattr(feedback, "block_reason", None))
        if block_reason:
            logger.warning("[%s] Gemini response blocked: %s", rid, block_reason)
            raise GenerationBlockedError(reason=block_reason, context={"request_id": rid})

        candidates = list(getattr(response, "candidates", None) or [])
        if not candidates:
            logger.warning("[%s] Gemini returned no candidates", rid)
            raise GenerationBlockedError(context={"request_id": rid})

        candidate = candidates[0]
        finish_reason = _enum_name(getattr(candidate, "finish_reason", None))
        if finish_reason in BLOCKING_FINISH_REASONS:
            logger.warning("[%s] Gemini candidate withheld: %s", rid, finish_reason)
            raise GenerationBlockedError(reason=finish_reason, context={"request_id": rid})

        content = getattr(candidate, "content", None)
        parts = list(getattr(content, "parts", None) or [])
        if not parts:
            logger.error("[%s] Gemini candidate has no content (finish=%s)", rid, finish_reason)
            raise GenerationFailedError(
                message="Gemini returned a response without content.",
                details=finish_reason,
                context={"request_id": rid},
            )

        return "".join(getattr(part, "text", None) or "" for part in parts)

    async def health_check(self) -> bool:
        """
        Check if the Gemini API is reachable.

        How:     Lists available models (no token cost) in a worker thread;
                 the SDK call is synchronous.
        Returns: True if reachable and authenticated, False otherwise.
        """
        try:
            model_names = await asyncio.to_thread(
                lambda: [m.name for m in genai.list_models()]
            )
            target = f"models/{settings.gemini_model}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


# ── Process-wide Handle ───────────────────────────────────────────────────
# Built on first use (the lifespan hook forces this at startup) and never
# rebuilt; the instance is read-only after construction.
_gemini_service: Optional[GeminiService] = None


def get_llm_service() -> LLMService:
    """FastAPI dependency returning the shared provider handle."""
    global _gemini_service
    if _gemini_service is None:
        _gemini_service = GeminiService()
    return _gemini_service
