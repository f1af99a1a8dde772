"""
Notes Proxy — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract between the note app and the proxy.
How:   Request models are built by the validation layer from the decoded JSON body
       (so that every failure maps to a specific error kind instead of a generic
       422). Response models are returned by the routes and serialized by FastAPI.
Who:   Used by services, route handlers, the function adapter and the client.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Modes
# ══════════════════════════════════════════════════════════════════════════


class RevisionMode(str, Enum):
    """How a single note is revised."""

    LIGHT = "light"
    DEEP = "deep"
    CUSTOM = "custom"


class SynthesisMode(str, Enum):
    """How several notes are combined."""

    COHERENT = "coherent_text"
    SUMMARY = "summary"
    CUSTOM = "custom"


# ══════════════════════════════════════════════════════════════════════════
# Request Models (validated, wire names already mapped)
# ══════════════════════════════════════════════════════════════════════════


class Document(BaseModel):
    """
    One note taking part in a synthesis.

    `id` is accepted for the client's convenience; only `title` and `content`
    are rendered into the prompt.
    """

    id: Optional[int] = Field(default=None, description="Client-side note identifier")
    title: Optional[str] = Field(default=None, description="Optional note title")
    content: str = Field(description="Note body")


class RevisionRequest(BaseModel):
    content: str = Field(min_length=1, description="Text of the note to revise")
    mode: RevisionMode
    instruction: Optional[str] = Field(
        default=None,
        description="Caller instruction, required for custom mode (wire name: prompt)",
    )


class SynthesisRequest(BaseModel):
    documents: List[Document] = Field(min_length=2, description="Notes in display order")
    mode: SynthesisMode
    instruction: Optional[str] = Field(
        default=None,
        description="Caller instruction, required for custom mode (wire name: prompt)",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ReviseResponse(BaseModel):
    revisedContent: str = Field(description="Generated text, returned verbatim")


class SynthesizeResponse(BaseModel):
    synthesizedContent: str = Field(description="Generated text, returned verbatim")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Human-readable description, shown to the user by the note app
        code: Machine-readable error kind (e.g. "missing_field", "generation_blocked")
        details: Optional extra context (offending field, provider block reason)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "Response blocked due to: SAFETY",
            "code": "generation_blocked",
            "details": "SAFETY",
            "request_id": "1f2e3d4c"
        }
    """

    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error kind")
    details: Optional[str] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    gemini: str = Field(description="Gemini API status: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
