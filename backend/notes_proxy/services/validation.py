"""
Notes Proxy — Request Validation
=================================

What:  Turns a decoded JSON body into a RevisionRequest or SynthesisRequest.
How:   Checks fields in a fixed order and raises the most specific
       ValidationError subclass for the first violation found.
When:  Before any prompt is built or any provider call is made.

Check order:
    decode_json_body:   Content-Type → JSON syntax → top-level object
    revise:             content → mode (present) → mode (known) → prompt
    synthesize:         notes (list) → notes (count) → mode → prompt → each note
"""

import json
from enum import Enum
from typing import Any, Dict, Optional, Type

from notes_proxy.exceptions import (
    InsufficientDocumentsError,
    InvalidDocumentError,
    InvalidModeError,
    MalformedRequestError,
    MissingFieldError,
    MissingInstructionError,
)
from notes_proxy.schemas.proxy import (
    Document,
    RevisionMode,
    RevisionRequest,
    SynthesisMode,
    SynthesisRequest,
)

MIN_SYNTHESIS_DOCUMENTS = 2


def decode_json_body(content_type: Optional[str], body: bytes) -> Dict[str, Any]:
    """
    Decode a raw request body, shared by both transport adapters.

    Raises:
        MalformedRequestError: Content-Type is not application/json, the body
            is not valid UTF-8 JSON, or the top-level value is not an object.
    """
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type != "application/json":
        raise MalformedRequestError(
            message="Content-Type must be application/json.",
            details=media_type or None,
        )
    try:
        payload = json.loads(body)
    except ValueError as e:
        # Covers JSONDecodeError and UnicodeDecodeError
        raise MalformedRequestError(
            message="Request body is not valid JSON.",
            context={"error": str(e)},
        )
    if not isinstance(payload, dict):
        raise MalformedRequestError(message="Request body must be a JSON object.")
    return payload


def _instruction(payload: Dict[str, Any]) -> Optional[str]:
    """Return the trimmed `prompt` field, or None when absent or blank."""
    value = payload.get("prompt")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _mode(payload: Dict[str, Any], enum_type: Type[Enum]) -> Enum:
    raw = payload.get("mode")
    if raw is None or raw == "":
        raise MissingFieldError("mode")
    try:
        return enum_type(raw)
    except ValueError:
        raise InvalidModeError(raw, valid_modes=[m.value for m in enum_type])


def parse_revision_request(payload: Dict[str, Any]) -> RevisionRequest:
    content = payload.get("content")
    if not isinstance(content, str) or content == "":
        raise MissingFieldError("content", "Missing 'content' in request body.")

    mode = _mode(payload, RevisionMode)
    instruction = _instruction(payload)
    if mode is RevisionMode.CUSTOM and instruction is None:
        raise MissingInstructionError()

    return RevisionRequest(content=content, mode=mode, instruction=instruction)


def parse_synthesis_request(payload: Dict[str, Any]) -> SynthesisRequest:
    notes = payload.get("notes")
    if not isinstance(notes, list):
        raise MissingFieldError("notes", "Missing or invalid 'notes' array in request body.")
    if len(notes) < MIN_SYNTHESIS_DOCUMENTS:
        raise InsufficientDocumentsError(count=len(notes), minimum=MIN_SYNTHESIS_DOCUMENTS)

    mode = _mode(payload, SynthesisMode)
    instruction = _instruction(payload)
    if mode is SynthesisMode.CUSTOM and instruction is None:
        raise MissingInstructionError()

    documents = []
    for index, note in enumerate(notes):
        if not isinstance(note, dict):
            raise InvalidDocumentError(index, "must be an object")
        if not isinstance(note.get("content"), str):
            raise InvalidDocumentError(index)
        title = note.get("title")
        if title is not None and not isinstance(title, str):
            raise InvalidDocumentError(index, "has a 'title' that is not a string")
        note_id = note.get("id")
        if isinstance(note_id, bool) or not isinstance(note_id, int):
            # ids never reach the prompt; anything but an integer is dropped
            note_id = None
        documents.append(Document(id=note_id, title=title, content=note["content"]))

    return SynthesisRequest(documents=documents, mode=mode, instruction=instruction)
