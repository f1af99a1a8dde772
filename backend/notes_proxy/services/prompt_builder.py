"""
Notes Proxy — Prompt Builder
=============================

What:  Pure functions rendering the final prompt sent to the generative model.
How:   A lookup table maps each mode to a template function; the note text is
       appended after the rendered instruction block.
Who:   Called by ProxyService for both the standalone server and the function
       adapter, so both deployments always send identical prompts.

Properties:
    - Deterministic: no timestamps, randomness or I/O
    - Revision prompts start with the mode's instruction and end with the
      note content, unmodified
    - Synthesis prompts keep document order and emit a title line only for
      non-blank titles
"""

from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Sequence, Type, Union

from notes_proxy.exceptions import InvalidModeError, MissingInstructionError
from notes_proxy.schemas.proxy import Document, RevisionMode, SynthesisMode

# Renders the instruction block for one mode from the optional caller instruction
Template = Callable[[Optional[str]], str]


# ══════════════════════════════════════════════════════════════════════════
# Revision Templates
# ══════════════════════════════════════════════════════════════════════════

LIGHT_REVISION_INSTRUCTION = (
    "Correct the following text for grammar, spelling and punctuation errors. "
    "Preserve the original meaning and style. Reply only with the corrected text, "
    "without any additional comments or introductions."
)

DEEP_REVISION_INSTRUCTION = (
    "Rewrite the following text, improving its structure, style and flow. "
    "Fix any errors. The goal is a clearer and more professional text. "
    "Reply only with the revised text, without any additional comments or introductions."
)

CUSTOM_REVISION_SUFFIX = (
    "Reply only with the result of applying the instruction above to the following "
    "text, without any additional comments or introductions."
)

TEXT_DELIMITER = "\n\nText:\n"


def _light_revision(instruction: Optional[str]) -> str:
    return LIGHT_REVISION_INSTRUCTION


def _deep_revision(instruction: Optional[str]) -> str:
    return DEEP_REVISION_INSTRUCTION


def _custom_revision(instruction: Optional[str]) -> str:
    if not instruction:
        raise MissingInstructionError()
    return f"{instruction}\n{CUSTOM_REVISION_SUFFIX}"


REVISION_TEMPLATES: Dict[RevisionMode, Template] = {
    RevisionMode.LIGHT: _light_revision,
    RevisionMode.DEEP: _deep_revision,
    RevisionMode.CUSTOM: _custom_revision,
}


# ══════════════════════════════════════════════════════════════════════════
# Synthesis Templates
# ══════════════════════════════════════════════════════════════════════════

FORMAT_CONSTRAINT = (
    "\n\nReturn *only* the plain text of the result, without any Markdown formatting, "
    "code markers (e.g. ```), headings, bullet points (unless the result is a bulleted "
    "summary) or additional explanations."
)

COHERENT_SYNTHESIS_INSTRUCTION = (
    "Analyze the documents below and create one coherent text that combines their "
    "main ideas and information. Keep a logical flow and transition smoothly between "
    "the topics of the different documents."
)

SUMMARY_SYNTHESIS_INSTRUCTION = (
    "Analyze the documents below and create a concise summary (for example a bulleted "
    "list or short paragraphs) that captures the most important information and key "
    "points from all of the documents."
)

SOURCE_DOCUMENTS_LABEL = "\n\nSource documents follow:\n\n"


def _coherent_synthesis(instruction: Optional[str]) -> str:
    return COHERENT_SYNTHESIS_INSTRUCTION


def _summary_synthesis(instruction: Optional[str]) -> str:
    return SUMMARY_SYNTHESIS_INSTRUCTION


def _custom_synthesis(instruction: Optional[str]) -> str:
    if not instruction:
        raise MissingInstructionError()
    return instruction


SYNTHESIS_TEMPLATES: Dict[SynthesisMode, Template] = {
    SynthesisMode.COHERENT: _coherent_synthesis,
    SynthesisMode.SUMMARY: _summary_synthesis,
    SynthesisMode.CUSTOM: _custom_synthesis,
}


# ══════════════════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════════════════


def _resolve_mode(
    mode: Union[Enum, str],
    enum_type: Type[Enum],
    templates: Mapping[Enum, Template],
) -> Template:
    try:
        return templates[enum_type(mode)]
    except (ValueError, KeyError):
        raise InvalidModeError(mode, valid_modes=[m.value for m in enum_type])


def build_revision_prompt(
    content: str,
    mode: Union[RevisionMode, str],
    instruction: Optional[str] = None,
) -> str:
    """
    Render the prompt for revising a single note.

    Args:
        content: Note text, appended verbatim after the instruction block.
        mode: light, deep or custom.
        instruction: Caller instruction, required for custom mode. Callers
            trim it and reject blank values before calling.

    Raises:
        InvalidModeError: Unrecognized mode.
        MissingInstructionError: Custom mode without an instruction.
    """
    template = _resolve_mode(mode, RevisionMode, REVISION_TEMPLATES)
    return f"{template(instruction)}{TEXT_DELIMITER}{content}"


def format_document(position: int, document: Document) -> str:
    """Render one document block; `position` is 1-based."""
    block = f"--- Document {position} ---\n"
    if document.title and document.title.strip():
        block += f"Title: {document.title}\n"
    block += f"Content:\n{document.content}\n"
    return block


def build_synthesis_prompt(
    documents: Sequence[Document],
    mode: Union[SynthesisMode, str],
    instruction: Optional[str] = None,
) -> str:
    """
    Render the prompt for combining several notes.

    Every mode gets the plain-text formatting constraint, followed by the
    numbered document blocks in input order, separated by blank lines.

    Raises:
        InvalidModeError: Unrecognized mode.
        MissingInstructionError: Custom mode without an instruction.
    """
    template = _resolve_mode(mode, SynthesisMode, SYNTHESIS_TEMPLATES)
    blocks = "\n\n".join(
        format_document(position, document)
        for position, document in enumerate(documents, start=1)
    )
    return f"{template(instruction)}{FORMAT_CONSTRAINT}{SOURCE_DOCUMENTS_LABEL}{blocks}"
