"""
Notes Proxy — Request Validation Unit Tests
============================================

What we test:
    ✅ Body decoding: content type, JSON syntax, top-level object
    ✅ Revise: field order and the specific error kind for each violation
    ✅ Synthesize: document count is checked before mode
    ✅ Instructions are trimmed; blank ones count as missing
"""

from enum import Enum
from typing import Type, get_type_hints

import pytest

from notes_proxy.exceptions import (
    InsufficientDocumentsError,
    InvalidDocumentError,
    InvalidModeError,
    MalformedRequestError,
    MissingFieldError,
    MissingInstructionError,
)
from notes_proxy.schemas.proxy import RevisionMode, SynthesisMode
from notes_proxy.services.validation import (
    _mode,
    decode_json_body,
    parse_revision_request,
    parse_synthesis_request,
)


class TestDecodeJsonBody:

    def test_decodes_object(self):
        assert decode_json_body("application/json", b'{"a": 1}') == {"a": 1}

    def test_accepts_charset_parameter(self):
        assert decode_json_body("application/json; charset=utf-8", b"{}") == {}

    @pytest.mark.parametrize("content_type", [None, "", "text/plain", "multipart/form-data"])
    def test_rejects_other_content_types(self, content_type):
        with pytest.raises(MalformedRequestError):
            decode_json_body(content_type, b"{}")

    @pytest.mark.parametrize("body", [b"", b"{not json", b"\xff\xfe"])
    def test_rejects_invalid_json(self, body):
        with pytest.raises(MalformedRequestError):
            decode_json_body("application/json", body)

    @pytest.mark.parametrize("body", [b"[]", b'"text"', b"42", b"null"])
    def test_rejects_non_object(self, body):
        with pytest.raises(MalformedRequestError):
            decode_json_body("application/json", body)


class TestRevisionValidation:

    def test_valid_light_request(self):
        request = parse_revision_request({"content": "Teh cat sat.", "mode": "light"})
        assert request.content == "Teh cat sat."
        assert request.mode is RevisionMode.LIGHT
        assert request.instruction is None

    @pytest.mark.parametrize("content", [None, "", 12, ["a"]])
    def test_missing_content(self, content):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_revision_request({"content": content, "mode": "light"})
        assert exc_info.value.field == "content"

    def test_missing_mode(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_revision_request({"content": "text"})
        assert exc_info.value.field == "mode"

    def test_unknown_mode_is_rejected(self):
        with pytest.raises(InvalidModeError):
            parse_revision_request({"content": "text", "mode": "rewrite"})

    @pytest.mark.parametrize("prompt", [None, "", "   \n\t", 7])
    def test_custom_requires_instruction(self, prompt):
        with pytest.raises(MissingInstructionError):
            parse_revision_request({"content": "text", "mode": "custom", "prompt": prompt})

    def test_custom_instruction_is_trimmed(self):
        request = parse_revision_request(
            {"content": "text", "mode": "custom", "prompt": "  Make it rhyme.  "}
        )
        assert request.instruction == "Make it rhyme."

    def test_content_checked_before_mode(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_revision_request({"mode": "nonsense"})
        assert exc_info.value.field == "content"


class TestSynthesisValidation:

    def test_valid_request_keeps_order_and_fields(self):
        request = parse_synthesis_request(
            {
                "notes": [
                    {"id": 2, "title": "Second", "content": "B"},
                    {"content": "A"},
                ],
                "mode": "coherent_text",
            }
        )
        assert request.mode is SynthesisMode.COHERENT
        assert [d.content for d in request.documents] == ["B", "A"]
        assert request.documents[0].id == 2
        assert request.documents[0].title == "Second"
        assert request.documents[1].title is None

    @pytest.mark.parametrize("notes", [None, "A,B", {"content": "A"}])
    def test_missing_notes(self, notes):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_synthesis_request({"notes": notes, "mode": "summary"})
        assert exc_info.value.field == "notes"

    @pytest.mark.parametrize("mode", ["summary", "coherent_text", "custom", "bogus", None])
    def test_insufficient_documents_regardless_of_mode(self, mode):
        with pytest.raises(InsufficientDocumentsError) as exc_info:
            parse_synthesis_request({"notes": [{"content": "A"}], "mode": mode})
        assert exc_info.value.count == 1

    def test_empty_notes_list(self):
        with pytest.raises(InsufficientDocumentsError):
            parse_synthesis_request({"notes": [], "mode": "summary"})

    def test_unknown_mode(self):
        with pytest.raises(InvalidModeError):
            parse_synthesis_request(
                {"notes": [{"content": "A"}, {"content": "B"}], "mode": "coherent"}
            )

    def test_missing_mode(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_synthesis_request({"notes": [{"content": "A"}, {"content": "B"}]})
        assert exc_info.value.field == "mode"

    def test_custom_requires_instruction(self):
        with pytest.raises(MissingInstructionError):
            parse_synthesis_request(
                {"notes": [{"content": "A"}, {"content": "B"}], "mode": "custom", "prompt": " "}
            )

    @pytest.mark.parametrize(
        "bad_note",
        [
            {"title": "no content"},
            {"content": 5},
            {"content": None},
            {"content": "x", "title": 3},
            "just a string",
        ],
    )
    def test_invalid_document(self, bad_note):
        with pytest.raises(InvalidDocumentError) as exc_info:
            parse_synthesis_request(
                {"notes": [{"content": "A"}, bad_note], "mode": "summary"}
            )
        assert exc_info.value.index == 1

    def test_empty_content_is_allowed(self):
        request = parse_synthesis_request(
            {"notes": [{"content": ""}, {"content": "B"}], "mode": "summary"}
        )
        assert request.documents[0].content == ""

    def test_non_integer_ids_are_dropped(self):
        request = parse_synthesis_request(
            {"notes": [{"id": "x", "content": "A"}, {"id": True, "content": "B"}], "mode": "summary"}
        )
        assert [d.id for d in request.documents] == [None, None]


class TestModeHelpers:

    def test_mode_helper_is_annotated(self):
        hints = get_type_hints(_mode)
        assert hints["enum_type"] == Type[Enum]
        assert hints["return"] is Enum
