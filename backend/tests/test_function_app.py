"""
Notes Proxy — Function-Style Deployment Tests
==============================================

The function app must behave like the standalone server for valid requests,
plus its own method handling: bare OPTIONS → 204, non-POST → 405.
"""

import importlib
import sys

import pytest

from notes_proxy import lifecycle
from notes_proxy.exceptions import GenerationBlockedError


class TestFunctionApp:

    @pytest.mark.asyncio
    async def test_root_revises(self, function_client, stub_llm):
        stub_llm.text = "The cat sat."
        response = await function_client.post(
            "/", json={"content": "Teh cat sat.", "mode": "light"}
        )

        assert response.status_code == 200
        assert response.json() == {"revisedContent": "The cat sat."}

    @pytest.mark.asyncio
    async def test_same_prompt_as_standalone_server(self, function_client, test_client, stub_llm):
        body = {"content": "Some note", "mode": "custom", "prompt": "Make it formal."}
        await function_client.post("/revise", json=body)
        await test_client.post("/revise", json=body)

        assert len(stub_llm.prompts) == 2
        assert stub_llm.prompts[0] == stub_llm.prompts[1]

    @pytest.mark.asyncio
    async def test_synthesize(self, function_client, stub_llm):
        response = await function_client.post(
            "/synthesize",
            json={"notes": [{"content": "A"}, {"content": "B"}], "mode": "coherent_text"},
        )

        assert response.status_code == 200
        assert response.json() == {"synthesizedContent": "stub output"}

    @pytest.mark.asyncio
    async def test_bare_options_returns_204(self, function_client, stub_llm):
        response = await function_client.options("/")

        assert response.status_code == 204
        assert response.content == b""
        assert stub_llm.prompts == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    async def test_non_post_rejected(self, function_client, method):
        response = await function_client.request(method, "/")

        assert response.status_code == 405
        assert response.json()["code"] == "method_not_allowed"

    @pytest.mark.asyncio
    async def test_requires_json_content_type(self, function_client, stub_llm):
        response = await function_client.post(
            "/", content=b"content=x&mode=light",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "malformed_request"
        assert stub_llm.prompts == []

    @pytest.mark.asyncio
    async def test_single_note_rejected(self, function_client):
        response = await function_client.post(
            "/synthesize", json={"notes": [{"content": "A"}], "mode": "custom", "prompt": "x"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "insufficient_documents"

    @pytest.mark.asyncio
    async def test_blocked_generation(self, function_client, stub_llm):
        stub_llm.error = GenerationBlockedError(reason="SAFETY")
        response = await function_client.post("/", json={"content": "x", "mode": "light"})

        assert response.status_code == 500
        assert "SAFETY" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_any_origin_allowed(self, function_client):
        response = await function_client.post(
            "/",
            json={"content": "x", "mode": "light"},
            headers={"Origin": "https://notes.example"},
        )

        assert response.headers["access-control-allow-origin"] == "*"


class TestFunctionAppImports:

    def test_does_not_build_standalone_app(self, monkeypatch):
        monkeypatch.delitem(sys.modules, "notes_proxy.main", raising=False)
        monkeypatch.delitem(sys.modules, "notes_proxy.function_app", raising=False)

        module = importlib.import_module("notes_proxy.function_app")

        assert "notes_proxy.main" not in sys.modules
        assert module.app.router.lifespan_context is lifecycle.lifespan
