"""
Notes Proxy — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── stub_llm: In-memory provider recording every prompt it receives
    ├── test_client: HTTPX AsyncClient for the standalone app (stub installed)
    └── function_client: HTTPX AsyncClient for the function app (stub installed)

No test talks to the real Gemini API.
"""

import os

# Override settings for testing BEFORE any application imports
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from notes_proxy.services.gemini_service import get_llm_service  # noqa: E402
from notes_proxy.services.llm_base import LLMService  # noqa: E402


class StubLLMService(LLMService):
    """
    Provider double: returns a canned text or raises a canned error.

    Every prompt received is recorded so tests can assert on the exact text
    sent to the model, or that no call was made at all.
    """

    def __init__(self, text: str = "stub output", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.healthy = True
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text

    async def health_check(self) -> bool:
        return self.healthy


@pytest.fixture
def stub_llm():
    return StubLLMService()


@pytest_asyncio.fixture
async def test_client(stub_llm):
    """
    Async HTTP client wired to the standalone app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from notes_proxy.main import app

    app.dependency_overrides[get_llm_service] = lambda: stub_llm
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def function_client(stub_llm):
    from notes_proxy.function_app import app

    app.dependency_overrides[get_llm_service] = lambda: stub_llm
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
