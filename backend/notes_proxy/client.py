"""
Notes Proxy — Async HTTP Client
================================

What:  Client for the /revise and /synthesize endpoints, for Python callers of the proxy.
How:   httpx.AsyncClient; the response shape is checked and every failure
       becomes a ProxyClientError with a message ready to show to the user.

Error message composition:
    proxy sent {"error": E, "details": D}  → "Proxy server error: E (D)"
    proxy sent {"error": E}                → "Proxy server error: E"
    no usable response                     → connection message
    2xx without the expected text field    → invalid response message
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

import httpx

from notes_proxy.exceptions import ProxyClientError
from notes_proxy.schemas.proxy import Document, RevisionMode, SynthesisMode

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = (
    "Could not connect to the proxy server or an unknown error occurred."
)


class NotesProxyClient:
    """
    Usage:
        async with NotesProxyClient("http://localhost:3000") as client:
            text = await client.revise_note("Teh cat sat.", "light")
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 90.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "NotesProxyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def revise_note(
        self,
        content: str,
        mode: Union[RevisionMode, str],
        prompt: Optional[str] = None,
    ) -> str:
        """Send one note for revision and return the revised text."""
        body = {"content": content, "mode": RevisionMode(mode).value}
        if prompt is not None:
            body["prompt"] = prompt
        data = await self._post("/revise", body)
        return self._expect_text(data, "revisedContent", "revision")

    async def synthesize_notes(
        self,
        notes: Iterable[Union[Document, Dict[str, Any]]],
        mode: Union[SynthesisMode, str],
        prompt: Optional[str] = None,
    ) -> str:
        """Send two or more notes for synthesis and return the combined text."""
        serialized = [
            note.model_dump(exclude_none=True) if isinstance(note, Document) else note
            for note in notes
        ]
        body = {"notes": serialized, "mode": SynthesisMode(mode).value}
        if prompt is not None:
            body["prompt"] = prompt
        logger.debug("Synthesizing %d notes (mode: %s)", len(serialized), body["mode"])
        data = await self._post("/synthesize", body)
        return self._expect_text(data, "synthesizedContent", "synthesis")

    async def _post(self, path: str, body: Dict[str, Any]) -> Any:
        try:
            response = await self._client.post(path, json=body)
        except httpx.HTTPError as e:
            logger.error("Error calling proxy server %s: %s", path, e)
            raise ProxyClientError(CONNECTION_ERROR_MESSAGE, details=str(e) or None)

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_success:
            return data

        logger.error("Proxy server %s returned %d", path, response.status_code)
        if isinstance(data, dict) and isinstance(data.get("error"), str):
            message = f"Proxy server error: {data['error']}"
            details = data.get("details")
            if details:
                message += f" ({details})"
            raise ProxyClientError(
                message,
                status_code=response.status_code,
                error_code=data.get("code"),
                details=details,
            )
        raise ProxyClientError(
            f"{CONNECTION_ERROR_MESSAGE} (HTTP {response.status_code})",
            status_code=response.status_code,
        )

    @staticmethod
    def _expect_text(data: Any, field: str, operation: str) -> str:
        if isinstance(data, dict) and isinstance(data.get(field), str):
            return data[field]
        logger.error("Invalid response structure from proxy server (%s): %r", operation, data)
        raise ProxyClientError(f"Received an invalid response from the proxy server ({operation}).")
