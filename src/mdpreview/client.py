"""Document-fetch client for the dev server's markdown endpoint"""

from typing import Optional
from urllib.parse import quote

import httpx

from mdpreview.errors import DocumentDecodeError, DocumentFetchError


class DocumentClient:
    """Fetches document text by name from `GET /api/markdown/{name}`."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    async def _get(self, path: str) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.get(path)
                response.raise_for_status()
                return response
        except httpx.HTTPError as e:
            raise DocumentFetchError(f"GET {path} failed: {e}") from e

    async def fetch(self, name: str) -> str:
        """Return the `content` field of the endpoint's JSON answer."""
        response = await self._get(f"/api/markdown/{quote(name)}")
        try:
            content = response.json()["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise DocumentDecodeError(f"Unexpected response for {name!r}: {e}") from e
        if not isinstance(content, str):
            raise DocumentDecodeError(f"Unexpected response for {name!r}: content is {type(content).__name__}")
        return content

    async def fetch_raw(self, path: str) -> str:
        """Return a raw static file as text, e.g. `/test/test-01.md`."""
        response = await self._get(path)
        return response.text
