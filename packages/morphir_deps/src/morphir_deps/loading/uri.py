"""Fetch-by-URI primitive supporting ``file:`` and ``http(s):`` URLs."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import httpx

from morphir_deps.classification.validators import validate_file_url
from morphir_deps.config.settings import DEFAULT_FETCH_TIMEOUT
from morphir_deps.errors import UnsupportedSchemeError, UriNotFoundError
from morphir_deps.loading.decoding import parse_bytes
from morphir_deps.models.dependencies import FileUrl

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

logger = logging.getLogger(__name__)

NOT_FOUND_STATUSES = frozenset({404, 410})


def _read_file(path: Path, url: str) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        msg = f"No file at {url}"
        raise UriNotFoundError(msg, url) from None


class UriFetcher:
    """Fetch raw bytes for a URI, signalling missing resources with ``UriNotFoundError``."""

    def __init__(
        self, client: httpx.AsyncClient | None = None, *, timeout: float = DEFAULT_FETCH_TIMEOUT
    ) -> None:
        """Initialize the fetcher with an optional shared HTTP client."""
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    async def __aenter__(self) -> UriFetcher:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _http_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def fetch(self, url: str | FileUrl) -> bytes:
        """Return the bytes stored at ``url``."""
        text = str(url)
        scheme = urlsplit(text).scheme.lower()
        if scheme == "file":
            file_url = url if isinstance(url, FileUrl) else validate_file_url(text)
            return await asyncio.to_thread(_read_file, file_url.to_path(), text)
        if scheme in ("http", "https"):
            response = await self._http_client().get(text, timeout=self._timeout)
            if response.status_code in NOT_FOUND_STATUSES:
                msg = f"No resource at {text} (HTTP {response.status_code})"
                raise UriNotFoundError(msg, text)
            response.raise_for_status()
            return response.content
        msg = f"Unsupported URI scheme {scheme!r} for {text}"
        raise UnsupportedSchemeError(msg, text, scheme)

    async def fetch_json(self, url: str | FileUrl) -> Any:
        """Fetch ``url`` and parse its body as UTF-8 JSON."""
        return parse_bytes(await self.fetch(url), str(url))
