"""Load ``http`` and ``github`` dependencies over the network."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from morphir_deps.classification.validators import parse_github_shorthand
from morphir_deps.config.settings import Settings, load_settings
from morphir_deps.errors import RemoteFetchFailed
from morphir_deps.loading.decoding import parse_bytes
from morphir_deps.models.dependencies import (
    GithubDependency,
    GithubReference,
    HttpDependency,
    IndexedDependency,
    LoadedDocument,
    index_dependencies,
)
from morphir_deps.telemetry.logging_utils import dependency_context
from morphir_deps.utils import gather_fail_fast

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from morphir_deps.models.dependencies import GithubConfig, RemoteDependency

logger = logging.getLogger(__name__)


def github_raw_url(config: GithubConfig, settings: Settings | None = None) -> str:
    """Build the raw-file URL for a GitHub reference.

    Layout is ``{base}/{owner}/{repo}/{ref}/{path}``; missing parts come from settings.
    """
    settings = settings or load_settings()
    reference = parse_github_shorthand(config) if isinstance(config, str) else config
    base_url = (reference.base_url or settings.github_base_url).rstrip("/")
    ref = reference.ref or settings.github_default_ref
    path = (reference.path or settings.github_default_path).lstrip("/")
    return "/".join(
        [
            base_url,
            quote(reference.owner, safe=""),
            quote(reference.repo, safe=""),
            quote(ref, safe="/"),
            quote(path, safe="/"),
        ]
    )


class RemoteDependencyLoader:
    """Fetch remote descriptors concurrently and parse them as JSON documents."""

    def __init__(
        self, client: httpx.AsyncClient | None = None, *, settings: Settings | None = None
    ) -> None:
        """Initialize the loader.

        Args:
            client: Shared HTTP client. One is created (and owned) on first use if omitted.
            settings: Timeout and GitHub defaults.
        """
        self._settings = settings or load_settings()
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> RemoteDependencyLoader:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this loader created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _http_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.fetch_timeout, follow_redirects=True
            )
        return self._client

    async def load(
        self, dependencies: Sequence[IndexedDependency | RemoteDependency]
    ) -> list[LoadedDocument]:
        """Load all dependencies concurrently; the first failure aborts the batch."""
        indexed = index_dependencies(dependencies)
        return await gather_fail_fast(*(self.load_one(item) for item in indexed))

    async def load_one(self, item: IndexedDependency) -> LoadedDocument:
        """Load a single indexed remote dependency."""
        dependency = item.dependency
        source = dependency.source.value if dependency.source else "-"
        with dependency_context(source, dependency.describe()):
            match dependency:
                case HttpDependency(url=url):
                    payload = await self.fetch_json(url)
                case GithubDependency(config=config):
                    payload = await self.fetch_json(self.resolve_github(config))
                case _:
                    msg = f"Not a remote dependency: {dependency.kind}"
                    raise ValueError(msg)
        return LoadedDocument(payload=payload, dependency=dependency, index=item.index)

    def resolve_github(self, config: GithubConfig | GithubReference) -> str:
        """Resolve a GitHub config to the raw-file URL it will be fetched from."""
        return github_raw_url(config, self._settings)

    async def fetch_json(self, url: str) -> Any:
        """GET ``url`` and parse the body as UTF-8 JSON."""
        logger.info("Fetching remote dependency: %s", url)
        try:
            response = await self._http_client().get(url, timeout=self._settings.fetch_timeout)
        except httpx.HTTPError as exc:
            msg = f'Remote dependency at url "{url}" could not be fetched: {exc}'
            logger.warning("Fetch failed for %s: %s", url, exc)
            raise RemoteFetchFailed(msg, url, cause=exc) from exc
        if not response.is_success:
            msg = f'Remote dependency at url "{url}" returned HTTP {response.status_code}'
            logger.warning("Fetch failed for %s: HTTP %d", url, response.status_code)
            raise RemoteFetchFailed(msg, url, status_code=response.status_code)
        return parse_bytes(response.content, url, "utf-8")


async def load_remote(
    dependencies: Sequence[IndexedDependency | RemoteDependency],
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> list[LoadedDocument]:
    """Load remote dependencies with a loader that is closed afterwards."""
    async with RemoteDependencyLoader(client, settings=settings) as loader:
        return await loader.load(dependencies)
