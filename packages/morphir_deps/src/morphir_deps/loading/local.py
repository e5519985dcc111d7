"""Load ``file`` and ``dataUrl`` dependencies without touching the network."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from morphir_deps.errors import LocalDependencyNotFound, UriNotFoundError
from morphir_deps.loading.decoding import parse_bytes
from morphir_deps.loading.uri import UriFetcher
from morphir_deps.models.dependencies import (
    DataUrlDependency,
    FileDependency,
    FileUrl,
    IndexedDependency,
    LoadedDocument,
    index_dependencies,
)
from morphir_deps.telemetry.logging_utils import dependency_context
from morphir_deps.utils import gather_fail_fast

if TYPE_CHECKING:
    from collections.abc import Sequence

    from morphir_deps.models.dependencies import LocalDependency

logger = logging.getLogger(__name__)


def _read_path(path: Path) -> bytes | None:
    if not path.exists():
        return None
    return path.read_bytes()


class LocalDependencyLoader:
    """Resolve local descriptors concurrently into parsed documents."""

    def __init__(
        self, *, base_dir: str | Path | None = None, fetcher: UriFetcher | None = None
    ) -> None:
        """Initialize the loader.

        Args:
            base_dir: Directory that relative paths are resolved against. Defaults to
                the current working directory.
            fetcher: URI fetcher used for ``file:`` URLs.
        """
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self._fetcher = fetcher or UriFetcher()

    async def load(
        self, dependencies: Sequence[IndexedDependency | LocalDependency]
    ) -> list[LoadedDocument]:
        """Load all dependencies concurrently; the first failure aborts the batch."""
        indexed = index_dependencies(dependencies)
        return await gather_fail_fast(*(self.load_one(item) for item in indexed))

    async def load_one(self, item: IndexedDependency) -> LoadedDocument:
        """Load a single indexed local dependency."""
        dependency = item.dependency
        source = dependency.source.value if dependency.source else "-"
        with dependency_context(source, dependency.describe()):
            match dependency:
                case FileDependency(path_or_url=FileUrl() as url):
                    payload = await self._load_file_url(url)
                case FileDependency(path_or_url=str() as path):
                    payload = await self._load_path(path)
                case DataUrlDependency(url=data_url):
                    logger.debug("Decoding data url with charset %s", data_url.charset)
                    payload = parse_bytes(data_url.body, dependency.describe(), data_url.charset)
                case _:
                    msg = f"Not a local dependency: {dependency.kind}"
                    raise ValueError(msg)
        return LoadedDocument(payload=payload, dependency=dependency, index=item.index)

    def _resolve(self, path: str) -> Path:
        candidate = Path(path).expanduser()
        if self.base_dir is not None and not candidate.is_absolute():
            return self.base_dir / candidate
        return candidate

    async def _load_path(self, path: str) -> object:
        logger.info("Handling path: %s", path)
        data = await asyncio.to_thread(_read_path, self._resolve(path))
        if data is None:
            msg = f'Local dependency at path "{path}" does not exist'
            raise LocalDependencyNotFound(msg, path)
        return parse_bytes(data, path)

    async def _load_file_url(self, url: FileUrl) -> object:
        logger.info("Handling url: %s", url)
        try:
            data = await self._fetcher.fetch(url)
        except UriNotFoundError as exc:
            msg = f'Local dependency at url "{url}" does not exist'
            raise LocalDependencyNotFound(msg, str(url), exc) from exc
        return parse_bytes(data, str(url))


async def load_local(
    dependencies: Sequence[IndexedDependency | LocalDependency],
    *,
    base_dir: str | Path | None = None,
) -> list[LoadedDocument]:
    """Load local dependencies with a default loader."""
    return await LocalDependencyLoader(base_dir=base_dir).load(dependencies)
