"""Aggregate the three dependency lists, load them concurrently, and join the results.

Classification of every list finishes before any loading starts; each
descriptor carries its position in the combined list so the joined documents
come back in configuration order regardless of completion order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from morphir_deps.classification.classifier import (
    classify_permissive,
    classify_restrictive,
    is_remote_dependency,
)
from morphir_deps.config.loader import parse_dependency_config
from morphir_deps.config.settings import Settings, load_settings
from morphir_deps.errors import DependencyValidationError
from morphir_deps.loading.local import LocalDependencyLoader
from morphir_deps.loading.remote import RemoteDependencyLoader
from morphir_deps.loading.uri import UriFetcher
from morphir_deps.models.dependencies import (
    DependencyConfig,
    DependencyInfo,
    IndexedDependency,
    LoadedDocument,
    MorphirIRFile,
    Provenance,
)
from morphir_deps.utils import gather_fail_fast

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    import httpx

logger = logging.getLogger(__name__)

ConfigInput = DependencyConfig | Mapping[str, Any]


def _as_config(config: ConfigInput) -> DependencyConfig:
    if isinstance(config, DependencyConfig):
        return config
    return parse_dependency_config(dict(config))


def classify_config(
    config: ConfigInput, *, strict: bool = False
) -> tuple[IndexedDependency, ...]:
    """Classify ``localDependencies``, ``includes``, then ``dependencies``.

    The first two lists are classified permissively; ``dependencies`` only keeps
    data URLs and ``file:`` URLs. Entries that cannot be loaded are skipped.
    """
    config = _as_config(config)
    classified: list[DependencyInfo] = [
        classify_permissive(raw, Provenance.LOCAL_DEPENDENCIES)
        for raw in config.local_dependencies
    ]
    classified += [classify_permissive(raw, Provenance.INCLUDES) for raw in config.includes]
    for raw in config.dependencies:
        dependency = classify_restrictive(raw, Provenance.DEPENDENCIES, strict=strict)
        if dependency is not None:
            classified.append(dependency)

    indexed: list[IndexedDependency] = []
    for index, dependency in enumerate(classified):
        if dependency.kind == "unclassified":
            logger.warning(
                "Skipping unclassified %s entry %r",
                dependency.source.value if dependency.source else "-",
                dependency.path,
            )
            continue
        indexed.append(IndexedDependency(index=index, dependency=dependency))
    return tuple(indexed)


class DependencyResolver:
    """Resolve a project's dependency configuration into loaded documents."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        base_dir: str | Path | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.base_dir = base_dir
        self._client = client

    async def resolve(self, config: ConfigInput) -> list[LoadedDocument]:
        """Classify, partition, load concurrently, and return documents in config order."""
        classified = classify_config(config, strict=self.settings.strict_dependencies)
        local = [item for item in classified if not is_remote_dependency(item.dependency)]
        remote = [item for item in classified if is_remote_dependency(item.dependency)]
        logger.debug("Resolving %d local and %d remote dependencies", len(local), len(remote))

        async with (
            UriFetcher(self._client, timeout=self.settings.fetch_timeout) as fetcher,
            RemoteDependencyLoader(self._client, settings=self.settings) as remote_loader,
        ):
            local_loader = LocalDependencyLoader(base_dir=self.base_dir, fetcher=fetcher)
            local_documents, remote_documents = await gather_fail_fast(
                local_loader.load(local),
                remote_loader.load(remote),
            )

        documents = sorted([*local_documents, *remote_documents], key=lambda doc: doc.index)
        logger.info("Resolved %d dependency documents", len(documents))
        return documents


async def resolve_dependencies(
    config: ConfigInput,
    *,
    settings: Settings | None = None,
    base_dir: str | Path | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[LoadedDocument]:
    """Resolve every dependency in ``config`` into a loaded document."""
    resolver = DependencyResolver(settings=settings, base_dir=base_dir, client=client)
    return await resolver.resolve(config)


def resolve_dependencies_sync(
    config: ConfigInput,
    *,
    settings: Settings | None = None,
    base_dir: str | Path | None = None,
) -> list[LoadedDocument]:
    """Blocking wrapper around :func:`resolve_dependencies` for synchronous callers."""
    return asyncio.run(resolve_dependencies(config, settings=settings, base_dir=base_dir))


async def load_dependencies(
    config: ConfigInput,
    *,
    settings: Settings | None = None,
    base_dir: str | Path | None = None,
) -> list[Any]:
    """Resolve dependencies and return only the parsed payloads, in config order."""
    documents = await resolve_dependencies(config, settings=settings, base_dir=base_dir)
    return [document.payload for document in documents]


def validate_ir_documents(documents: Iterable[LoadedDocument]) -> list[MorphirIRFile]:
    """Check that each loaded document looks like a Morphir IR file.

    The resolver never calls this; build steps that need IR-shaped input do.
    """
    validated: list[MorphirIRFile] = []
    for document in documents:
        try:
            validated.append(MorphirIRFile.model_validate(document.payload))
        except ValidationError as exc:
            msg = f"Dependency {document.dependency.describe()} is not a Morphir IR file: {exc}"
            raise DependencyValidationError(msg, document.payload) from exc
    return validated
