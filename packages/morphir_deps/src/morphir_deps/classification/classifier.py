"""Turn raw dependency specifiers into typed descriptors without doing any I/O.

Two named policies exist because the configuration lists differ:

* ``classify_permissive`` (``localDependencies`` and ``includes``) accepts any
  string and falls back to treating it as a filesystem path.
* ``classify_restrictive`` (``dependencies``) accepts only data URLs and
  ``file:`` URLs. Anything else is dropped, not classified.
"""

from __future__ import annotations

import logging

from morphir_deps.classification.validators import (
    GITHUB_PREFIX,
    HTTP_SCHEMES,
    validate_data_url,
    validate_file_url,
    validate_github_config,
    validate_http_url,
)
from morphir_deps.errors import DependencyValidationError
from morphir_deps.models.dependencies import (
    DataUrlDependency,
    DependencyInfo,
    FileDependency,
    GithubDependency,
    HttpDependency,
    LocalDependency,
    Provenance,
    UnclassifiedDependency,
)

logger = logging.getLogger(__name__)


def _scheme_of(raw: str) -> str:
    scheme, sep, _ = raw.partition(":")
    return scheme.lower() if sep else ""


def classify_permissive(raw: str, source: Provenance) -> DependencyInfo:
    """Classify a specifier from a permissive list. Never raises."""
    specifier = raw.strip() if isinstance(raw, str) else ""
    if not specifier:
        return UnclassifiedDependency(path=raw if isinstance(raw, str) else "", source=source)

    try:
        return DataUrlDependency(url=validate_data_url(specifier), source=source)
    except DependencyValidationError:
        pass

    scheme = _scheme_of(specifier)
    try:
        if scheme == "file":
            return FileDependency(path_or_url=validate_file_url(specifier), source=source)
        if scheme in HTTP_SCHEMES:
            return HttpDependency(url=validate_http_url(specifier), source=source)
        if specifier.startswith(GITHUB_PREFIX):
            config = validate_github_config(specifier.removeprefix(GITHUB_PREFIX))
            return GithubDependency(config=config, source=source)
    except DependencyValidationError as exc:
        logger.debug("Treating %r as a path: %s", specifier, exc)

    return FileDependency(path_or_url=specifier, source=source)


def classify_restrictive(
    raw: str, source: Provenance = Provenance.DEPENDENCIES, *, strict: bool = False
) -> LocalDependency | None:
    """Classify a specifier that must be a data URL or a ``file:`` URL.

    Returns ``None`` for any other input, or raises the file URL validation
    error when ``strict`` is set.
    """
    specifier = raw.strip() if isinstance(raw, str) else ""
    try:
        return DataUrlDependency(url=validate_data_url(specifier), source=source)
    except DependencyValidationError:
        pass
    try:
        return FileDependency(path_or_url=validate_file_url(specifier), source=source)
    except DependencyValidationError:
        if strict:
            raise
        logger.debug("Dropping %s entry %r: not a data url or file url", source.value, raw)
        return None


def is_remote_dependency(dependency: DependencyInfo) -> bool | None:
    """Return whether loading needs the network; ``None`` for unclassified input."""
    match dependency.kind:
        case "file" | "dataUrl":
            return False
        case "http" | "github":
            return True
        case _:
            return None
