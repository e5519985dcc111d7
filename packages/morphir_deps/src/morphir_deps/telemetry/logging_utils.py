"""Logging helpers that tag records with the dependency being loaded."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_current_dependency: ContextVar[tuple[str, str] | None] = ContextVar(
    "morphir_deps_current_dependency", default=None
)


def get_current_dependency() -> tuple[str, str] | None:
    """Return ``(provenance, description)`` of the dependency loading in this task."""
    return _current_dependency.get()


@contextmanager
def dependency_context(provenance: str, description: str) -> Iterator[None]:
    """Mark log records emitted inside the block with the given dependency."""
    token = _current_dependency.set((provenance, description))
    try:
        yield
    finally:
        _current_dependency.reset(token)


class ProvenanceLogFilter(logging.Filter):
    """Attach provenance and dependency identifiers to log records when available."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject provenance and dependency into the log record."""
        current = get_current_dependency()
        record.provenance, record.dependency = current or ("-", "-")
        return True


def install_provenance_log_filter(targets: Iterable[logging.Filterer] | None = None) -> None:
    """Install provenance filters for structured logging.

    Logger filters only run for records logged directly on that logger, so the
    default targets are the root logger's handlers, which also see records
    propagated from ``morphir_deps.*`` loggers.

    Args:
        targets: Optional iterable of loggers or handlers to attach the filter to.
    """
    filterers = list(targets) if targets is not None else list(logging.getLogger().handlers)
    for filterer in filterers:
        if any(isinstance(flt, ProvenanceLogFilter) for flt in filterer.filters):
            continue
        filterer.addFilter(ProvenanceLogFilter())
