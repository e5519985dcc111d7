"""Logging integration."""

from morphir_deps.telemetry.logging_utils import (
    ProvenanceLogFilter,
    dependency_context,
    get_current_dependency,
    install_provenance_log_filter,
)

__all__ = [
    "ProvenanceLogFilter",
    "dependency_context",
    "get_current_dependency",
    "install_provenance_log_filter",
]
