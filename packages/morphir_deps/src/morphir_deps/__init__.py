from morphir_deps.classification import (
    classify_permissive,
    classify_restrictive,
    encode_data_url,
    parse_data_url,
)
from morphir_deps.config import Settings, load_dependency_config, load_settings
from morphir_deps.errors import (
    DependencyError,
    DependencyValidationError,
    DocumentDecodeError,
    LocalDependencyNotFound,
    RemoteFetchFailed,
)
from morphir_deps.loading import (
    LocalDependencyLoader,
    RemoteDependencyLoader,
    UriFetcher,
    load_local,
    load_remote,
)
from morphir_deps.models import (
    DependencyConfig,
    LoadedDocument,
    MorphirIRFile,
    Provenance,
)
from morphir_deps.resolver import (
    DependencyResolver,
    classify_config,
    load_dependencies,
    resolve_dependencies,
    resolve_dependencies_sync,
    validate_ir_documents,
)
from morphir_deps.telemetry import install_provenance_log_filter

__all__ = [
    "DependencyConfig",
    "DependencyError",
    "DependencyResolver",
    "DependencyValidationError",
    "DocumentDecodeError",
    "LoadedDocument",
    "LocalDependencyLoader",
    "LocalDependencyNotFound",
    "MorphirIRFile",
    "Provenance",
    "RemoteDependencyLoader",
    "RemoteFetchFailed",
    "Settings",
    "UriFetcher",
    "classify_config",
    "classify_permissive",
    "classify_restrictive",
    "encode_data_url",
    "install_provenance_log_filter",
    "load_dependencies",
    "load_dependency_config",
    "load_local",
    "load_remote",
    "load_settings",
    "parse_data_url",
    "resolve_dependencies",
    "resolve_dependencies_sync",
    "validate_ir_documents",
]
