"""Dependency data model."""

from morphir_deps.models.dependencies import (
    ClassifiedDependency,
    DataUrl,
    DataUrlDependency,
    DependencyConfig,
    DependencyInfo,
    FileDependency,
    FileUrl,
    GithubConfig,
    GithubDependency,
    GithubReference,
    HttpDependency,
    IndexedDependency,
    LoadedDocument,
    LocalDependency,
    MorphirIRFile,
    PathOrUrl,
    Provenance,
    RemoteDependency,
    UnclassifiedDependency,
    index_dependencies,
)

__all__ = [
    "ClassifiedDependency",
    "DataUrl",
    "DataUrlDependency",
    "DependencyConfig",
    "DependencyInfo",
    "FileDependency",
    "FileUrl",
    "GithubConfig",
    "GithubDependency",
    "GithubReference",
    "HttpDependency",
    "IndexedDependency",
    "LoadedDocument",
    "LocalDependency",
    "MorphirIRFile",
    "PathOrUrl",
    "Provenance",
    "RemoteDependency",
    "UnclassifiedDependency",
    "index_dependencies",
]
