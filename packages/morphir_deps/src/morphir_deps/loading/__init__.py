"""Local and remote dependency loaders."""

from morphir_deps.loading.decoding import decode_text, parse_document, resolve_charset
from morphir_deps.loading.local import LocalDependencyLoader, load_local
from morphir_deps.loading.remote import RemoteDependencyLoader, github_raw_url, load_remote
from morphir_deps.loading.uri import UriFetcher

__all__ = [
    "LocalDependencyLoader",
    "RemoteDependencyLoader",
    "UriFetcher",
    "decode_text",
    "github_raw_url",
    "load_local",
    "load_remote",
    "parse_document",
    "resolve_charset",
]
