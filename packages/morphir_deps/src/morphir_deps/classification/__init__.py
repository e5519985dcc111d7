"""Specifier classification and schema validation."""

from morphir_deps.classification.classifier import (
    classify_permissive,
    classify_restrictive,
    is_remote_dependency,
)
from morphir_deps.classification.data_urls import encode_data_url, parse_data_url
from morphir_deps.classification.validators import (
    parse_github_shorthand,
    validate_absolute_url,
    validate_data_url,
    validate_file_url,
    validate_github_config,
    validate_http_url,
)

__all__ = [
    "classify_permissive",
    "classify_restrictive",
    "encode_data_url",
    "is_remote_dependency",
    "parse_data_url",
    "parse_github_shorthand",
    "validate_absolute_url",
    "validate_data_url",
    "validate_file_url",
    "validate_github_config",
    "validate_http_url",
]
