"""Structural validators for each dependency descriptor shape.

Validators are pure and synchronous. They are the only place where
classification can fail explicitly; each raises
:class:`~morphir_deps.errors.DependencyValidationError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from morphir_deps.classification.data_urls import parse_data_url
from morphir_deps.errors import DependencyValidationError
from morphir_deps.models.dependencies import DataUrl, FileUrl, GithubConfig, GithubReference

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)

GITHUB_PREFIX = "github:"
HTTP_SCHEMES = frozenset({"http", "https"})


def _parse_absolute_url(raw: str) -> AnyUrl | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return _URL_ADAPTER.validate_python(raw.strip())
    except ValidationError:
        return None


def validate_data_url(raw: str) -> DataUrl:
    """Return the decoded data URL or raise if ``raw`` is not one."""
    parsed = parse_data_url(raw)
    if parsed is None:
        msg = "Not a valid data url"
        raise DependencyValidationError(msg, raw)
    return parsed


def validate_file_url(raw: str) -> FileUrl:
    """Return the parsed ``file:`` URL or raise if ``raw`` is not one."""
    parsed = _parse_absolute_url(raw)
    if parsed is None or parsed.scheme != "file":
        msg = "Not a valid file url"
        raise DependencyValidationError(msg, raw)
    return FileUrl(url=str(parsed), host=parsed.host or "", path=parsed.path or "")


def validate_absolute_url(raw: str) -> str:
    """Return the normalized URL for any syntactically valid absolute URL."""
    parsed = _parse_absolute_url(raw)
    if parsed is None:
        msg = "Not a valid url"
        raise DependencyValidationError(msg, raw)
    return str(parsed)


def validate_http_url(raw: str) -> str:
    """Return the normalized URL when it is absolute with an http(s) scheme."""
    parsed = _parse_absolute_url(raw)
    if parsed is None or parsed.scheme not in HTTP_SCHEMES:
        msg = "Not a valid http url"
        raise DependencyValidationError(msg, raw)
    return str(parsed)


def validate_github_config(value: Any) -> GithubConfig:
    """Validate a structured ``{owner, repo, baseUrl?}`` mapping or a shorthand string.

    Shorthand strings are kept opaque here and parsed by
    :func:`parse_github_shorthand` when the dependency is loaded.
    """
    if isinstance(value, GithubReference):
        return value
    if isinstance(value, str):
        shorthand = value.strip()
        if not shorthand:
            msg = "Not a valid github reference"
            raise DependencyValidationError(msg, value)
        return shorthand
    if isinstance(value, Mapping):
        try:
            return GithubReference.model_validate(dict(value))
        except ValidationError as exc:
            msg = f"Not a valid github config: {exc.error_count()} error(s)"
            raise DependencyValidationError(msg, value) from exc
    msg = f"Not a valid github config: unexpected type {type(value).__name__}"
    raise DependencyValidationError(msg, value)


def parse_github_shorthand(value: str) -> GithubReference:
    """Parse ``[github:]owner/repo[/path/in/repo][@ref]`` into a reference."""
    text = value.strip().removeprefix(GITHUB_PREFIX).strip("/")
    location, sep, ref = text.rpartition("@")
    if not sep:
        location, ref = text, ""
    parts = [part for part in location.split("/") if part]
    if len(parts) < 2 or (sep and not ref):  # noqa: PLR2004 - owner and repo
        msg = f"Not a valid github reference: {value!r}"
        raise DependencyValidationError(msg, value)
    owner, repo, *path = parts
    return GithubReference(
        owner=owner,
        repo=repo.removesuffix(".git"),
        ref=ref or None,
        path="/".join(path) or None,
    )
