"""Error taxonomy for dependency classification and loading."""

from __future__ import annotations

from typing import Any


class DependencyError(Exception):
    """Base class for all dependency resolution failures."""


class DependencyValidationError(DependencyError, ValueError):
    """A specifier does not match the grammar required for its shape."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class LocalDependencyNotFound(DependencyError):  # noqa: N818 - public name
    """A file dependency points at a path or URL that does not exist."""

    def __init__(
        self, message: str, path_or_url: str | None = None, cause: BaseException | None = None
    ) -> None:
        super().__init__(message)
        self.path_or_url = path_or_url
        if cause is not None:
            self.__cause__ = cause


class RemoteFetchFailed(DependencyError):  # noqa: N818 - public name
    """A remote dependency could not be fetched or returned a non-success status."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        if cause is not None:
            self.__cause__ = cause


class DocumentDecodeError(DependencyError):
    """Fetched bytes are not decodable text or not valid JSON."""

    def __init__(self, message: str, origin: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.origin = origin
        if cause is not None:
            self.__cause__ = cause


class UriNotFoundError(DependencyError):
    """The URI fetch primitive found nothing at the requested location."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class UnsupportedSchemeError(DependencyError):
    """The URI fetch primitive has no handler for a URL scheme."""

    def __init__(self, message: str, url: str, scheme: str) -> None:
        super().__init__(message)
        self.url = url
        self.scheme = scheme
