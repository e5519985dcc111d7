"""Pydantic models for dependency specifiers, descriptors, and loaded documents."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Literal
from urllib.request import url2pathname

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from collections.abc import Iterable


class Provenance(str, Enum):
    """Configuration list a specifier came from. Used for diagnostics only."""

    DEPENDENCIES = "dependencies"
    LOCAL_DEPENDENCIES = "localDependencies"
    INCLUDES = "includes"


class FileUrl(BaseModel, frozen=True):
    """Parsed ``file:`` URL."""

    url: str
    scheme: Literal["file"] = "file"
    host: str = ""
    path: str = ""

    def to_path(self) -> Path:
        """Convert the URL path component into a filesystem path."""
        if self.host and self.host != "localhost":
            return Path(url2pathname(f"//{self.host}{self.path}"))
        return Path(url2pathname(self.path))

    def __str__(self) -> str:
        return self.url


class DataUrl(BaseModel, frozen=True):
    """Decoded RFC 2397 data URL."""

    mime_type: str = "text/plain"
    parameters: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    @property
    def charset(self) -> str | None:
        """Charset parameter of the media type, if present."""
        return self.parameters.get("charset")


class GithubReference(BaseModel, frozen=True):
    """Structured reference to a document stored in a GitHub repository."""

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    base_url: str | None = Field(default=None, alias="baseUrl")
    ref: str | None = None
    path: str | None = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# Either the structured triple or an opaque shorthand parsed at load time.
GithubConfig = GithubReference | str
PathOrUrl = FileUrl | str


class DependencyBase(BaseModel, frozen=True):
    source: Provenance | None = None


class FileDependency(DependencyBase, frozen=True):
    kind: Literal["file"] = "file"
    path_or_url: PathOrUrl

    def describe(self) -> str:
        return str(self.path_or_url)


class DataUrlDependency(DependencyBase, frozen=True):
    kind: Literal["dataUrl"] = "dataUrl"
    url: DataUrl

    def describe(self) -> str:
        return f"data:{self.url.mime_type} ({len(self.url.body)} bytes)"


class HttpDependency(DependencyBase, frozen=True):
    kind: Literal["http"] = "http"
    url: str

    def describe(self) -> str:
        return self.url


class GithubDependency(DependencyBase, frozen=True):
    kind: Literal["github"] = "github"
    config: GithubConfig

    def describe(self) -> str:
        if isinstance(self.config, str):
            return f"github:{self.config}"
        return f"github:{self.config.owner}/{self.config.repo}"


class UnclassifiedDependency(DependencyBase, frozen=True):
    kind: Literal["unclassified"] = "unclassified"
    path: str

    def describe(self) -> str:
        return self.path


LocalDependency = Annotated[
    FileDependency | DataUrlDependency,
    Field(discriminator="kind"),
]
RemoteDependency = Annotated[
    HttpDependency | GithubDependency,
    Field(discriminator="kind"),
]
ClassifiedDependency = Annotated[
    FileDependency | DataUrlDependency | HttpDependency | GithubDependency,
    Field(discriminator="kind"),
]
DependencyInfo = Annotated[
    FileDependency
    | DataUrlDependency
    | HttpDependency
    | GithubDependency
    | UnclassifiedDependency,
    Field(discriminator="kind"),
]


class IndexedDependency(BaseModel, frozen=True):
    """Classified dependency tagged with its position in the combined input list."""

    index: int
    dependency: ClassifiedDependency


class LoadedDocument(BaseModel, frozen=True):
    """Parsed document together with the descriptor that produced it."""

    payload: Any
    dependency: ClassifiedDependency
    index: int = 0

    @property
    def source(self) -> Provenance | None:
        """Provenance of the originating descriptor."""
        return self.dependency.source


class DependencyConfig(BaseModel, frozen=True):
    """Dependency-related keys of a project configuration file."""

    dependencies: list[str] = Field(default_factory=list)
    local_dependencies: list[str] = Field(default_factory=list, alias="localDependencies")
    includes: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("dependencies", "local_dependencies", "includes", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class MorphirIRFile(BaseModel, frozen=True):
    """Minimal shape of a Morphir IR document: format version plus distribution."""

    format_version: int = Field(alias="formatVersion", strict=True)
    distribution: list[Any] = Field(min_length=1)

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    @field_validator("distribution")
    @classmethod
    def _distribution_tag(cls, value: list[Any]) -> list[Any]:
        if not isinstance(value[0], str):
            msg = "distribution must start with a string tag"
            raise ValueError(msg)  # noqa: TRY004 - pydantic expects ValueError
        return value


def index_dependencies(
    dependencies: Iterable[IndexedDependency | DependencyBase],
) -> list[IndexedDependency]:
    """Wrap bare descriptors with an index; already-indexed items keep theirs.

    Bare descriptors are numbered after the highest existing index, in input
    order, so mixed input never produces duplicate indices.
    """
    items = list(dependencies)
    taken = [item.index for item in items if isinstance(item, IndexedDependency)]
    next_index = max(taken, default=-1) + 1
    indexed: list[IndexedDependency] = []
    for item in items:
        if isinstance(item, IndexedDependency):
            indexed.append(item)
        else:
            indexed.append(IndexedDependency(index=next_index, dependency=item))
            next_index += 1
    return indexed
