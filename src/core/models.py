"""Immutable dataclasses shared by the resolver, sources and tools.

Includes the repository/site coordinates threaded through every call
(RepoCoordinate, SiteContext, SessionContext), the FileDescriptor the
listing is made of, and the tagged results returned by each data source.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Generic, Literal, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

SourceType = Literal["local", "github"]

# Where a Listing came from; "stale" is the only degraded origin.
ListingOrigin = Literal["manifest", "cache", "revalidated", "network", "stale"]


@dataclass(frozen=True)
class RepoCoordinate:
    owner: str
    name: str
    ref: Optional[str] = None

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    def with_ref(self, ref: str) -> "RepoCoordinate":
        return replace(self, ref=ref)


@dataclass(frozen=True)
class SiteContext:
    """Where the static site is served from.

    `origin` has no trailing slash; `base_path` starts and ends with "/".
    """

    origin: str
    base_path: str = "/"


@dataclass(frozen=True)
class SessionContext:
    coordinate: RepoCoordinate
    site: SiteContext

    @property
    def ref(self) -> Optional[str]:
        return self.coordinate.ref

    def with_ref(self, ref: str) -> "SessionContext":
        return replace(self, coordinate=self.coordinate.with_ref(ref))


@dataclass(frozen=True)
class FileDescriptor:
    # Identity is the path; tree metadata is carried along but not compared.
    path: str
    sha: Optional[str] = field(default=None, compare=False)
    size: Optional[int] = field(default=None, compare=False)
    url: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class NotModified:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str
    status_code: Optional[int] = None
    rate_limited: bool = False


SourceResult = Union[Found[Any], NotFound, NotModified, Failed]


@dataclass(frozen=True)
class Manifest:
    files: Tuple[FileDescriptor, ...]
    branch: Optional[str] = None


@dataclass(frozen=True)
class Listing:
    """Result of one resolution.

    `context` carries the ref actually used (a manifest branch overrides the
    requested one), so callers build preview URLs from it.
    """

    context: SessionContext
    files: Tuple[FileDescriptor, ...]
    origin: ListingOrigin
    message: str = ""

    @property
    def ref(self) -> str:
        return self.context.coordinate.ref or "main"

    @property
    def stale(self) -> bool:
        return self.origin == "stale"
