"""Core protocol and interface definitions.

Defines the FileSource protocol used by the tools and source
implementations (local/GitHub), and the narrow contracts the listing
resolver needs from the manifest and GitHub collaborators so it can be
exercised against fakes.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Union

from core.models import Failed, FileDescriptor, Found, Manifest, NotFound, NotModified, RepoCoordinate, SiteContext


class FileSource(Protocol):
    """Contract for any file source (local, GitHub, etc.)."""
    async def list_files(self) -> List[FileDescriptor]:
        ...

    async def read_file(
        self,
        *,
        path: str,
        max_chars: int,
    ) -> str:
        ...


class ManifestLoader(Protocol):
    async def load(self, site: SiteContext) -> Union[Found[Manifest], NotFound, Failed]:
        ...


class TreeFetcher(Protocol):
    async def get_default_branch(self, coordinate: RepoCoordinate) -> str:
        ...

    async def fetch_tree(
        self,
        coordinate: RepoCoordinate,
        *,
        etag: Optional[str] = None,
    ) -> Union[Found[Any], NotModified, Failed]:
        ...
