from __future__ import annotations

from typing import List

from clients.github import GitHubClient
from core.models import FileDescriptor, Listing, SessionContext
from core.resolver import ListingResolver


"""GitHub-backed FileSource implementation.

- Listings go through the ListingResolver (manifest, cache, conditional fetch).
- File reads always hit the raw content endpoint; file text is never cached,
  so a failed read raises instead of showing an older version.
"""


class GitHubSource:
    def __init__(self, *, client: GitHubClient, resolver: ListingResolver, context: SessionContext) -> None:
        self._client = client
        self._resolver = resolver
        self._context = context

    async def listing(self) -> Listing:
        return await self._resolver.resolve(self._context)

    async def list_files(self) -> List[FileDescriptor]:
        return list((await self.listing()).files)

    async def read_file(self, *, path: str, max_chars: int) -> str:
        # Read from the ref the listing showed (a manifest branch wins)
        ref = await self._resolver.session_ref(self._context)
        coordinate = self._context.coordinate.with_ref(ref)

        return await self._client.read_raw(coordinate, path, max_chars=max_chars)
