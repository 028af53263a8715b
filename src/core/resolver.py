"""Repository listing resolver.

Produces the sorted list of Arduino files for a session, trying in order:

1. the same-origin static manifest (no rate limit, no third-party call),
2. a cache entry younger than the TTL (zero network calls),
3. a conditional tree fetch against GitHub (If-None-Match with the cached
   ETag), which on 304 only refreshes the entry's timestamp,
4. the cached entry, however old, when GitHub answers with a rate limit.

Only when none of these produce data does `resolve` raise
ListingUnavailableError. Cache writes are best-effort.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, List, Optional

from core.arduino import is_arduino_file, sort_descriptors
from core.cache import CacheEntry, ListingCache
from core.errors import ArduinoManagerError, ListingUnavailableError, StorageError
from core.interfaces import ManifestLoader, TreeFetcher
from core.models import (
    Failed,
    FileDescriptor,
    Found,
    Listing,
    ListingOrigin,
    Manifest,
    NotModified,
    RepoCoordinate,
    SessionContext,
    SiteContext,
)

logger = logging.getLogger(__name__)

TREE_CACHE_TTL_MS = 5 * 60 * 1000


def epoch_ms() -> int:
    return int(time.time() * 1000)


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


def files_from_tree(data: Any) -> List[FileDescriptor]:
    """Keep blob entries with an Arduino path; trees/directories are dropped."""
    tree = data.get("tree") if isinstance(data, dict) else None
    out: List[FileDescriptor] = []
    for item in tree if isinstance(tree, list) else []:
        if not isinstance(item, dict) or item.get("type") != "blob":
            continue
        path = item.get("path")
        if isinstance(path, str) and is_arduino_file(path):
            out.append(
                FileDescriptor(
                    path=path,
                    sha=item.get("sha"),
                    size=item.get("size"),
                    url=item.get("url"),
                )
            )
    return out


class ListingResolver:
    def __init__(
        self,
        *,
        github: TreeFetcher,
        cache: ListingCache,
        manifest: Optional[ManifestLoader] = None,
        ttl_ms: int = TREE_CACHE_TTL_MS,
        now_ms: Callable[[], int] = epoch_ms,
    ) -> None:
        self._github = github
        self._cache = cache
        self._manifest = manifest
        self._ttl_ms = int(ttl_ms)
        self._now_ms = now_ms

    async def resolve(self, context: SessionContext) -> Listing:
        manifest = await self._load_manifest(context.site)
        if manifest is not None:
            ref = manifest.branch or context.ref or await self._default_branch_or_main(context.coordinate)
            files = [f for f in manifest.files if is_arduino_file(f.path)]
            n = len(files)
            return self._listing(
                context.with_ref(ref),
                files,
                "manifest",
                f"Found {n} Arduino file{_plural(n)} (via manifest).",
            )

        context = await self._with_default_branch(context)
        return await self._resolve_tree(context)

    async def session_ref(self, context: SessionContext) -> str:
        """Ref every later operation in the session uses for files and links.

        Same precedence as `resolve`: the manifest branch, then the requested
        ref, then the repository default branch ("main" if that is unknown).
        """
        manifest = await self._load_manifest(context.site)
        if manifest is not None and manifest.branch:
            return manifest.branch
        return context.ref or await self._default_branch_or_main(context.coordinate)

    # --- sources ---

    async def _load_manifest(self, site: SiteContext) -> Optional[Manifest]:
        if self._manifest is None:
            return None

        result = await self._manifest.load(site)
        if isinstance(result, Found):
            return result.value
        if isinstance(result, Failed):
            logger.debug("Manifest unavailable, falling back to GitHub: %s", result.reason)
        return None

    async def _default_branch_or_main(self, coordinate: RepoCoordinate) -> str:
        try:
            return await self._github.get_default_branch(coordinate)
        except ArduinoManagerError as e:
            logger.debug("Default branch lookup failed for %s, using 'main': %s", coordinate.slug, e)
            return "main"

    async def _with_default_branch(self, context: SessionContext) -> SessionContext:
        if context.ref:
            return context
        try:
            branch = await self._github.get_default_branch(context.coordinate)
        except ArduinoManagerError as e:
            raise ListingUnavailableError(f"Failed to load repository metadata. {e}") from e
        return context.with_ref(branch)

    async def _resolve_tree(self, context: SessionContext) -> Listing:
        coordinate = context.coordinate

        entry: Optional[CacheEntry] = None
        cached = self._cache.get(coordinate)
        if isinstance(cached, Found):
            entry = cached.value
        elif isinstance(cached, Failed):
            logger.debug("Ignoring cache entry: %s", cached.reason)

        if entry is not None and entry.age_ms(self._now_ms()) < self._ttl_ms:
            return self._listing(context, files_from_tree(entry.data), "cache", "Using cached file list.")

        result = await self._github.fetch_tree(coordinate, etag=entry.etag if entry else None)

        if isinstance(result, NotModified):
            if entry is None:
                raise ListingUnavailableError(
                    f"HTTP 304 for {coordinate.slug}@{coordinate.ref} without a cached listing",
                    status_code=304,
                )
            self._store(coordinate, entry.refreshed(self._now_ms()))
            return self._listing(
                context,
                files_from_tree(entry.data),
                "revalidated",
                "Using cached file list (not modified).",
            )

        if isinstance(result, Found):
            response = result.value
            self._store(coordinate, CacheEntry(etag=response.etag, timestamp=self._now_ms(), data=response.data))
            files = files_from_tree(response.data)
            return self._listing(context, files, "network", f"Found {len(files)} Arduino file{_plural(len(files))}.")

        if result.rate_limited and entry is not None:
            logger.warning("%s Serving cached listing for %s@%s", result.reason, coordinate.slug, coordinate.ref)
            return self._listing(
                context,
                files_from_tree(entry.data),
                "stale",
                "GitHub API rate limit reached. Showing cached file list.",
            )

        raise ListingUnavailableError(f"Failed to load files. {result.reason}", status_code=result.status_code)

    # --- helpers ---

    def _store(self, coordinate: RepoCoordinate, entry: CacheEntry) -> None:
        try:
            self._cache.set(coordinate, entry)
        except StorageError as e:
            logger.warning("Could not persist listing cache for %s: %s", coordinate.slug, e)

    def _listing(
        self,
        context: SessionContext,
        files: Iterable[FileDescriptor],
        origin: ListingOrigin,
        message: str,
    ) -> Listing:
        logger.info("%s@%s: %s", context.coordinate.slug, context.ref, message)
        return Listing(
            context=context,
            files=tuple(sort_descriptors(files)),
            origin=origin,
            message=message,
        )
