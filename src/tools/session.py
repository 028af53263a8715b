"""Wiring shared by the tools: session context, key-value store and resolver.

Tool arguments override the configured repository; everything else comes
from `config`.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

from clients.github import GitHubClient
from clients.github.inputs import coordinate
from config import (
    ARDUINO_BRANCH,
    ARDUINO_OWNER,
    ARDUINO_REPO,
    CACHE_FILE,
    GITHUB_TIMEOUT,
    HTTP_VERIFY,
    LISTING_CACHE_TTL_MS,
    PROJECT_ROOT,
    SITE_URL,
)
from core.cache import JsonFileStore, KeyValueStore, ListingCache, MemoryStore
from core.models import SessionContext
from core.resolver import ListingResolver
from core.site import build_session_context
from sources.manifest_source import ManifestSource


def session_for(
    owner: Optional[str] = None,
    repo: Optional[str] = None,
    ref: Optional[str] = None,
) -> SessionContext:
    ctx = build_session_context(
        owner=owner or ARDUINO_OWNER,
        repo=repo or ARDUINO_REPO,
        branch=ref or ARDUINO_BRANCH,
        site_url=SITE_URL,
    )
    coord = ctx.coordinate
    return replace(ctx, coordinate=coordinate(coord.owner, coord.name, coord.ref))


def build_store() -> KeyValueStore:
    if not CACHE_FILE:
        return MemoryStore()
    path = Path(CACHE_FILE)
    return JsonFileStore(path=path if path.is_absolute() else PROJECT_ROOT / path)


def build_github_client() -> GitHubClient:
    return GitHubClient(timeout=GITHUB_TIMEOUT, verify=HTTP_VERIFY)


def build_resolver(github_client: GitHubClient, store: KeyValueStore) -> ListingResolver:
    return ListingResolver(
        github=github_client,
        cache=ListingCache(store),
        manifest=ManifestSource(timeout=GITHUB_TIMEOUT, verify=HTTP_VERIFY),
        ttl_ms=LISTING_CACHE_TTL_MS,
    )
