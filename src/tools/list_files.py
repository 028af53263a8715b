"""MCP tool that lists the Arduino files of the configured repository.

Registers the 'list_arduino_files' tool which runs the listing resolver
(manifest, cache, conditional GitHub fetch, stale fallback) and returns
the files with their chapter and preview URL.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from core.arduino import chapter_of, short_name
from core.models import FileDescriptor, Listing
from core.resolver import ListingResolver
from core.urls import preview_url
from tools.session import build_github_client, build_resolver, build_store, session_for


def _file_entry(f: FileDescriptor, listing: Listing) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "path": f.path,
        "name": short_name(f.path),
        "chapter": chapter_of(f.path),
    }
    for key in ("sha", "size", "url"):
        value = getattr(f, key)
        if value is not None:
            entry[key] = value
    entry["preview_url"] = preview_url(f.path, listing.ref, listing.context.site)
    return entry


def listing_payload(listing: Listing) -> Dict[str, Any]:
    coord = listing.context.coordinate
    return {
        "owner": coord.owner,
        "repo": coord.name,
        "ref": listing.ref,
        "origin": listing.origin,
        "stale": listing.stale,
        "message": listing.message,
        "count": len(listing.files),
        "files": [_file_entry(f, listing) for f in listing.files],
    }


def register(
    mcp: FastMCP,
    *,
    github_client: Optional[GitHubClient] = None,
    resolver: Optional[ListingResolver] = None,
) -> None:
    client = github_client or build_github_client()
    listing_resolver = resolver or build_resolver(client, build_store())

    @mcp.tool(name="list_arduino_files")
    async def list_arduino_files(
        owner: Optional[str] = None,
        repo: Optional[str] = None,
        ref: Optional[str] = None,
    ) -> Dict[str, Any]:
        """List the Arduino sketches, sources and headers of a repository.

        Prefers the site's static files.json manifest, then a cached listing
        younger than the cache TTL, then a conditional GitHub tree request.
        When GitHub rate-limits the request a previously cached listing is
        returned with stale=True.

        Params:
          - owner / repo: override the configured repository.
          - ref: branch, tag or commit (default: manifest branch or the
            repository's default branch).

        Returns:
          {owner, repo, ref, origin, stale, message, count, files}; each file
          carries path, name, chapter, preview_url and, from GitHub, sha/size/url.

        Raises:
          ConfigurationError when no repository is configured;
          ListingUnavailableError when no source produced a listing.
        """
        context = session_for(owner, repo, ref)
        return listing_payload(await listing_resolver.resolve(context))
