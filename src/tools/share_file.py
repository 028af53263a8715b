"""MCP tool that builds the shareable link for an Arduino file.

Registers 'share_arduino_file'. The returned url and qr_payload are the
same preview URL the listing hands out for the file, built with the ref
the listing resolved (a manifest branch overrides the requested ref).
"""

from __future__ import annotations

from typing import Dict, Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from clients.github.inputs import normalize_path
from core.resolver import ListingResolver
from core.urls import share_link
from tools.session import build_github_client, build_resolver, build_store, session_for


def register(
    mcp: FastMCP,
    *,
    github_client: Optional[GitHubClient] = None,
    resolver: Optional[ListingResolver] = None,
) -> None:
    listing_resolver = resolver or build_resolver(github_client or build_github_client(), build_store())

    @mcp.tool(name="share_arduino_file")
    async def share_arduino_file(
        path: str,
        ref: Optional[str] = None,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
    ) -> Dict[str, str]:
        """Return the preview URL, QR payload and share text for a file.

        Params:
          - path: file path relative to the repository root (required).
          - ref: branch, tag or SHA (default: manifest branch, configured
            branch, else the repository default branch).
          - owner / repo: override the configured repository.
        """
        path_clean = normalize_path(path)
        context = session_for(owner, repo, ref)
        session_ref = await listing_resolver.session_ref(context)
        link = share_link(path_clean, session_ref, context.site)
        return {
            "url": link.url,
            "qr_payload": link.qr_payload,
            "title": link.title,
            "text": link.text,
        }
