"""MCP tool that reads an Arduino file for preview.

Registers the 'read_arduino_file' tool which returns the raw text of a
file from GitHub (never from cache) or from the local checkout.
"""

from __future__ import annotations

from typing import Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from config import MAX_FILE_CHARS, PROJECT_ROOT
from core.errors import ValidationError
from core.models import SourceType
from core.resolver import ListingResolver
from sources.source_factory import get_file_source
from tools.session import build_github_client, build_resolver, build_store, session_for


def register(
    mcp: FastMCP,
    *,
    github_client: Optional[GitHubClient] = None,
    resolver: Optional[ListingResolver] = None,
) -> None:
    client = github_client or build_github_client()
    listing_resolver = resolver or build_resolver(client, build_store())

    @mcp.tool(name="read_arduino_file")
    async def read_arduino_file(
        path: str = "",
        ref: Optional[str] = None,
        source: SourceType = "github",
        owner: Optional[str] = None,
        repo: Optional[str] = None,
        max_chars: int = MAX_FILE_CHARS,
    ) -> str:
        """Read an Arduino file and return its UTF-8 text.

        Parameters:
          - path: file path relative to the repository root (required).
          - ref: branch, tag or SHA (default: configured branch, else the
            repository's default branch). A manifest branch overrides it,
            so reads match the listing.
          - source: "github" (default) or "local" for the checkout under PROJECT_ROOT.
          - owner / repo: override the configured repository.
          - max_chars: maximum characters to return (default from config).

        Returns:
          The file contents. Content longer than max_chars is truncated and
          "\n\n...[TRUNCATED]..." appended.

        Raises:
          ValidationError for a missing path; NotFoundError or
          ExternalServiceError when the file cannot be fetched. File text is
          never served from cache.
        """
        if not path or not path.strip():
            raise ValidationError("Missing file path")

        context = session_for(owner, repo, ref) if source == "github" else None
        src = get_file_source(
            source,
            project_root=PROJECT_ROOT,
            context=context,
            github_client=client,
            resolver=listing_resolver,
        )

        return await src.read_file(path=path, max_chars=max_chars)
