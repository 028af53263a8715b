"""MCP tool that downloads an Arduino file to disk.

Registers 'download_arduino_file' which fetches the raw text (never
cached), saves it under DOWNLOAD_DIR as the original file name or as a
.txt copy, and returns where it was written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from clients.github import GitHubClient
from clients.github.inputs import normalize_path
from config import DOWNLOAD_DIR, MAX_FILE_CHARS, PROJECT_ROOT
from core.arduino import short_name, text_download_name
from core.errors import AccessDeniedError
from core.resolver import ListingResolver
from sources.source_factory import get_file_source
from tools.session import build_github_client, build_resolver, build_store, session_for


def _safe_out_dir() -> Path:
    # Resolve and enforce output dir is inside PROJECT_ROOT
    raw = (DOWNLOAD_DIR or "").strip() or "downloads"
    p = Path(raw)
    root = PROJECT_ROOT.resolve()
    out_dir = p if p.is_absolute() else (root / p)
    out_dir = out_dir.resolve()

    try:
        out_dir.relative_to(root)
    except ValueError as e:
        raise AccessDeniedError("DOWNLOAD_DIR must be within PROJECT_ROOT") from e

    return out_dir


def register(
    mcp: FastMCP,
    *,
    github_client: Optional[GitHubClient] = None,
    resolver: Optional[ListingResolver] = None,
) -> None:
    client = github_client or build_github_client()
    listing_resolver = resolver or build_resolver(client, build_store())

    @mcp.tool(name="download_arduino_file")
    async def download_arduino_file(
        path: str,
        ref: Optional[str] = None,
        as_text: bool = False,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Save an Arduino file locally and return its location.

        Params:
          - path: file path relative to the repository root (required).
          - ref: branch, tag or SHA (default: configured or default branch;
            a manifest branch overrides it).
          - as_text: save as "<name>.txt" instead of the original extension.
          - owner / repo: override the configured repository.

        Returns:
          {saved_to, bytes}

        Raises:
          ValidationError for a missing path; AccessDeniedError if DOWNLOAD_DIR
          is outside the project root; NotFoundError/ExternalServiceError when
          the file cannot be fetched.
        """
        path_clean = normalize_path(path)
        src = get_file_source(
            "github",
            project_root=PROJECT_ROOT,
            context=session_for(owner, repo, ref),
            github_client=client,
            resolver=listing_resolver,
        )
        content = await src.read_file(path=path_clean, max_chars=MAX_FILE_CHARS)

        out_dir = _safe_out_dir()
        out_dir.mkdir(parents=True, exist_ok=True)

        name = text_download_name(path_clean) if as_text else short_name(path_clean)
        target = out_dir / name
        data = content.encode("utf-8")
        target.write_bytes(data)

        return {"saved_to": str(target), "bytes": len(data)}
