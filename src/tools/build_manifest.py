"""MCP tool that writes the static files.json manifest.

Registers 'build_manifest' which scans the checkout under PROJECT_ROOT for
Arduino files and writes {branch?, files: [...]} so the site can list files
without calling the GitHub API.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from config import ARDUINO_BRANCH, PROJECT_ROOT
from core.errors import AccessDeniedError, ValidationError
from sources.local_source import LocalSource
from sources.manifest_source import MANIFEST_NAME


def _safe_output(output: str) -> Path:
    raw = (output or "").strip() or MANIFEST_NAME
    p = Path(raw)
    root = PROJECT_ROOT.resolve()
    target = (p if p.is_absolute() else root / p).resolve()
    try:
        target.relative_to(root)
    except ValueError as e:
        raise AccessDeniedError("Manifest output must be within PROJECT_ROOT") from e
    if target.suffix.lower() != ".json":
        raise ValidationError("Manifest output must be a .json file")
    return target


def register(mcp: FastMCP) -> None:
    @mcp.tool(name="build_manifest")
    async def build_manifest(branch: Optional[str] = None, output: str = MANIFEST_NAME) -> Dict[str, Any]:
        """Write a files.json manifest listing the local Arduino files.

        Params:
          - branch: ref recorded in the manifest (default: ARDUINO_BRANCH, omitted if empty).
          - output: manifest path relative to PROJECT_ROOT (default: files.json).

        Returns:
          {written, count, branch}
        """
        target = _safe_output(output)
        files = await LocalSource(project_root=PROJECT_ROOT).list_files()

        manifest: Dict[str, Any] = {}
        branch_clean = (branch or ARDUINO_BRANCH or "").strip()
        if branch_clean:
            manifest["branch"] = branch_clean
        manifest["files"] = [f.path for f in files]

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")

        return {"written": str(target), "count": len(files), "branch": branch_clean or None}
