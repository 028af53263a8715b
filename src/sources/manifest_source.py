from __future__ import annotations

import logging
import time
from typing import Any, List, Optional, Union

import httpx

from core.arduino import is_arduino_file
from core.models import Failed, FileDescriptor, Found, Manifest, NotFound, SiteContext


"""Static manifest source.

Fetches `files.json` from the same origin as the site. The manifest has no
rate limit, so it is tried before the GitHub API. Every failure (transport,
status, JSON shape) is returned as a tag; nothing here raises.
"""

logger = logging.getLogger(__name__)

MANIFEST_NAME = "files.json"


def parse_manifest(payload: Any) -> Manifest:
    """Turn a manifest document into a Manifest of Arduino files.

    Entries are either bare path strings or objects with a "path" field.
    """
    if not isinstance(payload, dict):
        raise ValueError("manifest must be a JSON object")

    entries = payload.get("files")
    files: List[FileDescriptor] = []
    for item in entries if isinstance(entries, list) else []:
        path = item if isinstance(item, str) else (item.get("path") if isinstance(item, dict) else None)
        if isinstance(path, str) and path and is_arduino_file(path):
            files.append(FileDescriptor(path=path))

    branch = payload.get("branch")
    branch_clean: Optional[str] = branch.strip() if isinstance(branch, str) and branch.strip() else None
    return Manifest(files=tuple(files), branch=branch_clean)


class ManifestSource:
    def __init__(self, *, timeout: float = 20.0, verify: bool = False) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)

    def manifest_url(self, site: SiteContext) -> str:
        return f"{site.origin}{site.base_path}{MANIFEST_NAME}"

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, verify=self._verify)

    async def load(self, site: SiteContext) -> Union[Found[Manifest], NotFound, Failed]:
        if not site.origin:
            return NotFound()

        url = self.manifest_url(site)
        # Cache-busting query parameter and no-store to dodge CDN staleness
        params = {"v": str(int(time.time() * 1000))}

        try:
            async with self._create_client() as client:
                resp = await client.get(url, params=params, headers={"Cache-Control": "no-store"})
        except httpx.HTTPError as e:
            return Failed(reason=f"Manifest request failed: {e}")

        if resp.status_code == 404:
            return NotFound()
        if not resp.is_success:
            return Failed(reason=f"HTTP {resp.status_code} for manifest", status_code=resp.status_code)

        try:
            manifest = parse_manifest(resp.json())
        except ValueError as e:
            return Failed(reason=f"Malformed manifest: {e}", status_code=resp.status_code)

        logger.debug("Manifest %s lists %d Arduino files", url, len(manifest.files))
        return Found(manifest)
