"""Site context detection.

GitHub Pages project sites are served from https://<owner>.github.io/<repo>/,
so owner, repository and base path can be derived from the site URL.
Explicit configuration always wins over detection.
"""

from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import urlsplit

from core.errors import ConfigurationError
from core.models import RepoCoordinate, SessionContext, SiteContext


def is_github_pages_host(host: str) -> bool:
    return (host or "").lower().endswith("github.io")


def _segments(path: str) -> list[str]:
    return [seg for seg in (path or "").split("/") if seg]


def detect_base_path(site_url: str) -> str:
    parts = urlsplit(site_url or "")
    segs = _segments(parts.path)
    if is_github_pages_host(parts.hostname or "") and segs:
        return f"/{segs[0]}/"
    # Root or custom domain: assume root
    return "/"


def detect_repo(site_url: str) -> Tuple[Optional[str], Optional[str]]:
    parts = urlsplit(site_url or "")
    host = parts.hostname or ""
    if not is_github_pages_host(host):
        return None, None
    owner = host.split(".")[0]
    segs = _segments(parts.path)
    return owner, (segs[0] if segs else None)


def site_context(site_url: str) -> SiteContext:
    parts = urlsplit(site_url or "")
    origin = f"{parts.scheme}://{parts.netloc}" if parts.scheme and parts.netloc else ""
    return SiteContext(origin=origin, base_path=detect_base_path(site_url))


def build_session_context(
    *,
    owner: Optional[str] = None,
    repo: Optional[str] = None,
    branch: Optional[str] = None,
    site_url: str = "",
) -> SessionContext:
    """Merge explicit settings with values detected from `site_url`.

    Raises ConfigurationError when no owner/repo can be determined.
    """
    auto_owner, auto_repo = detect_repo(site_url)
    owner_clean = (owner or "").strip() or auto_owner
    repo_clean = (repo or "").strip() or auto_repo
    if not owner_clean or not repo_clean:
        raise ConfigurationError(
            "Could not auto-detect owner/repo. Set ARDUINO_OWNER and ARDUINO_REPO or SITE_URL."
        )

    coordinate = RepoCoordinate(owner=owner_clean, name=repo_clean, ref=(branch or "").strip() or None)
    return SessionContext(coordinate=coordinate, site=site_context(site_url))
