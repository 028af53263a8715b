"""URL builders for the preview surface and the raw content endpoint.

The preview URL is the single source for the "view" link, the QR payload
and the shareable link, so all three are byte-identical for a given
(path, ref, origin, base-path).
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from core.arduino import short_name
from core.models import RepoCoordinate, SiteContext

RAW_BASE_URL = "https://raw.githubusercontent.com"

# Characters encodeURIComponent leaves alone besides [A-Za-z0-9_.-]
_URI_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def encode_path(path: str) -> str:
    """Encode each segment individually, preserving slashes."""
    return "/".join(encode_component(seg) for seg in path.split("/"))


def preview_url(path: str, ref: str | None, site: SiteContext) -> str:
    p = encode_component(path)
    r = encode_component(ref or "main")
    return f"{site.origin}{site.base_path}file.html?path={p}&ref={r}"


def raw_url(coordinate: RepoCoordinate, path: str) -> str:
    ref = encode_component(coordinate.ref or "main")
    return f"{RAW_BASE_URL}/{coordinate.owner}/{coordinate.name}/{ref}/{encode_path(path)}"


@dataclass(frozen=True)
class ShareLink:
    url: str
    qr_payload: str
    title: str
    text: str


def share_link(path: str, ref: str | None, site: SiteContext) -> ShareLink:
    url = preview_url(path, ref, site)
    name = short_name(path)
    return ShareLink(
        url=url,
        qr_payload=url,
        title=f"Arduino Project: {name}",
        text=f"Check out this Arduino project: {name}",
    )
