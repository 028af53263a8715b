from __future__ import annotations

import re

from core.errors import ValidationError
from core.models import RepoCoordinate

# GitHub owner and repository names: letters, digits, '-', '_' and '.'
_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def normalize_name(value: str, *, what: str) -> str:
    name = (value or "").strip()
    if not name or not _NAME_RE.match(name):
        raise ValidationError(f"Invalid GitHub {what}: {value!r}")
    return name


def normalize_ref(ref: str | None) -> str | None:
    # None means "use the default branch"
    if ref is None:
        return None
    ref_clean = ref.strip()
    return ref_clean or None


def normalize_path(path: str) -> str:
    # Keep repository paths stable and OS-independent:
    # "\" becomes "/", leading "/" and "./" markers are dropped.
    s = (path or "").strip().replace("\\", "/").lstrip("/")
    while s.startswith("./"):
        s = s[2:]
    if not s:
        raise ValidationError("path must be non-empty")
    return s


def normalize_max_chars(max_chars: int) -> int:
    n = int(max_chars)
    if n <= 0:
        raise ValidationError("max_chars must be positive")
    return n


def coordinate(owner: str, name: str, ref: str | None = None) -> RepoCoordinate:
    return RepoCoordinate(
        owner=normalize_name(owner, what="owner"),
        name=normalize_name(name, what="repository"),
        ref=normalize_ref(ref),
    )
