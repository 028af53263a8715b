"""Arduino file helpers: the extension predicate and small path utilities."""

from __future__ import annotations

import locale
from typing import Iterable, List

from core.models import FileDescriptor

ARDUINO_EXTENSIONS = frozenset({".ino", ".cpp", ".h"})


def is_arduino_file(path: str) -> bool:
    """Return True when the lowercased suffix of `path` is an Arduino source/header extension."""
    if not isinstance(path, str):
        return False
    lower = path.lower()
    return any(lower.endswith(ext) for ext in ARDUINO_EXTENSIONS)


def language_for(path: str) -> str:
    # Sketches, sources and headers all highlight as C++
    return "cpp"


def short_name(path: str) -> str:
    return path.split("/")[-1]


def chapter_of(path: str) -> str:
    """First path segment; files at the repository root belong to "Other"."""
    parts = path.split("/")
    return parts[0] if len(parts) > 1 else "Other"


def text_download_name(path: str) -> str:
    name = short_name(path)
    stem, dot, _ext = name.rpartition(".")
    return f"{stem if dot and stem else name}.txt"


def sort_descriptors(files: Iterable[FileDescriptor]) -> List[FileDescriptor]:
    # Case-insensitive collation like String.localeCompare; lowercase first on ties
    return sorted(files, key=lambda f: (locale.strxfrm(f.path.casefold()), f.path.swapcase()))

