from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

from core.arduino import is_arduino_file, sort_descriptors
from core.errors import AccessDeniedError, NotFoundError, ValidationError
from core.models import FileDescriptor


"""Local filesystem FileSource implementation.

Lists and reads Arduino files from a checkout under PROJECT_ROOT (used to
build the static manifest) with containment checks that keep every access
inside the project.
"""

# Directories that never hold sketches worth publishing
_SKIP_DIRS = frozenset({".git", "node_modules", "__pycache__", ".venv"})


class LocalSource:
    # Local filesystem implementation of FileSource.

    def __init__(self, *, project_root: Path) -> None:
        self._project_root = project_root.resolve()

    def _resolve_under_root(self, rel_path: str) -> Path:
        raw = (rel_path or "").strip()
        if not raw:
            raise ValidationError("Path is empty")

        p = (self._project_root / raw).resolve()

        # Containment check against directory traversal
        try:
            p.relative_to(self._project_root)
        except ValueError as e:
            raise AccessDeniedError("Access outside project root is not allowed") from e

        return p

    async def list_files(self) -> List[FileDescriptor]:
        root = self._project_root

        def _do() -> List[FileDescriptor]:
            if not root.is_dir():
                raise NotFoundError(f"Not a directory: {root}")

            out: List[FileDescriptor] = []
            for p in root.rglob("*"):
                rel = p.relative_to(root)
                if any(part in _SKIP_DIRS for part in rel.parts):
                    continue
                if p.is_file() and is_arduino_file(p.name):
                    # POSIX-style paths match the GitHub tree listing
                    out.append(FileDescriptor(path=rel.as_posix(), size=p.stat().st_size))
            return sort_descriptors(out)

        # Offload blocking filesystem IO to a thread to keep async loop responsive
        return await asyncio.to_thread(_do)

    async def read_file(self, *, path: str, max_chars: int) -> str:
        p = self._resolve_under_root(path)

        def _do() -> str:
            if not p.exists():
                raise NotFoundError(f"File not found: {path}")
            if not p.is_file():
                raise ValidationError(f"Not a file: {path}")

            data = p.read_text(encoding="utf-8", errors="replace")
            if len(data) > max_chars:
                return data[:max_chars] + "\n\n...[TRUNCATED]..."
            return data

        return await asyncio.to_thread(_do)
