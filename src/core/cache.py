"""Local key-value store and the typed listing cache built on top of it.

The store plays the role of browser localStorage: string keys, string
(JSON) values, no eviction. `ListingCache` reads and writes CacheEntry
values under keys of the form "<kind>:<owner>/<name>@<ref>".

Entries are never deleted, only overwritten by a later fetch for the same
key, so the store grows with the number of distinct repositories/refs.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from core.errors import StorageError
from core.models import Failed, Found, NotFound, RepoCoordinate

logger = logging.getLogger(__name__)

TREE_CACHE_KIND = "gh_tree"


class KeyValueStore(Protocol):
    """Contract for the string key-value store (in-memory or on disk)."""
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Key-value store persisted as a single JSON object on disk.

    Every call re-reads the file, so several processes share one store.
    There is no locking: concurrent writers race and the last one wins.
    The file is replaced atomically so readers never see partial JSON.
    """

    def __init__(self, *, path: Path) -> None:
        self._path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Cannot read cache file %s: %s", self._path, e)
            return {}

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt cache file %s", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)} if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        except OSError as e:
            raise StorageError(f"Failed to write cache file {self._path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageError(f"Failed to write cache file {self._path}: {e}") from e
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)


@dataclass(frozen=True)
class CacheEntry:
    etag: Optional[str]
    timestamp: int  # epoch milliseconds
    data: Dict[str, Any]

    def to_json(self) -> str:
        return json.dumps({"etag": self.etag, "timestamp": self.timestamp, "data": self.data})

    @classmethod
    def from_json(cls, raw: str) -> "CacheEntry":
        obj = json.loads(raw)
        if not isinstance(obj, dict):
            raise ValueError("cache entry must be a JSON object")
        data = obj.get("data")
        timestamp = obj.get("timestamp")
        if not isinstance(data, dict) or not isinstance(timestamp, (int, float)) or isinstance(timestamp, bool):
            raise ValueError("cache entry is missing data or timestamp")
        etag = obj.get("etag")
        return cls(etag=etag if isinstance(etag, str) and etag else None, timestamp=int(timestamp), data=data)

    def refreshed(self, timestamp: int) -> "CacheEntry":
        # Not-modified responses only move the timestamp forward
        return CacheEntry(etag=self.etag, timestamp=timestamp, data=self.data)

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp


def cache_key(kind: str, coordinate: RepoCoordinate) -> str:
    return f"{kind}:{coordinate.owner}/{coordinate.name}@{coordinate.ref}"


class ListingCache:
    """Typed view over a KeyValueStore holding tree listings."""

    def __init__(self, store: KeyValueStore, *, kind: str = TREE_CACHE_KIND) -> None:
        self._store = store
        self._kind = kind

    def key_for(self, coordinate: RepoCoordinate) -> str:
        return cache_key(self._kind, coordinate)

    def get(self, coordinate: RepoCoordinate) -> Union[Found[CacheEntry], NotFound, Failed]:
        key = self.key_for(coordinate)
        raw = self._store.get(key)
        if raw is None:
            return NotFound()
        try:
            return Found(CacheEntry.from_json(raw))
        except ValueError as e:
            return Failed(reason=f"unreadable cache entry {key}: {e}")

    def set(self, coordinate: RepoCoordinate, entry: CacheEntry) -> None:
        """Persist `entry`; raises StorageError when the store rejects the write."""
        self._store.set(self.key_for(coordinate), entry.to_json())
