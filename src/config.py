"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
PROJECT_ROOT, HTTP_VERIFY, the repository coordinate, cache TTL and file).
"""

from __future__ import annotations

import os
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


# Project root for LocalSource and download/manifest output boundary
PROJECT_ROOT = Path(os.environ.get("PROJECT_ROOT", ".")).resolve()

# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", True)
GITHUB_TIMEOUT = _env_float("GITHUB_TIMEOUT", 20.0)

# Repository + site. Explicit owner/repo override detection from SITE_URL.
ARDUINO_OWNER = _env_str("ARDUINO_OWNER")
ARDUINO_REPO = _env_str("ARDUINO_REPO")
ARDUINO_BRANCH = _env_str("ARDUINO_BRANCH")
SITE_URL = _env_str("SITE_URL")

# Listing cache (empty CACHE_FILE keeps it in memory for the process lifetime)
LISTING_CACHE_TTL_MS = _env_int("LISTING_CACHE_TTL_MS", 5 * 60 * 1000)
CACHE_FILE = _env_str("CACHE_FILE")

# Limits / output
MAX_FILE_CHARS = _env_int("MAX_FILE_CHARS", 200_000)
DOWNLOAD_DIR = _env_str("DOWNLOAD_DIR", "downloads")

LOG_LEVEL = _env_str("LOG_LEVEL", "INFO").upper()
