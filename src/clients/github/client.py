"""GitHub client module: repository metadata, tree listings and raw file text.

This module provides a small async client focused on the three operations
the Arduino code manager needs: reading a repository's default branch,
fetching a recursive tree listing with conditional revalidation (ETag /
If-None-Match), and reading a file's raw text from raw.githubusercontent.com.
Tree fetches never raise for HTTP statuses; they return a tagged result the
listing resolver dispatches on. Raw file text is never cached.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from core.errors import ExternalServiceError, NotFoundError
from core.models import Failed, Found, NotModified, RepoCoordinate
from core.rate_limiter import RateLimiter
from core.urls import encode_component, raw_url

from .inputs import normalize_max_chars, normalize_path
from .refs import fetch_default_branch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeResponse:
    # Raw tree listing body plus the validator to store alongside it
    data: Dict[str, Any]
    etag: Optional[str]


TreeResult = Union[Found[TreeResponse], NotModified, Failed]


class GitHubClient:
    """Async GitHub client for the listing resolver and file previews.

    Purpose:
      - get_default_branch(coordinate) -> str
      - fetch_tree(coordinate, etag=None) -> Found[TreeResponse] | NotModified | Failed
      - read_raw(coordinate, path, max_chars=200_000) -> str

    Key behavior:
      - One request per call, no retries; throttling is reported, not waited out.
      - An optional GITHUB_TOKEN raises the API quota.
    """

    BASE_URL = "https://api.github.com"
    JSON_ACCEPT = "application/vnd.github+json"
    RAW_ACCEPT = "text/plain"

    def __init__(
        self,
        *,
        timeout: float = 20.0,
        verify: bool = False,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)

        self._headers = self._build_headers()
        self._rate_limiter = rate_limiter or RateLimiter()

    async def get_default_branch(self, coordinate: RepoCoordinate) -> str:
        async with self._create_client() as client:
            return await fetch_default_branch(
                self._request,
                client,
                owner=coordinate.owner,
                repo=coordinate.name,
            )

    async def fetch_tree(self, coordinate: RepoCoordinate, *, etag: Optional[str] = None) -> TreeResult:
        """Fetch the recursive tree for `coordinate.ref`, revalidating with `etag` when given."""
        ref = coordinate.ref or "main"
        url = f"/repos/{coordinate.owner}/{coordinate.name}/git/trees/{encode_component(ref)}"
        headers = {"If-None-Match": etag} if etag else None

        try:
            async with self._create_client() as client:
                resp = await self._request(client, url, params={"recursive": "1"}, headers=headers)
        except ExternalServiceError as e:
            return Failed(reason=str(e))

        if resp.status_code == 304:
            return NotModified()

        if resp.is_success:
            try:
                data = resp.json()
            except ValueError as e:
                return Failed(reason=f"Invalid JSON in tree listing: {e}", status_code=resp.status_code)
            if not isinstance(data, dict):
                return Failed(reason="Tree listing is not a JSON object", status_code=resp.status_code)
            return Found(TreeResponse(data=data, etag=resp.headers.get("ETag")))

        if self._rate_limiter.is_rate_limited(resp):
            return Failed(
                reason=self._rate_limiter.describe(resp),
                status_code=resp.status_code,
                rate_limited=True,
            )

        return Failed(reason=self._status_reason(resp, url), status_code=resp.status_code)

    async def read_raw(self, coordinate: RepoCoordinate, path: str, *, max_chars: int = 200_000) -> str:
        """Read a file's raw text at `coordinate.ref`, truncated to `max_chars`."""
        path_clean = normalize_path(path)
        max_chars_clean = normalize_max_chars(max_chars)
        url = raw_url(coordinate, path_clean)

        async with self._create_client(custom_headers={"Accept": self.RAW_ACCEPT}) as client:
            resp = await self._request(client, url)

        if resp.status_code == 404:
            raise NotFoundError(f"File not found: {path_clean}")
        if resp.is_error:
            raise ExternalServiceError(f"HTTP {resp.status_code} for raw file {path_clean}")

        text = resp.text or ""
        if len(text) > max_chars_clean:
            text = text[:max_chars_clean] + "\n\n...[TRUNCATED]..."
        return text

    # --- HTTP helpers ---

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Accept": self.JSON_ACCEPT,
            "User-Agent": "arduino-code-manager",
        }
        # If GITHUB_TOKEN present, add Authorization for higher rate limits
        token = (os.environ.get("GITHUB_TOKEN") or "").strip()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _create_client(self, custom_headers: Optional[Mapping[str, str]] = None) -> httpx.AsyncClient:
        headers = {**self._headers, **dict(custom_headers or {})}
        return httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers=headers,
            timeout=self._timeout,
            verify=self._verify,
        )

    def _status_reason(self, resp: httpx.Response, url: str) -> str:
        body = ""
        try:
            body = (resp.text or "").strip()
        except UnicodeDecodeError:
            pass
        return f"HTTP {resp.status_code} for {url}" + (f" - {body[:200]}" if body else "")

    async def _request(
        self,
        client: httpx.AsyncClient,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        try:
            resp = await client.get(url, params=dict(params or {}), headers=dict(headers or {}))
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"GitHub request failed (GET {url}): {e}") from e

        logger.debug("GET %s -> %s", url, resp.status_code)
        return resp
