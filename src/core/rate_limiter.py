"""Interpret GitHub throttling signals on a response.

Listings never wait out a rate limit; the resolver falls back to cached
data instead. This module only classifies the response:
- 429 is always a rate limit.
- 403 is treated as a rate limit as well (primary and secondary limits
  both answer 403 on the REST API).
- X-RateLimit-Reset / Retry-After give the time the quota comes back.
"""

from __future__ import annotations

import time
from typing import Mapping, Optional

import httpx

RATE_LIMIT_STATUSES = frozenset({403, 429})


class RateLimiter:
    def is_rate_limited(self, response: httpx.Response) -> bool:
        return response.status_code in RATE_LIMIT_STATUSES

    def reset_at(self, response: httpx.Response) -> Optional[int]:
        # Epoch seconds when requests are allowed again, if the server said so
        reset = self._parse_int_header(response.headers, "X-RateLimit-Reset")
        if reset is not None:
            return reset

        retry_after = self._parse_int_header(response.headers, "Retry-After")
        if retry_after is not None:
            return int(time.time()) + retry_after
        return None

    def describe(self, response: httpx.Response) -> str:
        reset = self.reset_at(response)
        if reset is None:
            return "GitHub API rate limit reached."
        wait = max(0, reset - int(time.time()))
        return f"GitHub API rate limit reached (resets in {wait}s)."

    def _parse_int_header(self, headers: Mapping[str, str], name: str) -> Optional[int]:
        value = headers.get(name)
        if not value:
            return None
        value = value.strip()
        if not value.isdigit():
            return None
        return int(value)
