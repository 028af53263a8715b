from __future__ import annotations
from typing import Awaitable, Callable
import httpx
from core.errors import ExternalServiceError, NotFoundError

RequestFn = Callable[..., Awaitable[httpx.Response]]

DEFAULT_BRANCH_FALLBACK = "main"


async def fetch_default_branch(
    request: RequestFn,
    client: httpx.AsyncClient,
    *,
    owner: str,
    repo: str,
) -> str:
    # Repository metadata carries the default branch name
    resp = await request(client, f"/repos/{owner}/{repo}")
    if resp.status_code == 404:
        raise NotFoundError(f"Repository not found: {owner}/{repo}")
    if resp.is_error:
        raise ExternalServiceError(f"HTTP {resp.status_code} for repository metadata {owner}/{repo}")

    default_branch = (resp.json() or {}).get("default_branch") or DEFAULT_BRANCH_FALLBACK
    return str(default_branch).strip() or DEFAULT_BRANCH_FALLBACK
