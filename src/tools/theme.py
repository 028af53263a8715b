from __future__ import annotations

from typing import Dict, Optional

from mcp.server.fastmcp import FastMCP

from core.cache import KeyValueStore
from core.preferences import ThemePreference
from tools.session import build_store


def register(mcp: FastMCP, *, store: Optional[KeyValueStore] = None) -> None:
    preference = ThemePreference(store or build_store())

    @mcp.tool(name="set_theme")
    async def set_theme(theme: Optional[str] = None) -> Dict[str, str]:
        """Persist the "dark"/"light" preview theme; without an argument, toggle it."""
        return {"theme": preference.toggle(theme)}
