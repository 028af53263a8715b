from __future__ import annotations

from typing import Literal, Optional, cast

from core.cache import KeyValueStore
from core.errors import ValidationError

Theme = Literal["dark", "light"]

THEME_KEY = "theme"


class ThemePreference:
    """Dark/light preference persisted under a fixed key, apart from the listing cache."""

    def __init__(self, store: KeyValueStore, *, default: Theme = "light") -> None:
        self._store = store
        self._default = default

    def get(self) -> Theme:
        saved = self._store.get(THEME_KEY)
        if saved in ("dark", "light"):
            return cast(Theme, saved)
        return self._default

    def set(self, theme: str) -> Theme:
        value = (theme or "").strip().lower()
        if value not in ("dark", "light"):
            raise ValidationError("theme must be 'dark' or 'light'")
        self._store.set(THEME_KEY, value)
        return cast(Theme, value)

    def toggle(self, theme: Optional[str] = None) -> Theme:
        if theme:
            return self.set(theme)
        return self.set("light" if self.get() == "dark" else "dark")
