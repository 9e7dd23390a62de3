"""
Application Context

Holds the per-session theme and auth token, loaded once from the session store.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from session_store import SessionStore, THEME_KEY, TOKEN_KEY

logger = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"


def normalize_theme(value: Optional[str]) -> str:
    """Anything other than ``light`` is treated as the dark theme."""
    return LIGHT if value == LIGHT else DARK


@dataclass
class AppContext:
    """Theme preference and auth token for one app session.

    Built once with :meth:`load` and only changed through its setters, which
    also persist the new value.
    """
    store: SessionStore = field(repr=False)
    theme: str = DARK
    token: Optional[str] = None

    @classmethod
    def load(cls, store: SessionStore) -> "AppContext":
        theme = normalize_theme(store.get(THEME_KEY, DARK))
        token = store.get(TOKEN_KEY, "") or None
        return cls(store=store, theme=theme, token=token)

    def set_theme(self, theme: str) -> None:
        self.theme = normalize_theme(theme)
        self.store.set(THEME_KEY, self.theme)

    def toggle_theme(self) -> str:
        """Flip between light and dark and return the new theme."""
        self.set_theme(DARK if self.theme == LIGHT else LIGHT)
        return self.theme

    def set_token(self, token: str) -> None:
        self.token = token or None
        if not self.store.set(TOKEN_KEY, token or ""):
            logger.warning("Token kept in memory only; session store is not writable")
