"""Theme preference, the one value persisted between sessions.

Anything stored under the key other than 'light' reads as dark, so a fresh
install starts dark.
"""

from __future__ import annotations

from .capabilities import KeyValueStore

THEME_KEY = "theme"
DARK = "dark"
LIGHT = "light"


def get_theme(store: KeyValueStore) -> str:
    return LIGHT if store.get(THEME_KEY) == LIGHT else DARK


def set_theme(store: KeyValueStore, theme: str) -> None:
    if theme not in {DARK, LIGHT}:
        raise ValueError("Invalid theme")
    store.set(THEME_KEY, theme)


def toggle_theme(store: KeyValueStore) -> str:
    theme = LIGHT if get_theme(store) == DARK else DARK
    set_theme(store, theme)
    return theme
