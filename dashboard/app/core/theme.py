from __future__ import annotations

import logging
from typing import Callable, List

from dashboard.app.core.config import THEME_MODES

log = logging.getLogger(__name__)

ThemeListener = Callable[[str], None]


def normalize_mode(mode: str) -> str:
    m = (mode or "").strip().lower()
    if m not in THEME_MODES:
        raise ValueError(f"Unknown theme mode {mode!r} (expected one of {THEME_MODES})")
    return m


def other_mode(mode: str) -> str:
    return "dark" if normalize_mode(mode) == "light" else "light"


class ThemeStore:
    """
    Holds the light/dark mode and applies it explicitly.

    `data_theme` is the value for the root element's `data-theme` attribute.
    Listeners receive the mode on every apply, including the initial one.
    """

    def __init__(self, mode: str = "light") -> None:
        self._listeners: List[ThemeListener] = []
        self._mode = normalize_mode(mode)
        self._applied = self._mode

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def data_theme(self) -> str:
        return self._applied

    def subscribe(self, listener: ThemeListener) -> None:
        self._listeners.append(listener)
        listener(self._applied)

    def apply(self, mode: str) -> str:
        self._mode = normalize_mode(mode)
        self._applied = self._mode
        log.debug("theme applied: %s", self._applied)
        for listener in list(self._listeners):
            listener(self._applied)
        return self._applied

    def toggle(self) -> str:
        return self.apply(other_mode(self._mode))
