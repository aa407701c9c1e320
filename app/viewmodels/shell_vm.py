"""ViewModel for the top-level shell: active tab and theme."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from core.services.theme_service import resolve_dark

TAB_MAP = "map"
TAB_NOTES = "notes"
TABS = (TAB_MAP, TAB_NOTES)


class ShellVM:
    """Owns the active tab and the effective light/dark flag.

    The effective theme combines the OS color-scheme preference with the
    in-app override; the override wins once it has been set.
    """

    def __init__(
        self,
        active_tab: str = TAB_MAP,
        system_dark: bool = False,
        dark_override: bool | None = None,
    ) -> None:
        if active_tab not in TABS:
            raise ValueError(f"Unknown tab: {active_tab}")
        self._active_tab = active_tab
        self._system_dark = bool(system_dark)
        self._override = dark_override
        self._theme_listeners: list[Callable[[bool], None]] = []
        self._tab_listeners: list[Callable[[str], None]] = []

    @property
    def active_tab(self) -> str:
        return self._active_tab

    @property
    def is_dark(self) -> bool:
        return resolve_dark(self._system_dark, self._override)

    @property
    def system_dark(self) -> bool:
        return self._system_dark

    @property
    def dark_override(self) -> bool | None:
        return self._override

    def on_theme_changed(self, callback: Callable[[bool], None]) -> None:
        """Register `callback(is_dark)` for effective theme changes."""
        self._theme_listeners.append(callback)

    def on_tab_changed(self, callback: Callable[[str], None]) -> None:
        """Register `callback(tab)` for active tab changes."""
        self._tab_listeners.append(callback)

    def select_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        if tab == self._active_tab:
            return
        self._active_tab = tab
        logger.debug("Active tab: {}", tab)
        for cb in list(self._tab_listeners):
            cb(tab)

    def toggle_theme(self) -> None:
        """Flip the effective theme via the in-app override."""
        before = self.is_dark
        self._override = not before
        self._notify_theme(before)

    def set_system_dark(self, dark: bool) -> None:
        """Record the OS preference; visible only while no override is set."""
        before = self.is_dark
        self._system_dark = bool(dark)
        self._notify_theme(before)

    def _notify_theme(self, before: bool) -> None:
        after = self.is_dark
        if after == before:
            return
        logger.info("Theme changed: {}", "dark" if after else "light")
        for cb in list(self._theme_listeners):
            cb(after)
