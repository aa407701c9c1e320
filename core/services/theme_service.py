"""Theme resolution and theme-dependent map tile sources."""

from __future__ import annotations

from loguru import logger

from core.models import TileSource

LIGHT_TILES = TileSource(
    name="light",
    url_template="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
    attribution="© OpenStreetMap contributors",
    max_zoom=19,
)

DARK_TILES = TileSource(
    name="dark",
    url_template="https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}.png",
    attribution=(
        '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> '
        'contributors &copy; <a href="https://carto.com/attributions">CARTO</a>'
    ),
    max_zoom=19,
)

THEME_CHOICES = ("system", "light", "dark")


def resolve_dark(system_dark: bool, override: bool | None) -> bool:
    """Combine the OS preference with the in-app override (override wins)."""
    if override is not None:
        return override
    return system_dark


def tile_source_for(is_dark: bool) -> TileSource:
    return DARK_TILES if is_dark else LIGHT_TILES


def override_from_setting(value: object) -> bool | None:
    """Map the `ui.theme` setting to an initial override value."""
    text = str(value or "system").strip().lower()
    if text not in THEME_CHOICES:
        logger.warning("Unknown ui.theme {!r}, following the system scheme", value)
        return None
    if text == "dark":
        return True
    if text == "light":
        return False
    return None
