"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

WINDOW_TITLE: str = "MapNotes"

# Header tabs (order preserved in the tab bar)
TAB_LABELS: dict[str, str] = {
    "map": "Location Map",
    "notes": "Notes",
}

# Notes grid defaults
DEFAULT_GRID_COLUMNS: int = 3  # overridable by settings.json
DEFAULT_THUMB_SIZE: int = 384  # overridable by settings.json
CARD_IMAGE_HEIGHT: int = 192
CARD_MIN_WIDTH: int = 240
GRID_SPACING_PX: int = 16

EMPTY_NOTES_TEXT: str = 'No notes available. Click "Add Note" to get started!'

# Location panel
COORD_DECIMALS: int = 6
MAP_MIN_HEIGHT: int = 500
REFRESH_TOOLTIP: str = "Update your current location"

STATUS_TIMEOUT_MS: int = 3000
