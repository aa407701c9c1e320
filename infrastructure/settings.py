"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

APP_NAME = "MapNotes"


def get_app_data_dir() -> Path:
    """Per-user directory for the store and logs."""
    if os.name == "nt":
        return Path.home() / "AppData" / "Local" / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME.lower()


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access.

    A missing or unreadable settings file is not fatal: every lookup then
    falls back to the caller's default.
    """

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        self._data: dict[str, Any] = {}
        if not self._path.exists():
            logger.warning("settings.json not found: {}, using defaults", self._path)
            return
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            logger.error("settings.json unreadable ({}): {}, using defaults", self._path, ex)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            logger.error("settings.json root must be an object: {}", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_int(self, key: str, default: int) -> int:
        """Return `key` as int, falling back to `default` on bad values."""
        try:
            return int(self.get(key, default))
        except (ValueError, TypeError):
            logger.warning("Setting {} is not an integer, using {}", key, default)
            return default

    def get_bool(self, key: str, default: bool) -> bool:
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    def get_path(self, key: str, default: Path) -> Path:
        """Return `key` as a path with `~` and environment variables expanded."""
        raw = self.get(key)
        if not isinstance(raw, str) or not raw.strip():
            return default
        return Path(os.path.expanduser(os.path.expandvars(raw)))
