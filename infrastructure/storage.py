"""JSON-file key/value store.

Stands in for browser local storage: a single JSON object whose values are
strings, rewritten atomically on every `set_item`.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
import tempfile

from loguru import logger

from core.errors import StorageError


class JsonFileStore:
    """Persist string values under string keys in one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> str | None:
        """Return the value for `key`, or None when absent or unreadable."""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Overwrite `key` with `value`, keeping the other keys intact."""
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _read_all(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            logger.warning("Store unreadable, treating as empty: {} ({})", self._path, ex)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store root is not an object, treating as empty: {}", self._path)
            return {}
        return data

    def _write_all(self, data: dict[str, object]) -> None:
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as ex:
            raise StorageError(f"Write to {self._path} failed: {ex}") from ex
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
