"""Application exception types shared by core services and infrastructure."""

from __future__ import annotations


class MapNotesError(Exception):
    """Base class for recoverable application errors."""


class ImageEncodeError(MapNotesError):
    """Raised when a selected file cannot be turned into an embeddable image."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot encode image {path}: {reason}")
        self.path = path
        self.reason = reason


class StorageError(MapNotesError):
    """Raised when the local key/value store cannot be written."""
