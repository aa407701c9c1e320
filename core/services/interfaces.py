"""Core capability interfaces and shared request/result structures.

The application talks to storage, the positioning sensor, the map widget and
the image decoder only through the protocols below, so each of them can be
replaced by an in-memory fake in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from core.models import Location, Note, TileSource


@dataclass(frozen=True)
class PositionOptions:
    """Options for a one-shot position request.

    Attributes:
        enable_high_accuracy: Prefer satellite positioning when available.
        timeout_ms: Upper bound on how long the request may take.
        maximum_age_ms: Age up to which a cached reading may be reused; 0
            always asks the sensor for a fresh reading.
    """

    enable_high_accuracy: bool = True
    timeout_ms: int = 5000
    maximum_age_ms: int = 0


@dataclass
class SaveResult:
    """Outcome of writing the note collection to the store.

    Attributes:
        success: Whether the full snapshot was written.
        count: Number of notes in the snapshot.
        error: Failure reason when `success` is False.
    """

    success: bool
    count: int
    error: str | None = None


class KeyValueStore(Protocol):
    """String key/value persistence, modelled on browser local storage."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value for `key`, or None when absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Overwrite `key` with `value`. Raises `StorageError` on failure."""
        ...


class NoteRepository(Protocol):
    """Load and save the whole note collection."""

    def load(self) -> list[Note]:
        """Return the persisted notes; never raises on malformed data."""
        ...

    def save(self, notes: list[Note]) -> None:
        """Write a full snapshot of `notes`. Raises `StorageError` on failure."""
        ...


class ImageEncoder(Protocol):
    """Turns a user-selected file into a self-contained image string."""

    def encode_file(self, path: str) -> str:
        """Return a `data:` URL for `path`. Raises `ImageEncodeError`."""
        ...


class PositionProvider(Protocol):
    """One-shot access to the device positioning sensor."""

    def is_available(self) -> bool:
        """True when the platform exposes a positioning source at all."""
        ...

    def request_position(
        self,
        options: PositionOptions,
        on_success: Callable[[Location], None],
        on_error: Callable[[str], None],
    ) -> None:
        """Request a reading; exactly one of the callbacks fires later."""
        ...


class MapRenderer(Protocol):
    """Create/update/remove operations on an interactive map."""

    def create_map(self, center: tuple[float, float], zoom: int) -> None:
        """Create the map instance centered on `center`."""
        ...

    def set_tile_source(self, source: TileSource) -> None:
        """Replace the current tile layer with `source`."""
        ...

    def set_view(
        self, center: tuple[float, float], zoom: int, animate: bool, duration_s: float
    ) -> None:
        """Move the viewport to `center` at `zoom`."""
        ...

    def add_marker(self, position: tuple[float, float]) -> None:
        """Add the location marker at `position`."""
        ...

    def move_marker(self, position: tuple[float, float]) -> None:
        """Move the existing location marker to `position`."""
        ...

    def remove_map(self) -> None:
        """Tear down the map together with its marker and tile layer."""
        ...


class StatusReporter(Protocol):
    """Protocol for non-blocking status messages."""

    def show_status(self, message: str, timeout: int = 3000) -> None:
        """Show status message."""
        ...
