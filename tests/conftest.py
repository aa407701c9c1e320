"""Shared pytest fixtures and in-memory fakes for MapNotes tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import os

import pytest

from core.errors import ImageEncodeError, StorageError
from core.models import Location, TileSource
from core.services.notes_service import NotesService
from infrastructure.note_repository import KeyValueNoteRepository

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class InMemoryStore:
    """KeyValueStore backed by a dict; can be told to fail writes."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.fail_writes = False
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("disk full")
        self.writes += 1
        self.data[key] = value


class FakeClock:
    """Returns a fixed time that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


class FakeImageEncoder:
    """Maps known paths to data URLs; everything else fails to encode."""

    def __init__(self, images: dict[str, str] | None = None) -> None:
        self.images = dict(images or {})

    def encode_file(self, path: str) -> str:
        if path not in self.images:
            raise ImageEncodeError(path, "not a readable image")
        return self.images[path]


class FakeStatusReporter:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def show_status(self, message: str, timeout: int = 3000) -> None:
        self.messages.append(message)


class FakePositionProvider:
    """Holds requests until the test resolves them."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.requests: list[tuple[object, object, object]] = []

    def is_available(self) -> bool:
        return self.available

    def request_position(self, options, on_success, on_error) -> None:
        self.requests.append((options, on_success, on_error))

    def succeed(self, latitude: float, longitude: float, index: int = -1) -> None:
        _options, on_success, _on_error = self.requests[index]
        on_success(Location(latitude=latitude, longitude=longitude))

    def fail(self, reason: str = "timeout", index: int = -1) -> None:
        _options, _on_success, on_error = self.requests[index]
        on_error(reason)


class FakeMapRenderer:
    """Records map state the way a real renderer would hold it."""

    def __init__(self) -> None:
        self.exists = False
        self.created = 0
        self.removed = 0
        self.center: tuple[float, float] | None = None
        self.zoom: int | None = None
        self.tile_source: TileSource | None = None
        self.marker: tuple[float, float] | None = None
        self.markers_added = 0
        self.view_calls: list[tuple[tuple[float, float], int, bool, float]] = []

    def create_map(self, center, zoom) -> None:
        self.exists = True
        self.created += 1
        self.center = center
        self.zoom = zoom

    def set_tile_source(self, source) -> None:
        assert self.exists
        self.tile_source = source

    def set_view(self, center, zoom, animate, duration_s) -> None:
        assert self.exists
        self.center = center
        self.zoom = zoom
        self.view_calls.append((center, zoom, animate, duration_s))

    def add_marker(self, position) -> None:
        assert self.exists and self.marker is None
        self.marker = position
        self.markers_added += 1

    def move_marker(self, position) -> None:
        assert self.exists and self.marker is not None
        self.marker = position

    def remove_map(self) -> None:
        self.exists = False
        self.removed += 1
        self.center = None
        self.zoom = None
        self.tile_source = None
        self.marker = None


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo(store):
    return KeyValueNoteRepository(store)


@pytest.fixture
def notes_service(repo, clock):
    service = NotesService(repo, clock=clock)
    service.load()
    return service


@pytest.fixture
def encoder():
    return FakeImageEncoder({"/photos/cat.png": "data:image/png;base64,Y2F0"})


@pytest.fixture
def status():
    return FakeStatusReporter()


@pytest.fixture
def provider():
    return FakePositionProvider()


@pytest.fixture
def renderer():
    return FakeMapRenderer()


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests touching Qt GUI types."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app
