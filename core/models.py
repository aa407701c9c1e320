"""Core domain models for notes, location readings and map tiles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass
class Note:
    """A user-authored note.

    `image` holds a self-contained `data:` URL, or an empty string when the
    note has no attachment.
    """

    id: int
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
    image: str = ""

    @property
    def has_image(self) -> bool:
        return bool(self.image)


@dataclass(frozen=True)
class Location:
    """A single latitude/longitude reading in degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass
class EditingSession:
    """Transient form state while the note dialog is open."""

    title: str = ""
    description: str = ""
    image: str = ""
    # None while creating a new note
    note_id: int | None = None

    @property
    def is_editing(self) -> bool:
        return self.note_id is not None


class FormState(Enum):
    """Lifecycle of the note editing form."""

    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


@dataclass(frozen=True)
class TileSource:
    """URL template and attribution used to render map imagery."""

    name: str
    url_template: str
    attribution: str
    max_zoom: int = 19
