"""Lightweight view model wrapper around `Note`."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import Note
from infrastructure.utils import format_local_datetime


@dataclass
class NoteVM:
    """Expose convenient properties for note cards."""

    note: Note

    @property
    def note_id(self) -> int:
        return self.note.id

    @property
    def title(self) -> str:
        return self.note.title

    @property
    def description(self) -> str:
        """Description text with line breaks preserved."""
        return self.note.description

    @property
    def image(self) -> str:
        return self.note.image

    @property
    def has_image(self) -> bool:
        return self.note.has_image

    @property
    def was_edited(self) -> bool:
        """True once the note has been saved after creation."""
        return self.note.updated_at != self.note.created_at

    @property
    def timestamp_label(self) -> str:
        """Creation time, or last edit time for edited notes."""
        if self.was_edited:
            return f"Edited {format_local_datetime(self.note.updated_at)}"
        return f"Created {format_local_datetime(self.note.created_at)}"
