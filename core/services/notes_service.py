"""Notes collection service.

Owns the ordered in-memory note collection and mirrors every mutation to the
repository as a full snapshot. Newly created notes are placed first; edits
keep the note's position.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from loguru import logger

from core.errors import StorageError
from core.models import Note
from core.services.interfaces import NoteRepository, SaveResult


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NotesService:
    """Create, edit and delete notes with write-through persistence."""

    def __init__(
        self, repo: NoteRepository, clock: Callable[[], datetime] | None = None
    ) -> None:
        """Create a NotesService.

        Args:
            repo: Repository with `load()` and `save(notes)` methods.
            clock: Returns the current time (defaults to UTC now).
        """
        self._repo = repo
        self._clock = clock or _utc_now
        self.notes: list[Note] = []
        self.last_save: SaveResult | None = None

    def load(self) -> None:
        """Replace the in-memory collection with the persisted one."""
        self.notes = list(self._repo.load())
        logger.info("Loaded {} notes", len(self.notes))

    def get(self, note_id: int) -> Note | None:
        """Return the note with `note_id`, or None."""
        for note in self.notes:
            if note.id == note_id:
                return note
        return None

    def create(self, title: str, description: str, image: str = "") -> Note:
        """Prepend a new note and persist the collection."""
        now = self._clock()
        note = Note(
            id=self._next_id(now),
            title=title,
            description=description,
            image=image or "",
            created_at=now,
            updated_at=now,
        )
        self.notes = [note, *self.notes]
        logger.info("Created note {} ({} total)", note.id, len(self.notes))
        self._save()
        return note

    def edit(self, note_id: int, title: str, description: str, image: str) -> Note | None:
        """Replace note `note_id` in place, keeping its id and creation time.

        Returns the updated note, or None when no such note exists.
        """
        for index, current in enumerate(self.notes):
            if current.id != note_id:
                continue
            updated = Note(
                id=current.id,
                title=title,
                description=description,
                image=image or "",
                created_at=current.created_at,
                updated_at=self._clock(),
            )
            self.notes = [*self.notes[:index], updated, *self.notes[index + 1 :]]
            logger.info("Edited note {}", note_id)
            self._save()
            return updated
        logger.warning("Edit requested for unknown note {}", note_id)
        return None

    def delete(self, note_id: int) -> bool:
        """Remove note `note_id`. Returns False (and writes nothing) if absent."""
        kept = [n for n in self.notes if n.id != note_id]
        if len(kept) == len(self.notes):
            logger.debug("Delete ignored, note {} not found", note_id)
            return False
        self.notes = kept
        logger.info("Deleted note {} ({} left)", note_id, len(self.notes))
        self._save()
        return True

    @property
    def count(self) -> int:
        """Number of notes currently held."""
        return len(self.notes)

    def _next_id(self, now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        highest = max((n.id for n in self.notes), default=0)
        return candidate if candidate > highest else highest + 1

    def _save(self) -> SaveResult:
        # In-memory state stays authoritative when the write fails.
        try:
            self._repo.save(self.notes)
            result = SaveResult(success=True, count=len(self.notes))
        except StorageError as ex:
            logger.error("Saving {} notes failed: {}", len(self.notes), ex)
            result = SaveResult(success=False, count=len(self.notes), error=str(ex))
        self.last_save = result
        return result
