"""Key/value persistence for the note collection.

The whole collection lives under a single key as a JSON array of records
`{id, title, description, image, createdAt, updatedAt}`. Loading is lenient:
unparseable data yields an empty collection and malformed records are skipped.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
from typing import Any

from loguru import logger

from core.models import Note
from core.services.interfaces import KeyValueStore
from infrastructure.utils import format_iso_utc, parse_iso_utc

NOTES_KEY = "notes"


def note_to_record(note: Note) -> dict[str, Any]:
    """Return the wire representation of `note`."""
    return {
        "id": note.id,
        "title": note.title,
        "description": note.description,
        "image": note.image or "",
        "createdAt": format_iso_utc(note.created_at),
        "updatedAt": format_iso_utc(note.updated_at),
    }


def note_from_record(record: Any) -> Note:
    """Build a Note from a wire record.

    Raises:
        ValueError: If the record is not an object or lacks a usable id,
            title, description or creation time.
    """
    if not isinstance(record, dict):
        raise ValueError(f"record is not an object: {type(record).__name__}")
    raw_id = record.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (int, float, str)):
        raise ValueError(f"invalid id: {raw_id!r}")
    note_id = int(raw_id)
    title = record.get("title")
    description = record.get("description")
    if not isinstance(title, str) or not isinstance(description, str):
        raise ValueError("title and description must be strings")
    created_at = parse_iso_utc(record.get("createdAt"))
    if created_at is None:
        raise ValueError(f"invalid createdAt: {record.get('createdAt')!r}")
    updated_at = parse_iso_utc(record.get("updatedAt")) or created_at
    image = record.get("image")
    return Note(
        id=note_id,
        title=title,
        description=description,
        image=image if isinstance(image, str) else "",
        created_at=created_at,
        updated_at=updated_at,
    )


def serialize_notes(notes: Iterable[Note]) -> str:
    """Serialize `notes` to the stored JSON text."""
    return json.dumps([note_to_record(n) for n in notes], ensure_ascii=False)


class KeyValueNoteRepository:
    """Load and save the note collection through a `KeyValueStore`."""

    def __init__(self, store: KeyValueStore, key: str = NOTES_KEY) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Note]:
        """Return stored notes in stored order; empty on missing/bad data."""
        raw = self._store.get_item(self._key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except ValueError as ex:
            logger.warning("Stored notes are not valid JSON, starting empty: {}", ex)
            return []
        if not isinstance(data, list):
            logger.warning("Stored notes are not a list ({}), starting empty", type(data).__name__)
            return []

        notes: list[Note] = []
        seen: set[int] = set()
        for record in data:
            try:
                note = note_from_record(record)
            except (ValueError, TypeError, OverflowError) as ex:
                logger.error("Note record error: {} | record={}", ex, _preview(record))
                continue
            if note.id in seen:
                logger.error("Duplicate note id {} skipped", note.id)
                continue
            seen.add(note.id)
            notes.append(note)
        return notes

    def save(self, notes: Iterable[Note]) -> None:
        """Overwrite the stored collection with `notes`."""
        self._store.set_item(self._key, serialize_notes(notes))


def _preview(record: Any) -> str:
    # Keep image payloads out of the log.
    if isinstance(record, dict):
        return str({k: v for k, v in record.items() if k != "image"})
    return repr(record)[:200]
