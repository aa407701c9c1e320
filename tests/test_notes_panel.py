"""Widget tests for the notes panel and note cards."""

from datetime import datetime, timedelta, timezone

from PySide6.QtWidgets import QLabel
import pytest

from app.viewmodels.note_vm import NoteVM
from app.viewmodels.notes_vm import NotesVM
from app.views.constants import EMPTY_NOTES_TEXT
from app.views.notes_panel import NoteCard, NotesPanel
from core.models import Note
from infrastructure.image_service import ImageService


@pytest.fixture
def panel(qapp, notes_service, encoder):
    vm = NotesVM(notes_service, encoder)
    return NotesPanel(vm, ImageService(), columns=3)


def _cards(panel):
    return panel.scroll.widget().findChildren(NoteCard)


class TestNotesPanel:
    """Test cases for rendering the collection."""

    def test_empty_state(self, panel):
        texts = [label.text() for label in panel.scroll.widget().findChildren(QLabel)]

        assert EMPTY_NOTES_TEXT in texts
        assert _cards(panel) == []

    def test_cards_newest_first(self, panel, notes_service):
        notes_service.create("first", "a")
        notes_service.create("second", "b")

        panel.refresh()

        assert [card.note_id for card in _cards(panel)] == [n.id for n in notes_service.notes]

    def test_delete_button_removes_card(self, panel, notes_service):
        note = notes_service.create("gone", "soon")
        panel.refresh()

        _cards(panel)[0].btn_delete.click()

        assert notes_service.get(note.id) is None
        assert _cards(panel) == []

    def test_card_without_image_shows_placeholder(self, qapp, notes_service):
        note = notes_service.create("plain", "text")
        card = NoteCard(NoteVM(note), ImageService(), 128, lambda _id: None, lambda _id: None)

        assert card.image_label.text() == "(no image)"


class TestNoteVM:
    def test_timestamp_label(self):
        created = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        note = Note(id=1, title="t", description="d", created_at=created, updated_at=created)

        assert NoteVM(note).timestamp_label.startswith("Created ")
        assert NoteVM(note).was_edited is False

        note.updated_at = created + timedelta(minutes=5)

        assert NoteVM(note).timestamp_label.startswith("Edited ")
