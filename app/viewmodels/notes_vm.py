"""ViewModel for the notes collection and its editing form."""

from __future__ import annotations

from loguru import logger

from app.viewmodels.note_vm import NoteVM
from core.errors import ImageEncodeError
from core.models import EditingSession, FormState, Note
from core.services.interfaces import ImageEncoder, StatusReporter
from core.services.notes_service import NotesService

IMAGE_ERROR_MESSAGE = "Error processing image. Please try again."
SAVE_ERROR_MESSAGE = "Notes could not be saved to disk."
REQUIRED_MESSAGE = "Title and description are required."


class NotesVM:
    """Mediates between the notes service and the notes panel/dialog.

    The form moves CLOSED -> CREATING/EDITING -> CLOSED. Cancel discards the
    session; a successful submit applies the mutation and discards it.
    """

    def __init__(
        self,
        service: NotesService,
        image_encoder: ImageEncoder,
        status_reporter: StatusReporter | None = None,
    ) -> None:
        """Create a NotesVM.

        Args:
            service: Notes service owning the collection.
            image_encoder: Converts selected files into stored image strings.
            status_reporter: Optional sink for non-blocking messages.
        """
        self._service = service
        self._encoder = image_encoder
        self.status_reporter = status_reporter
        self.state = FormState.CLOSED
        self.session: EditingSession | None = None
        self.validation_error: str | None = None
        self.image_error: str | None = None

    # Collection
    def load(self) -> None:
        self._service.load()

    @property
    def notes(self) -> list[Note]:
        return self._service.notes

    @property
    def items(self) -> list[NoteVM]:
        """Display wrappers in collection order (newest first)."""
        return [NoteVM(n) for n in self._service.notes]

    @property
    def is_empty(self) -> bool:
        return self._service.count == 0

    def delete(self, note_id: int) -> bool:
        """Delete `note_id`; an unknown id is silently ignored."""
        removed = self._service.delete(note_id)
        if removed:
            self._report_save("Note deleted")
        return removed

    # Form lifecycle
    @property
    def is_open(self) -> bool:
        return self.state is not FormState.CLOSED

    def open_create(self) -> bool:
        """Open an empty form. Refused while another form is open."""
        if self.is_open:
            logger.warning("Form already open ({}), ignoring add", self.state.value)
            return False
        self.session = EditingSession()
        self.state = FormState.CREATING
        self._clear_messages()
        return True

    def open_edit(self, note_id: int) -> bool:
        """Open the form pre-populated from note `note_id`."""
        if self.is_open:
            logger.warning("Form already open ({}), ignoring edit", self.state.value)
            return False
        note = self._service.get(note_id)
        if note is None:
            logger.warning("Cannot edit unknown note {}", note_id)
            return False
        self.session = EditingSession(
            title=note.title,
            description=note.description,
            image=note.image,
            note_id=note.id,
        )
        self.state = FormState.EDITING
        self._clear_messages()
        return True

    def set_title(self, title: str) -> None:
        if self.session is not None:
            self.session.title = title

    def set_description(self, description: str) -> None:
        if self.session is not None:
            self.session.description = description

    def attach_image(self, path: str) -> bool:
        """Encode `path` into the session; on failure keep the prior image."""
        if self.session is None:
            return False
        try:
            encoded = self._encoder.encode_file(path)
        except ImageEncodeError as ex:
            logger.error("Error converting image: {}", ex)
            self.image_error = IMAGE_ERROR_MESSAGE
            self._status(IMAGE_ERROR_MESSAGE)
            return False
        self.session.image = encoded
        self.image_error = None
        return True

    def clear_image(self) -> None:
        if self.session is not None:
            self.session.image = ""
            self.image_error = None

    def submit(self) -> Note | None:
        """Validate and apply the session. Returns the saved note or None."""
        session = self.session
        if session is None:
            return None
        if not session.title.strip() or not session.description.strip():
            self.validation_error = REQUIRED_MESSAGE
            return None

        if session.note_id is None:
            note = self._service.create(session.title, session.description, session.image)
            self._report_save("Note created")
        else:
            note = self._service.edit(
                session.note_id, session.title, session.description, session.image
            )
            if note is None:
                self._status("The note no longer exists.")
            else:
                self._report_save("Note saved")
        self._close()
        return note

    def cancel(self) -> None:
        """Discard the session without touching the collection."""
        if self.is_open:
            self._close()

    # Internal helpers
    def _close(self) -> None:
        self.session = None
        self.state = FormState.CLOSED
        self._clear_messages()

    def _clear_messages(self) -> None:
        self.validation_error = None
        self.image_error = None

    def _report_save(self, ok_message: str) -> None:
        result = self._service.last_save
        if result is not None and not result.success:
            self._status(SAVE_ERROR_MESSAGE)
        else:
            self._status(ok_message)

    def _status(self, message: str) -> None:
        if self.status_reporter is not None:
            self.status_reporter.show_status(message)
