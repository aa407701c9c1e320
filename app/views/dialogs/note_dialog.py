"""Modal form for creating or editing a note."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from app.viewmodels.notes_vm import NotesVM
from infrastructure.image_service import IMAGE_FILE_FILTER, ImageService

PREVIEW_HEIGHT = 192


class NoteDialog(QDialog):
    """Edits the open `EditingSession` of a `NotesVM`.

    Accepting submits the session; rejecting leaves cancellation to the
    caller. Image failures and validation errors are shown inline.
    """

    def __init__(
        self, vm: NotesVM, image_service: ImageService, parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self._vm = vm
        self._img = image_service
        session = vm.session
        editing = session is not None and session.is_editing

        self.setWindowTitle("Edit Note" if editing else "Create New Note")
        self.setModal(True)
        self.resize(500, 560)

        root = QVBoxLayout(self)

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("Note Title")
        root.addWidget(self.title_edit)

        self.description_edit = QPlainTextEdit()
        self.description_edit.setPlaceholderText("Note Description")
        self.description_edit.setMinimumHeight(128)
        root.addWidget(self.description_edit)

        self.btn_image = QPushButton()
        root.addWidget(self.btn_image)

        preview_row = QHBoxLayout()
        self.preview_label = QLabel()
        self.preview_label.setAlignment(Qt.AlignCenter)
        self.preview_label.setFixedHeight(PREVIEW_HEIGHT)
        preview_row.addWidget(self.preview_label, 1)
        self.btn_remove_image = QPushButton("Remove Image")
        preview_row.addWidget(self.btn_remove_image, 0, Qt.AlignTop)
        root.addLayout(preview_row)

        self.message_label = QLabel()
        self.message_label.setWordWrap(True)
        self.message_label.setStyleSheet("color: #b00020;")
        self.message_label.setVisible(False)
        root.addWidget(self.message_label)

        btns = QHBoxLayout()
        btns.addStretch(1)
        self.btn_cancel = QPushButton("Cancel")
        self.btn_ok = QPushButton("Save Changes" if editing else "Create Note")
        self.btn_ok.setDefault(True)
        btns.addWidget(self.btn_cancel)
        btns.addWidget(self.btn_ok)
        root.addLayout(btns)

        if session is not None:
            self.title_edit.setText(session.title)
            self.description_edit.setPlainText(session.description)

        self.btn_image.clicked.connect(self._choose_image)
        self.btn_remove_image.clicked.connect(self._remove_image)
        self.btn_cancel.clicked.connect(self.reject)
        self.btn_ok.clicked.connect(self._on_accept)

        self._render_image()

    def _choose_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Select Image", "", IMAGE_FILE_FILTER)
        if not path:
            return
        self._vm.attach_image(path)
        self._render_image()
        self._render_message(self._vm.image_error)

    def _remove_image(self) -> None:
        self._vm.clear_image()
        self._render_image()
        self._render_message(None)

    def _on_accept(self) -> None:
        self._vm.set_title(self.title_edit.text())
        self._vm.set_description(self.description_edit.toPlainText())
        note = self._vm.submit()
        if self._vm.is_open:
            # Validation failed; keep the form open.
            self._render_message(self._vm.validation_error)
            return
        if note is None:
            self.reject()
            return
        self.accept()

    def _render_image(self) -> None:
        session = self._vm.session
        image = session.image if session is not None else ""
        self.btn_image.setText("Change Image" if image else "Upload Image")
        self.btn_remove_image.setVisible(bool(image))
        qimg = self._img.to_qimage(image, PREVIEW_HEIGHT * 2) if image else None
        if qimg is None:
            self.preview_label.clear()
            self.preview_label.setVisible(False)
            return
        self.preview_label.setVisible(True)
        self.preview_label.setPixmap(
            QPixmap.fromImage(qimg).scaled(
                self.preview_label.width() or 440,
                PREVIEW_HEIGHT,
                Qt.KeepAspectRatio,
                Qt.SmoothTransformation,
            )
        )

    def _render_message(self, message: str | None) -> None:
        self.message_label.setVisible(bool(message))
        self.message_label.setText(message or "")
