"""Notes panel: header with "Add Note" and a grid of note cards."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QPixmap
from PySide6.QtWidgets import (
    QDialog,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.note_vm import NoteVM
from app.viewmodels.notes_vm import NotesVM
from app.views.constants import (
    CARD_IMAGE_HEIGHT,
    CARD_MIN_WIDTH,
    DEFAULT_GRID_COLUMNS,
    DEFAULT_THUMB_SIZE,
    EMPTY_NOTES_TEXT,
    GRID_SPACING_PX,
)
from app.views.dialogs.note_dialog import NoteDialog
from infrastructure.image_service import ImageService


class NoteCard(QFrame):
    """A single note: image or placeholder, title, description, actions."""

    def __init__(
        self,
        item: NoteVM,
        image_service: ImageService,
        thumb_size: int,
        on_edit: Callable[[int], None],
        on_delete: Callable[[int], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.note_id = item.note_id
        self.setFrameShape(QFrame.StyledPanel)
        self.setMinimumWidth(CARD_MIN_WIDTH)

        root = QVBoxLayout(self)

        self.image_label = QLabel()
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setFixedHeight(CARD_IMAGE_HEIGHT)
        img = image_service.to_qimage(item.image, thumb_size) if item.has_image else None
        if img is not None:
            self.image_label.setPixmap(
                QPixmap.fromImage(img).scaled(
                    thumb_size, CARD_IMAGE_HEIGHT, Qt.KeepAspectRatio, Qt.SmoothTransformation
                )
            )
        else:
            self.image_label.setText("(no image)")
            self.image_label.setStyleSheet("color: #9ca3af;")
        root.addWidget(self.image_label)

        title = QLabel(item.title)
        title_font = QFont()
        title_font.setPointSize(14)
        title_font.setBold(True)
        title.setFont(title_font)
        title.setWordWrap(True)
        title.setTextFormat(Qt.PlainText)
        root.addWidget(title)

        description = QLabel(item.description)
        description.setWordWrap(True)
        description.setTextFormat(Qt.PlainText)
        description.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        root.addWidget(description, 1)

        stamp = QLabel(item.timestamp_label)
        stamp.setStyleSheet("color: #6b7280;")
        root.addWidget(stamp)

        actions = QHBoxLayout()
        self.btn_edit = QPushButton("Edit")
        self.btn_delete = QPushButton("Delete")
        actions.addWidget(self.btn_edit)
        actions.addStretch(1)
        actions.addWidget(self.btn_delete)
        root.addLayout(actions)

        self.btn_edit.clicked.connect(lambda: on_edit(self.note_id))
        self.btn_delete.clicked.connect(lambda: on_delete(self.note_id))


class NotesPanel(QWidget):
    """Lists notes newest first and drives the note dialog."""

    def __init__(
        self,
        vm: NotesVM,
        image_service: ImageService,
        columns: int = DEFAULT_GRID_COLUMNS,
        thumb_size: int = DEFAULT_THUMB_SIZE,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._vm = vm
        self._img = image_service
        self._columns = max(1, int(columns or DEFAULT_GRID_COLUMNS))
        self._thumb_size = int(thumb_size or DEFAULT_THUMB_SIZE)

        root = QVBoxLayout(self)

        header = QHBoxLayout()
        title = QLabel("My Notes")
        title_font = QFont()
        title_font.setPointSize(20)
        title_font.setBold(True)
        title.setFont(title_font)
        header.addWidget(title)
        header.addStretch(1)
        self.btn_add = QPushButton("Add Note")
        header.addWidget(self.btn_add)
        root.addLayout(header)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        root.addWidget(self.scroll, 1)

        self.btn_add.clicked.connect(self.add_note)
        self.refresh()

    # Public API
    def refresh(self) -> None:
        """Rebuild the card grid from the view-model."""
        container = QWidget()
        if self._vm.is_empty:
            layout = QVBoxLayout(container)
            empty = QLabel(EMPTY_NOTES_TEXT)
            empty.setAlignment(Qt.AlignCenter)
            layout.addStretch(1)
            layout.addWidget(empty)
            layout.addStretch(1)
        else:
            grid = QGridLayout(container)
            grid.setSpacing(GRID_SPACING_PX)
            grid.setAlignment(Qt.AlignTop)
            for index, item in enumerate(self._vm.items):
                card = NoteCard(
                    item,
                    self._img,
                    self._thumb_size,
                    on_edit=self.edit_note,
                    on_delete=self.delete_note,
                )
                grid.addWidget(card, index // self._columns, index % self._columns)
        old = self.scroll.takeWidget()
        if old is not None:
            # Cards may still be inside their own click handler.
            old.deleteLater()
        self.scroll.setWidget(container)

    def add_note(self) -> None:
        if not self._vm.open_create():
            return
        self._run_dialog()

    def edit_note(self, note_id: int) -> None:
        if not self._vm.open_edit(note_id):
            return
        self._run_dialog()

    def delete_note(self, note_id: int) -> None:
        if self._vm.delete(note_id):
            self.refresh()

    # Internals
    def _run_dialog(self) -> None:
        dlg = NoteDialog(self._vm, self._img, parent=self)
        result = dlg.exec()
        if result != QDialog.Accepted:
            self._vm.cancel()
        logger.debug("Note dialog closed (accepted={})", result == QDialog.Accepted)
        self.refresh()
