"""LayoutManager: Builds the shell layout (header bar + feature stack)."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QApplication,
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from app.views.constants import TAB_LABELS, WINDOW_TITLE


class LayoutManager:
    """Manages main window layout.

    This class encapsulates all layout-related functionality including:
    - Header bar with tab buttons and theme toggle
    - Stacked content area holding both feature panels
    - Window sizing and positioning
    """

    WINDOW_SIZE_RATIO = 0.6
    HEADER_HEIGHT = 64

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to manage layout for
        """
        self.window = main_window
        self.stack: QStackedWidget | None = None
        self.tab_buttons: dict[str, QPushButton] = {}
        self.theme_button: QPushButton | None = None
        self._tab_index: dict[str, int] = {}

    def create_header(self) -> QWidget:
        """Create the header bar with app name, tab buttons and theme toggle.

        Returns:
            Header widget
        """
        header = QWidget()
        header.setFixedHeight(self.HEADER_HEIGHT)
        row = QHBoxLayout(header)

        name = QLabel(WINDOW_TITLE)
        name_font = QFont()
        name_font.setPointSize(16)
        name_font.setBold(True)
        name.setFont(name_font)
        row.addWidget(name)
        row.addStretch(1)

        group = QButtonGroup(header)
        group.setExclusive(True)
        for tab, label in TAB_LABELS.items():
            btn = QPushButton(label)
            btn.setCheckable(True)
            group.addButton(btn)
            row.addWidget(btn)
            self.tab_buttons[tab] = btn

        row.addStretch(1)
        self.theme_button = QPushButton()
        self.theme_button.setToolTip("Toggle theme")
        row.addWidget(self.theme_button)
        return header

    def setup_main_layout(self, header: QWidget, panels: dict[str, QWidget]) -> QWidget:
        """Stack the feature panels under the header.

        Args:
            header: Header bar from `create_header`
            panels: Feature panel per tab name, all kept alive

        Returns:
            Central widget configured with the layout
        """
        central = QWidget(self.window)
        root = QVBoxLayout(central)
        root.addWidget(header)

        self.stack = QStackedWidget()
        for tab, panel in panels.items():
            self._tab_index[tab] = self.stack.addWidget(panel)
        root.addWidget(self.stack, 1)
        return central

    def show_tab(self, tab: str) -> None:
        """Show the panel for `tab` and reflect it in the header buttons."""
        if self.stack is not None and tab in self._tab_index:
            self.stack.setCurrentIndex(self._tab_index[tab])
        btn = self.tab_buttons.get(tab)
        if btn is not None:
            btn.setChecked(True)

    def set_theme_label(self, is_dark: bool) -> None:
        if self.theme_button is not None:
            self.theme_button.setText("Light Mode" if is_dark else "Dark Mode")

    def setup_initial_window_size(self) -> None:
        """Setup initial window size based on screen dimensions."""
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        rect = screen.availableGeometry()
        width = int(rect.width() * self.WINDOW_SIZE_RATIO)
        height = int(rect.height() * self.WINDOW_SIZE_RATIO)
        self.window.resize(width, height)
