"""MainWindow: the tab-switching shell hosting the map and notes panels."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from PySide6.QtWidgets import QApplication, QMainWindow
from loguru import logger

from app.viewmodels.location_vm import LocationVM
from app.viewmodels.notes_vm import NotesVM
from app.viewmodels.shell_vm import TAB_MAP, TAB_NOTES, ShellVM
from app.views.components.menu_controller import MenuController
from app.views.constants import (
    DEFAULT_GRID_COLUMNS,
    DEFAULT_THUMB_SIZE,
    STATUS_TIMEOUT_MS,
    WINDOW_TITLE,
)
from app.views.layout.layout_manager import LayoutManager
from app.views.location_panel import LocationPanel
from app.views.notes_panel import NotesPanel
from app.views.theme import SystemThemeWatcher, apply_theme
from infrastructure.image_service import ImageService
from infrastructure.logging import open_latest_log, open_log_directory

if TYPE_CHECKING:
    from app.views.widgets.map_view import LeafletMapView


class MainWindow(QMainWindow):
    """Main application window.

    Both feature panels stay alive inside a stacked widget; the shell
    view-model decides which one is visible and which theme applies.
    """

    def __init__(
        self,
        shell_vm: ShellVM,
        notes_vm: NotesVM,
        location_vm: LocationVM,
        map_view: LeafletMapView,
        image_service: ImageService,
        settings: Any | None = None,
        log_dir: str | None = None,
    ) -> None:
        """Initialize MainWindow with all view-models and services.

        Args:
            shell_vm: Active tab and theme state
            notes_vm: Notes collection and editing form
            location_vm: Location acquisition and marker sync
            map_view: Map widget already bound to `location_vm` as renderer
            image_service: Image service for note attachments
            settings: Settings instance for configuration
            log_dir: Log directory used by the Log menu
        """
        super().__init__()
        self._shell = shell_vm
        self._notes = notes_vm
        self._location = location_vm
        self._img = image_service
        self._settings = settings
        self._log_dir = log_dir
        self._mounted = False

        self._columns = DEFAULT_GRID_COLUMNS
        self._thumb_size = DEFAULT_THUMB_SIZE
        if self._settings is not None:
            self._columns = self._settings.get_int("notes.grid_columns", DEFAULT_GRID_COLUMNS)
            self._thumb_size = self._settings.get_int("notes.thumbnail_size", DEFAULT_THUMB_SIZE)

        self.status_reporter = StatusReporterImpl(self)
        self._notes.status_reporter = self.status_reporter

        self.menu_controller = MenuController(self)
        self.layout_manager = LayoutManager(self)
        self.theme_watcher = SystemThemeWatcher(self)

        self.location_panel = LocationPanel(map_view)
        self.notes_panel = NotesPanel(
            self._notes, self._img, columns=self._columns, thumb_size=self._thumb_size
        )

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self) -> None:
        """Setup the main UI components and layout."""
        self.setWindowTitle(WINDOW_TITLE)

        header = self.layout_manager.create_header()
        central = self.layout_manager.setup_main_layout(
            header, {TAB_MAP: self.location_panel, TAB_NOTES: self.notes_panel}
        )
        self.setCentralWidget(central)
        self.layout_manager.setup_initial_window_size()
        self.layout_manager.show_tab(self._shell.active_tab)
        self.layout_manager.set_theme_label(self._shell.is_dark)

        self.menu_controller.setup_menus()
        self.location_panel.bind(self._location)
        self._location.on_changed = self._on_location_changed
        self.statusBar().showMessage("Ready", STATUS_TIMEOUT_MS)

    def _connect_signals(self) -> None:
        """Connect all signal/slot relationships."""
        handlers = {
            "show_map": lambda: self._shell.select_tab(TAB_MAP),
            "show_notes": lambda: self._shell.select_tab(TAB_NOTES),
            "toggle_theme": self._shell.toggle_theme,
            "add_note": self.on_add_note,
            "refresh_location": self._location.refresh,
            "open_latest_log": self.on_open_latest_log,
            "open_log_directory": self.on_open_log_directory,
            "exit": self.close,
        }
        self.menu_controller.connect_actions(handlers)

        for tab, btn in self.layout_manager.tab_buttons.items():
            btn.clicked.connect(lambda _checked=False, t=tab: self._shell.select_tab(t))
        if self.layout_manager.theme_button is not None:
            self.layout_manager.theme_button.clicked.connect(self._shell.toggle_theme)

        self._shell.on_tab_changed(self.layout_manager.show_tab)
        self._shell.on_theme_changed(self._on_theme_changed)
        self.theme_watcher.systemDarkChanged.connect(self._shell.set_system_dark)
        self.location_panel.map_view.loadFailed.connect(self.location_panel.show_map_error)

    # Handlers

    def on_add_note(self) -> None:
        self._shell.select_tab(TAB_NOTES)
        self.notes_panel.add_note()

    def on_open_latest_log(self) -> None:
        if not open_latest_log(self._log_dir):
            self.status_reporter.show_status("No log file found")

    def on_open_log_directory(self) -> None:
        if not open_log_directory(self._log_dir):
            self.status_reporter.show_status("Could not open log directory")

    def _on_location_changed(self) -> None:
        self.location_panel.render()
        self.menu_controller.enable_action("refresh_location", self._location.can_refresh)

    def _on_theme_changed(self, is_dark: bool) -> None:
        app = QApplication.instance()
        if app is not None:
            apply_theme(app, is_dark)
        self.layout_manager.set_theme_label(is_dark)
        self._location.set_dark(is_dark)

    # Lifecycle

    def showEvent(self, event) -> None:
        """Mount the location module the first time the window is shown."""
        super().showEvent(event)
        if not self._mounted:
            self._mounted = True
            self._location.mount()

    def closeEvent(self, event) -> None:
        """Tear the map down before the window goes away."""
        try:
            self._location.unmount()
        except RuntimeError as ex:
            logger.error("Map teardown failed: {}", ex)
        self._mounted = False
        event.accept()


class StatusReporterImpl:
    """Implementation of StatusReporter protocol."""

    def __init__(self, main_window: QMainWindow):
        self.window = main_window

    def show_status(self, message: str, timeout: int = STATUS_TIMEOUT_MS) -> None:
        """Show status message in status bar."""
        self.window.statusBar().showMessage(message, timeout)
