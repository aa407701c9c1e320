"""MenuController: Manages menu creation and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar


class MenuController:
    """Manages main window menu creation and action connections.

    This class encapsulates all menu-related functionality including:
    - Menu structure creation
    - Action creation and organization
    - Action-to-handler connection management
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Create all menus and return action references.

        Returns:
            Dictionary mapping action names to QAction instances
        """
        menubar = QMenuBar(self.window)

        # File Menu
        file_menu = menubar.addMenu("File")
        self.actions["exit"] = file_menu.addAction("Exit")
        self.actions["exit"].setShortcut(QKeySequence.Quit)

        # View Menu
        view_menu = menubar.addMenu("View")
        self.actions["show_map"] = view_menu.addAction("Location Map")
        self.actions["show_map"].setShortcut(QKeySequence("Ctrl+1"))
        self.actions["show_notes"] = view_menu.addAction("Notes")
        self.actions["show_notes"].setShortcut(QKeySequence("Ctrl+2"))
        view_menu.addSeparator()
        self.actions["toggle_theme"] = view_menu.addAction("Toggle Theme")

        # Notes Menu
        notes_menu = menubar.addMenu("Notes")
        self.actions["add_note"] = notes_menu.addAction("Add Note")
        self.actions["add_note"].setShortcut(QKeySequence.New)

        # Location Menu
        location_menu = menubar.addMenu("Location")
        self.actions["refresh_location"] = location_menu.addAction("Refresh Location")
        self.actions["refresh_location"].setShortcut(QKeySequence.Refresh)

        # Log Menu
        log_menu = menubar.addMenu("Log")
        self.actions["open_latest_log"] = log_menu.addAction("Open Latest Log")
        log_menu.addSeparator()
        self.actions["open_log_directory"] = log_menu.addAction("Open Log Directory")

        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect menu actions to their handler methods.

        Args:
            handlers: Dictionary mapping action names to handler callables
        """
        for name, action in self.actions.items():
            handler = handlers.get(name)
            if handler is not None:
                action.triggered.connect(handler)
            elif name == "exit":
                action.triggered.connect(self.window.close)

    def enable_action(self, name: str, enabled: bool = True) -> None:
        """Enable or disable a specific action.

        Args:
            name: Action name
            enabled: Whether to enable the action
        """
        action = self.actions.get(name)
        if action:
            action.setEnabled(enabled)
