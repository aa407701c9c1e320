"""Application palette switching and OS color-scheme tracking."""

from __future__ import annotations

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtGui import QColor, QGuiApplication, QPalette
from PySide6.QtWidgets import QApplication
from loguru import logger


def system_prefers_dark() -> bool:
    """Return True when the OS color scheme is dark."""
    hints = QGuiApplication.styleHints()
    return hints.colorScheme() == Qt.ColorScheme.Dark


def _dark_palette() -> QPalette:
    pal = QPalette()
    base = QColor(17, 24, 39)
    surface = QColor(31, 41, 55)
    text = QColor(243, 244, 246)
    pal.setColor(QPalette.Window, base)
    pal.setColor(QPalette.WindowText, text)
    pal.setColor(QPalette.Base, surface)
    pal.setColor(QPalette.AlternateBase, base)
    pal.setColor(QPalette.ToolTipBase, surface)
    pal.setColor(QPalette.ToolTipText, text)
    pal.setColor(QPalette.Text, text)
    pal.setColor(QPalette.Button, surface)
    pal.setColor(QPalette.ButtonText, text)
    pal.setColor(QPalette.Highlight, QColor(59, 130, 246))
    pal.setColor(QPalette.HighlightedText, QColor(255, 255, 255))
    pal.setColor(QPalette.PlaceholderText, QColor(156, 163, 175))
    pal.setColor(QPalette.Disabled, QPalette.ButtonText, QColor(107, 114, 128))
    pal.setColor(QPalette.Disabled, QPalette.Text, QColor(107, 114, 128))
    return pal


def apply_theme(app: QApplication, dark: bool) -> None:
    """Apply the light or dark palette to the whole application."""
    app.setStyle("Fusion")
    if dark:
        app.setPalette(_dark_palette())
    else:
        app.setPalette(app.style().standardPalette())
    logger.debug("Applied {} palette", "dark" if dark else "light")


class SystemThemeWatcher(QObject):
    """Emits `systemDarkChanged(bool)` whenever the OS color scheme flips."""

    systemDarkChanged = Signal(bool)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        QGuiApplication.styleHints().colorSchemeChanged.connect(self._on_scheme_changed)

    def _on_scheme_changed(self, scheme: Qt.ColorScheme) -> None:
        self.systemDarkChanged.emit(scheme == Qt.ColorScheme.Dark)
