from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.location_vm import INITIAL_ZOOM, LOCATED_ZOOM, LocationVM
from app.viewmodels.notes_vm import NotesVM
from app.viewmodels.shell_vm import ShellVM
from app.views.main_window import MainWindow
from app.views.theme import apply_theme, system_prefers_dark
from app.views.widgets.map_view import LeafletMapView
from core.services.interfaces import PositionOptions
from core.services.notes_service import NotesService
from core.services.theme_service import override_from_setting
from infrastructure.image_service import ImageService
from infrastructure.logging import get_log_directory, init_logging
from infrastructure.note_repository import NOTES_KEY, KeyValueNoteRepository
from infrastructure.position_provider import QtPositionProvider
from infrastructure.settings import JsonSettings, get_app_data_dir
from infrastructure.storage import JsonFileStore


BASE_DIR = Path(__file__).parent


def _position_options(settings: JsonSettings) -> PositionOptions:
    return PositionOptions(
        enable_high_accuracy=settings.get_bool("location.high_accuracy", True),
        timeout_ms=settings.get_int("location.timeout_ms", 5000),
        maximum_age_ms=settings.get_int("location.maximum_age_ms", 0),
    )


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    log_dir = str(settings.get_path("logging.dir", Path(get_log_directory())))
    init_logging(log_dir, level=str(settings.get("logging.level", "INFO")))
    logger.info("Starting MapNotes (settings: {})", settings.path)

    app = QApplication(sys.argv)

    store_path = settings.get_path("storage.path", get_app_data_dir() / "storage.json")
    store = JsonFileStore(store_path)
    repo = KeyValueNoteRepository(store, key=str(settings.get("storage.notes_key", NOTES_KEY)))
    img = ImageService(settings)

    notes_service = NotesService(repo)
    notes_vm = NotesVM(notes_service, img)
    notes_vm.load()
    logger.info("Store: {} | notes={}", store_path, notes_service.count)

    shell_vm = ShellVM(
        system_dark=system_prefers_dark(),
        dark_override=override_from_setting(settings.get("ui.theme", "system")),
    )
    apply_theme(app, shell_vm.is_dark)

    map_view = LeafletMapView()
    location_vm = LocationVM(
        QtPositionProvider(app),
        map_view,
        options=_position_options(settings),
        is_dark=shell_vm.is_dark,
        located_zoom=settings.get_int("location.zoom", LOCATED_ZOOM),
        initial_zoom=settings.get_int("location.initial_zoom", INITIAL_ZOOM),
    )

    win = MainWindow(
        shell_vm=shell_vm,
        notes_vm=notes_vm,
        location_vm=location_vm,
        map_view=map_view,
        image_service=img,
        settings=settings,
        log_dir=log_dir,
    )
    win.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
