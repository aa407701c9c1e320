"""Widget tests for the main window's tab, theme and map wiring."""

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget
import pytest

from app.viewmodels.location_vm import LocationVM
from app.viewmodels.notes_vm import NotesVM
from app.viewmodels.shell_vm import TAB_MAP, TAB_NOTES, ShellVM
from app.views.main_window import MainWindow
from app.views.theme import apply_theme
from core.services.theme_service import DARK_TILES, LIGHT_TILES
from infrastructure.image_service import ImageService


class MapWidgetStub(QWidget):
    """Stands in for the web map widget inside the location panel."""

    loadFailed = Signal(str)


@pytest.fixture
def shell():
    return ShellVM(system_dark=False)


@pytest.fixture
def location_vm(provider, renderer):
    return LocationVM(provider, renderer)


@pytest.fixture
def window(qapp, shell, location_vm, notes_service, encoder):
    win = MainWindow(
        shell_vm=shell,
        notes_vm=NotesVM(notes_service, encoder),
        location_vm=location_vm,
        map_view=MapWidgetStub(),
        image_service=ImageService(),
    )
    yield win
    apply_theme(qapp, False)


class TestThemeWiring:
    """Test cases for theme changes reaching the map."""

    def test_theme_button_swaps_tiles(self, window, location_vm, renderer, provider):
        location_vm.mount()
        provider.succeed(40.0, -3.7)
        assert renderer.tile_source == LIGHT_TILES

        window.layout_manager.theme_button.click()

        assert renderer.tile_source == DARK_TILES
        assert renderer.marker == (40.0, -3.7)
        assert renderer.center == (40.0, -3.7)
        assert window.layout_manager.theme_button.text() == "Light Mode"

    def test_menu_toggle_swaps_back(self, window, location_vm, renderer):
        location_vm.mount()
        action = window.menu_controller.actions["toggle_theme"]

        action.trigger()
        action.trigger()

        assert renderer.tile_source == LIGHT_TILES
        assert location_vm.is_dark is False

    def test_system_change_reaches_map(self, window, location_vm, renderer):
        location_vm.mount()

        window.theme_watcher.systemDarkChanged.emit(True)

        assert renderer.tile_source == DARK_TILES


class TestTabsAndActions:
    def test_tab_buttons_switch_panels(self, window, shell):
        window.layout_manager.tab_buttons[TAB_NOTES].click()

        assert shell.active_tab == TAB_NOTES
        assert window.layout_manager.stack.currentWidget() is window.notes_panel

        window.layout_manager.tab_buttons[TAB_MAP].click()

        assert window.layout_manager.stack.currentWidget() is window.location_panel

    def test_refresh_action_disabled_while_locating(self, window, location_vm, provider):
        action = window.menu_controller.actions["refresh_location"]

        location_vm.mount()

        assert action.isEnabled() is False
        assert window.location_panel.btn_refresh.isEnabled() is False

        provider.succeed(1.0, 2.0)

        assert action.isEnabled() is True
        assert window.location_panel.lat_label.text().endswith("1.000000")

    def test_map_load_failure_is_shown(self, window):
        window.location_panel.map_view.loadFailed.emit("The map could not be loaded.")

        label = window.location_panel.map_error_label
        assert label.text() == "The map could not be loaded."
        assert not label.isHidden()
