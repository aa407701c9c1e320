"""Unit tests for ShellVM tab and theme state."""

import pytest

from app.viewmodels.shell_vm import TAB_MAP, TAB_NOTES, ShellVM


class TestTabs:
    """Test cases for tab selection."""

    def test_default_tab_is_map(self):
        assert ShellVM().active_tab == TAB_MAP

    def test_select_tab_notifies(self):
        shell = ShellVM()
        seen = []
        shell.on_tab_changed(seen.append)

        shell.select_tab(TAB_NOTES)
        shell.select_tab(TAB_NOTES)

        assert shell.active_tab == TAB_NOTES
        assert seen == [TAB_NOTES]

    def test_unknown_tab_rejected(self):
        shell = ShellVM()

        with pytest.raises(ValueError):
            shell.select_tab("settings")
        assert shell.active_tab == TAB_MAP

    def test_unknown_initial_tab_rejected(self):
        with pytest.raises(ValueError):
            ShellVM(active_tab="calendar")


class TestTheme:
    """Test cases for system preference and in-app override."""

    def test_follows_system_without_override(self):
        assert ShellVM(system_dark=True).is_dark is True
        assert ShellVM(system_dark=False).is_dark is False

    def test_toggle_sets_override(self):
        shell = ShellVM(system_dark=False)
        seen = []
        shell.on_theme_changed(seen.append)

        shell.toggle_theme()

        assert shell.is_dark is True
        assert shell.dark_override is True
        assert seen == [True]

        shell.toggle_theme()

        assert shell.is_dark is False
        assert seen == [True, False]

    def test_override_shadows_system_changes(self):
        shell = ShellVM(system_dark=False, dark_override=False)
        seen = []
        shell.on_theme_changed(seen.append)

        shell.set_system_dark(True)

        assert shell.is_dark is False
        assert shell.system_dark is True
        assert seen == []

    def test_system_change_without_override_notifies(self):
        shell = ShellVM(system_dark=False)
        seen = []
        shell.on_theme_changed(seen.append)

        shell.set_system_dark(True)
        shell.set_system_dark(True)

        assert shell.is_dark is True
        assert seen == [True]
