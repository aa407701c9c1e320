"""Unit tests for JsonSettings."""

import json
from pathlib import Path

from infrastructure.settings import JsonSettings


def _settings(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return JsonSettings(path)


class TestJsonSettings:
    """Test cases for dotted-key lookup and defaults."""

    def test_dotted_lookup(self, tmp_path):
        settings = _settings(tmp_path, {"location": {"timeout_ms": 2500}})

        assert settings.get("location.timeout_ms") == 2500
        assert settings.get("location.zoom", 15) == 15
        assert settings.get("missing.key") is None

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = JsonSettings(tmp_path / "absent.json")

        assert settings.get("ui.theme", "system") == "system"

    def test_broken_file_uses_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{ not json", encoding="utf-8")

        assert JsonSettings(path).get_int("location.zoom", 15) == 15

    def test_non_object_root(self, tmp_path):
        assert _settings(tmp_path, [1, 2, 3]).get("anything", "x") == "x"

    def test_get_int_bad_value(self, tmp_path):
        settings = _settings(tmp_path, {"notes": {"grid_columns": "three"}})

        assert settings.get_int("notes.grid_columns", 3) == 3

    def test_get_bool(self, tmp_path):
        settings = _settings(tmp_path, {"a": "yes", "b": "off", "c": False})

        assert settings.get_bool("a", False) is True
        assert settings.get_bool("b", True) is False
        assert settings.get_bool("c", True) is False
        assert settings.get_bool("d", True) is True

    def test_get_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MAPNOTES_TEST_DIR", str(tmp_path))
        settings = _settings(
            tmp_path, {"storage": {"path": "$MAPNOTES_TEST_DIR/store.json"}, "logging": {"dir": " "}}
        )

        assert settings.get_path("storage.path", Path("x")) == tmp_path / "store.json"
        assert settings.get_path("logging.dir", Path("default")) == Path("default")
