#!/usr/bin/env python3
"""
Tests for the JSON settings manager
"""

import json

import pytest

from pixel_art_editor.core.pixel_art_constants import (
    DEFAULT_DRAW_COLOR,
    DEFAULT_GRID_SIZE,
    MAX_RECENT_FILES,
)
from pixel_art_editor.core.pixel_art_exceptions import ValidationError
from pixel_art_editor.core.pixel_art_settings import SettingsManager


class TestSettingsManager:
    """Test settings persistence and typed accessors"""

    def test_defaults(self, settings):
        assert settings.get_default_grid_size() == DEFAULT_GRID_SIZE
        assert settings.get_last_color() == DEFAULT_DRAW_COLOR
        assert settings.get_export_resolution() is None
        assert settings.get_recent_files() == []
        assert settings.get("preferences.max_recent_files") == MAX_RECENT_FILES

    def test_settings_file_location(self, tmp_path):
        manager = SettingsManager(settings_dir=tmp_path / "cfg")

        assert manager.settings_file == tmp_path / "cfg" / "settings.json"
        assert manager.settings_file.parent.is_dir()

    def test_persisted_across_instances(self, tmp_path):
        first = SettingsManager(settings_dir=tmp_path)
        first.set_default_grid_size(64)
        first.set_last_color((1, 2, 3, 4))

        second = SettingsManager(settings_dir=tmp_path)

        assert second.get_default_grid_size() == 64
        assert second.get_last_color() == (1, 2, 3, 4)

    def test_color_stored_as_hex(self, settings):
        settings.set_last_color((255, 0, 128, 255))

        data = json.loads(settings.settings_file.read_text())
        assert data["last_color"] == "#ff0080ff"

    def test_invalid_grid_size_rejected(self, settings):
        with pytest.raises(ValidationError):
            settings.set_default_grid_size(48)

    def test_unsupported_stored_grid_size_falls_back(self, tmp_path):
        (tmp_path / "settings.json").write_text(json.dumps({"default_grid_size": 7}))

        manager = SettingsManager(settings_dir=tmp_path)

        assert manager.get_default_grid_size() == DEFAULT_GRID_SIZE

    def test_corrupted_file_uses_defaults(self, tmp_path):
        (tmp_path / "settings.json").write_text("{not json")

        manager = SettingsManager(settings_dir=tmp_path)

        assert manager.get_default_grid_size() == DEFAULT_GRID_SIZE
        assert manager.get_recent_files() == []

    def test_partial_file_merged_with_defaults(self, tmp_path):
        (tmp_path / "settings.json").write_text(json.dumps({"last_import_dir": "/x"}))

        manager = SettingsManager(settings_dir=tmp_path)

        assert manager.get("last_import_dir") == "/x"
        assert manager.get("default_grid_size") == DEFAULT_GRID_SIZE

    def test_bad_stored_color_falls_back(self, settings):
        settings.set("last_color", "#zzz")

        assert settings.get_last_color() == DEFAULT_DRAW_COLOR

    def test_dotted_get_set(self, settings):
        settings.set("preferences.max_recent_files", 3)
        settings.set("new_section.value", True)

        assert settings.get("preferences.max_recent_files") == 3
        assert settings.get("new_section.value") is True
        assert settings.get("missing.key", "fallback") == "fallback"

    def test_export_resolution(self, settings):
        settings.set("export_resolution", {"width": 800, "height": 600})
        assert settings.get_export_resolution() == (800, 600)

        settings.set("export_resolution", {"width": 0, "height": 600})
        assert settings.get_export_resolution() is None

        settings.set("export_resolution", {"width": "wide"})
        assert settings.get_export_resolution() is None

    def test_recent_files(self, settings):
        settings.set("preferences.max_recent_files", 2)

        settings.add_recent_file("/a.png")
        settings.add_recent_file("/b.png")
        settings.add_recent_file("/a.png")
        settings.add_recent_file("/c.png")

        assert settings.get_recent_files() == ["/c.png", "/a.png"]

        settings.clear_recent_files()
        assert settings.get_recent_files() == []

    def test_reset_settings(self, settings):
        settings.set_default_grid_size(8)
        settings.add_recent_file("/a.png")

        settings.reset_settings()

        assert settings.get_default_grid_size() == DEFAULT_GRID_SIZE
        assert settings.get_recent_files() == []
