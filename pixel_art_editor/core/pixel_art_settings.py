"""
Settings manager for the pixel art editor
Handles saving and loading user preferences
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from .pixel_art_constants import (
    DEFAULT_DRAW_COLOR,
    DEFAULT_GRID_SIZE,
    GRID_SIZES,
    MAX_RECENT_FILES,
)
from .pixel_art_exceptions import ValidationError
from .pixel_art_utils import RGBA, debug_log, normalize_rgba, rgba_to_hex

APP_NAME = "pixel_art_editor"


class SettingsManager:
    """Manages application settings with persistence"""

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        self.app_name = app_name
        self.settings_file = self._get_settings_path(settings_dir)
        self.settings = self._load_settings()

    def _get_settings_path(self, settings_dir: Optional[Path]) -> Path:
        """Get the appropriate settings directory for the platform"""
        if settings_dir is None:
            if os.name == "nt":  # Windows
                base = Path(os.environ.get("APPDATA", os.path.expanduser("~")))
                settings_dir = base / self.app_name
            else:  # Linux/Mac
                settings_dir = Path(os.path.expanduser("~")) / f".{self.app_name}"

        settings_dir = Path(settings_dir)
        settings_dir.mkdir(parents=True, exist_ok=True)
        return settings_dir / "settings.json"

    def _load_settings(self) -> dict[str, Any]:
        """Load settings from file, merged over the defaults"""
        settings = self._get_default_settings()
        if self.settings_file.exists():
            try:
                with open(self.settings_file) as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                # If file is corrupted, start fresh
                debug_log("SETTINGS", f"Ignoring unreadable settings file: {e}", "WARNING")
                return settings
            if isinstance(loaded, dict):
                settings.update(loaded)
        return settings

    def _get_default_settings(self) -> dict[str, Any]:
        """Get default settings"""
        return {
            "default_grid_size": DEFAULT_GRID_SIZE,
            "last_color": rgba_to_hex(DEFAULT_DRAW_COLOR),
            "last_export_dir": "",
            "last_import_dir": "",
            "export_resolution": None,
            "window_geometry": None,
            "recent_files": {"png": []},
            "preferences": {
                "max_recent_files": MAX_RECENT_FILES,
            },
        }

    def save_settings(self) -> None:
        """Save current settings to file"""
        try:
            with open(self.settings_file, "w") as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            debug_log("SETTINGS", f"Could not save settings: {e}", "WARNING")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value (dotted keys reach into nested dicts)"""
        value = self.settings
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a setting value and persist"""
        keys = key.split(".")
        target = self.settings
        for k in keys[:-1]:
            if not isinstance(target.get(k), dict):
                target[k] = {}
            target = target[k]
        target[keys[-1]] = value
        self.save_settings()

    # Typed accessors
    def get_default_grid_size(self) -> int:
        size = self.get("default_grid_size", DEFAULT_GRID_SIZE)
        if size not in GRID_SIZES:
            debug_log("SETTINGS", f"Unsupported grid size {size!r}, using {DEFAULT_GRID_SIZE}", "WARNING")
            return DEFAULT_GRID_SIZE
        return size

    def set_default_grid_size(self, size: int) -> None:
        if size not in GRID_SIZES:
            raise ValidationError(f"Grid size must be one of {GRID_SIZES}, got {size}")
        self.set("default_grid_size", size)

    def get_last_color(self) -> RGBA:
        try:
            return normalize_rgba(self.get("last_color", ""))
        except ValidationError:
            return DEFAULT_DRAW_COLOR

    def set_last_color(self, color: RGBA) -> None:
        self.set("last_color", rgba_to_hex(color))

    def get_export_resolution(self) -> Optional[tuple[int, int]]:
        """Configured export size, or None to use the screen size"""
        value = self.get("export_resolution")
        if not isinstance(value, dict):
            return None
        try:
            width, height = int(value["width"]), int(value["height"])
        except (KeyError, TypeError, ValueError):
            return None
        if width <= 0 or height <= 0:
            return None
        return (width, height)

    def add_recent_file(self, file_path: str, file_type: str = "png") -> None:
        """Add a file to the front of the recent files list"""
        file_path = str(file_path)
        recent_files = self.settings.setdefault("recent_files", {})
        recent_list = [p for p in recent_files.get(file_type, []) if p != file_path]
        recent_list.insert(0, file_path)

        max_recent = self.get("preferences.max_recent_files", MAX_RECENT_FILES)
        recent_files[file_type] = recent_list[:max_recent]
        self.save_settings()

    def get_recent_files(self, file_type: str = "png") -> list[str]:
        return list(self.settings.get("recent_files", {}).get(file_type, []))

    def clear_recent_files(self, file_type: str = "png") -> None:
        self.settings.setdefault("recent_files", {})[file_type] = []
        self.save_settings()

    def reset_settings(self) -> None:
        """Reset all settings to defaults"""
        self.settings = self._get_default_settings()
        self.save_settings()
