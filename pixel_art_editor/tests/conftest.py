"""
Qt configuration for pytest in headless environments.
Provides shared fixtures for pixel art editor tests.
"""

import os
import sys

import pytest

# Detect if we're in a headless environment
IS_HEADLESS = (
    not os.environ.get("DISPLAY")
    or os.environ.get("QT_QPA_PLATFORM") == "offscreen"
    or os.environ.get("CI")
    or (sys.platform == "linux" and "microsoft" in os.uname().release.lower())
)

if IS_HEADLESS:
    # Must be set before the QApplication is created
    os.environ["QT_QPA_PLATFORM"] = "offscreen"
    os.environ.setdefault("QT_LOGGING_RULES", "*.debug=false")


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "gui: mark test as requiring a real display (skip in headless)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip display-only tests when headless"""
    if IS_HEADLESS:
        skip_gui = pytest.mark.skip(reason="GUI tests skipped in headless environment")
        for item in items:
            if "gui" in item.keywords:
                item.add_marker(skip_gui)


@pytest.fixture
def settings(tmp_path):
    """SettingsManager writing into a temporary directory"""
    from pixel_art_editor.core.pixel_art_settings import SettingsManager

    return SettingsManager(settings_dir=tmp_path / "settings")


@pytest.fixture
def core():
    """Fresh 8x8 editing core"""
    from pixel_art_editor.core.pixel_art_editor_core import RasterEditorCore

    return RasterEditorCore(grid_size=8)


@pytest.fixture
def png_file(tmp_path):
    """A 4x4 PNG with a red top-left pixel on white"""
    from PIL import Image

    image = Image.new("RGBA", (4, 4), (255, 255, 255, 255))
    image.putpixel((0, 0), (255, 0, 0, 255))
    path = tmp_path / "source.png"
    image.save(path)
    return path
