#!/usr/bin/env python3
"""
Tests for PixelArtCanvas and PixelArtEditorWindow
Run against a real controller on the offscreen platform
"""

import pytest
from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QColor, QMouseEvent
from PyQt6.QtWidgets import QMessageBox

from pixel_art_editor.core.pixel_art_canvas import PixelArtCanvas
from pixel_art_editor.core.pixel_art_constants import (
    BACKGROUND_COLOR,
    CANVAS_PREFERRED_SIZE,
    GRID_SIZES,
    MAIN_WINDOW_TITLE,
)
from pixel_art_editor.core.pixel_art_controller import PixelArtController
from pixel_art_editor.core.pixel_art_window import PixelArtEditorWindow

RED = (255, 0, 0, 255)


def mouse_event(event_type, x, y, button, buttons):
    return QMouseEvent(event_type, QPointF(x, y), button, buttons, Qt.KeyboardModifier.NoModifier)


@pytest.fixture
def controller(qapp, settings):
    return PixelArtController(settings)


@pytest.fixture
def canvas(qtbot, controller):
    canvas = PixelArtCanvas(controller)
    qtbot.addWidget(canvas)
    canvas.resize(CANVAS_PREFERRED_SIZE, CANVAS_PREFERRED_SIZE)
    return canvas


class TestPixelArtCanvas:
    """Test canvas rendering and mouse mapping"""

    def test_size_hint(self, canvas):
        hint = canvas.sizeHint()
        assert (hint.width(), hint.height()) == (CANVAS_PREFERRED_SIZE, CANVAS_PREFERRED_SIZE)

    def test_cell_size(self, canvas, controller):
        assert controller.grid_size == 32
        assert canvas.cell_size() == 16
        assert canvas.cell_at(40, 17) == (2, 1)

    def test_left_drag_paints(self, canvas, controller):
        controller.set_color(RED)

        canvas.mousePressEvent(
            mouse_event(
                QMouseEvent.Type.MouseButtonPress, 8, 8,
                Qt.MouseButton.LeftButton, Qt.MouseButton.LeftButton,
            )
        )
        canvas.mouseMoveEvent(
            mouse_event(
                QMouseEvent.Type.MouseMove, 24, 8,
                Qt.MouseButton.NoButton, Qt.MouseButton.LeftButton,
            )
        )
        canvas.mouseReleaseEvent(
            mouse_event(
                QMouseEvent.Type.MouseButtonRelease, 24, 8,
                Qt.MouseButton.LeftButton, Qt.MouseButton.NoButton,
            )
        )

        assert controller.core.get_cell(0, 0) == RED
        assert controller.core.get_cell(1, 0) == RED
        assert controller.core.undo_depth == 1
        assert not controller.gesture_manager.is_drawing

    def test_right_button_erases(self, canvas, controller):
        controller.core.grid.fill(RED)

        canvas.mousePressEvent(
            mouse_event(
                QMouseEvent.Type.MouseButtonPress, 40, 40,
                Qt.MouseButton.RightButton, Qt.MouseButton.RightButton,
            )
        )

        assert controller.core.get_cell(2, 2) == BACKGROUND_COLOR
        assert controller.core.get_cell(0, 0) == RED

    def test_press_outside_grid_is_ignored(self, canvas, controller):
        canvas.setMinimumSize(0, 0)
        canvas.resize(20, 20)  # 20 // 32 == 0: no cell size

        canvas.mousePressEvent(
            mouse_event(
                QMouseEvent.Type.MouseButtonPress, 5, 5,
                Qt.MouseButton.LeftButton, Qt.MouseButton.LeftButton,
            )
        )

        assert controller.core.undo_depth == 0

    def test_renders_grid(self, canvas, controller):
        controller.set_color(RED)
        canvas.grab()  # Builds the cached image
        controller.handle_pointer_press(1, 1)
        controller.handle_pointer_release()

        image = canvas.grab().toImage()

        assert image.pixelColor(24, 24) == QColor(*RED)
        assert image.pixelColor(40, 40) == QColor(*BACKGROUND_COLOR)

    def test_renders_after_image_change(self, canvas, controller):
        controller.core.grid.fill(RED)
        controller.imageChanged.emit()

        image = canvas.grab().toImage()

        assert image.pixelColor(100, 100) == QColor(*RED)


class TestPixelArtEditorWindow:
    """Test main window wiring"""

    @pytest.fixture
    def window(self, qtbot, settings):
        window = PixelArtEditorWindow(settings)
        qtbot.addWidget(window)
        return window

    def test_title_and_toolbar(self, window):
        assert window.windowTitle() == MAIN_WINDOW_TITLE
        combo = window.grid_size_combo
        assert [combo.itemData(i) for i in range(combo.count())] == list(GRID_SIZES)
        assert combo.currentData() == 32
        assert window.undo_action.shortcut().toString() == "Ctrl+Z"

    def test_grid_size_combo_changes_grid(self, window):
        index = window.grid_size_combo.findData(64)
        window.grid_size_combo.setCurrentIndex(index)

        window._on_grid_size_selected(index)

        assert window.controller.grid_size == 64

    def test_combo_follows_controller(self, window):
        window.controller.set_grid_size(8)

        assert window.grid_size_combo.currentData() == 8

    def test_status_message(self, window):
        window.controller.undo()

        assert window.status_bar.currentMessage() == "Nothing to undo"

    def test_errors_shown_in_message_box(self, window, monkeypatch):
        shown = []
        monkeypatch.setattr(
            QMessageBox, "critical", lambda parent, title, text: shown.append(text)
        )

        window.controller.set_grid_size(3)

        assert len(shown) == 1
        assert shown[0].startswith("Invalid input")

    def test_initial_file_imported(self, qtbot, settings, png_file):
        settings.set_default_grid_size(8)

        window = PixelArtEditorWindow(settings, initial_file=str(png_file))
        qtbot.addWidget(window)
        qtbot.waitUntil(lambda: window.controller.core.get_cell(0, 0) == RED, timeout=5000)
        window.controller.wait_for_workers()

    def test_geometry_saved_on_close(self, window, settings):
        window.resize(700, 650)
        window.show()

        window.close()

        geometry = settings.get("window_geometry")
        assert (geometry["width"], geometry["height"]) == (700, 650)

    def test_geometry_restored(self, qtbot, settings):
        settings.set("window_geometry", {"x": 10, "y": 20, "width": 720, "height": 660})

        window = PixelArtEditorWindow(settings)
        qtbot.addWidget(window)

        assert (window.width(), window.height()) == (720, 660)

    def test_session_grid_size(self, qtbot, settings):
        window = PixelArtEditorWindow(settings, grid_size=16)
        qtbot.addWidget(window)

        assert window.controller.grid_size == 16
        assert window.grid_size_combo.currentData() == 16
        assert settings.get_default_grid_size() == 32
