#!/usr/bin/env python3
"""
Pixel Art Editor main window
Toolbar, canvas and status bar wired to the controller
"""

# Standard library imports
import os
import sys
from typing import Optional

# Third-party imports
from PyQt6.QtGui import QAction, QColor, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QColorDialog,
    QComboBox,
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QToolBar,
)

from .pixel_art_canvas import PixelArtCanvas
from .pixel_art_constants import GRID_SIZES, MAIN_WINDOW_TITLE, PNG_FILE_FILTER
from .pixel_art_controller import PixelArtController
from .pixel_art_logging import setup_logging
from .pixel_art_settings import SettingsManager
from .pixel_art_utils import debug_log


class PixelArtEditorWindow(QMainWindow):
    """Main window for the pixel art editor"""

    def __init__(
        self,
        settings: Optional[SettingsManager] = None,
        initial_file=None,
        grid_size: Optional[int] = None,
    ):
        super().__init__()

        self.initial_file = initial_file

        self.controller = PixelArtController(settings, self, grid_size)
        self._connect_controller_signals()

        self.init_ui()
        self.handle_startup()

    def _connect_controller_signals(self):
        """Connect controller signals to UI updates"""
        self.controller.gridSizeChanged.connect(self._on_grid_size_changed)
        self.controller.colorChanged.connect(self._on_color_changed)
        self.controller.statusMessage.connect(self._show_status_message)
        self.controller.error.connect(self._show_error)

    def init_ui(self):
        """Initialize the user interface"""
        self.setWindowTitle(MAIN_WINDOW_TITLE)

        self.canvas = PixelArtCanvas(self.controller, self)
        self.setCentralWidget(self.canvas)

        self.create_toolbar()

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self.color_label = QLabel()
        self.status_bar.addPermanentWidget(self.color_label)
        self._on_color_changed(self.controller.current_color)

        self._restore_geometry()

    def create_toolbar(self):
        """Create the toolbar"""
        toolbar = QToolBar("Tools")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        toolbar.addAction("Choose Color", self.choose_color)
        toolbar.addSeparator()

        toolbar.addWidget(QLabel("Grid Size: "))
        self.grid_size_combo = QComboBox()
        for size in GRID_SIZES:
            self.grid_size_combo.addItem(f"{size}x{size}", size)
        self.grid_size_combo.setCurrentIndex(GRID_SIZES.index(self.controller.grid_size))
        self.grid_size_combo.activated.connect(self._on_grid_size_selected)
        toolbar.addWidget(self.grid_size_combo)
        toolbar.addSeparator()

        self.undo_action = QAction("Undo", self)
        self.undo_action.setShortcut(QKeySequence("Ctrl+Z"))
        self.undo_action.triggered.connect(self.undo)
        toolbar.addAction(self.undo_action)

        toolbar.addAction("Clear", self.clear_canvas)
        toolbar.addSeparator()
        toolbar.addAction("Save…", self.save_file)
        toolbar.addAction("Load…", self.load_file)

    # Toolbar actions
    def choose_color(self):
        r, g, b, a = self.controller.current_color
        color = QColorDialog.getColor(
            QColor(r, g, b, a),
            self,
            "Choose Color",
            QColorDialog.ColorDialogOption.ShowAlphaChannel,
        )
        if color.isValid():
            self.controller.set_color(
                (color.red(), color.green(), color.blue(), color.alpha())
            )

    def _on_grid_size_selected(self, index: int):
        size = self.grid_size_combo.itemData(index)
        if size != self.controller.grid_size:
            self.controller.set_grid_size(size)

    def undo(self):
        self.controller.undo()

    def clear_canvas(self):
        self.controller.clear()

    def save_file(self):
        """Export the grid at screen resolution as PNG"""
        start_dir = self.controller.settings.get("last_export_dir", "")
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save Pixel Art", start_dir, PNG_FILE_FILTER
        )
        if file_path:
            self.controller.export_file(file_path)

    def load_file(self):
        """Import an image, resampled to the current grid size"""
        start_dir = self.controller.settings.get("last_import_dir", "")
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Load Image", start_dir, f"{PNG_FILE_FILTER};;All Files (*)"
        )
        if file_path:
            self.controller.import_file(file_path)

    # Controller signal handlers
    def _on_grid_size_changed(self, size: int):
        index = self.grid_size_combo.findData(size)
        if index >= 0 and index != self.grid_size_combo.currentIndex():
            self.grid_size_combo.setCurrentIndex(index)

    def _on_color_changed(self, color):
        r, g, b, a = color
        self.color_label.setText(f"Color: RGBA({r}, {g}, {b}, {a})")

    def _show_status_message(self, message: str, timeout: int):
        """Show status bar message"""
        self.status_bar.showMessage(message, timeout)

    def _show_error(self, message: str):
        """Show error dialog"""
        QMessageBox.critical(self, "Error", message)

    # Startup and shutdown
    def handle_startup(self):
        """Load the initial file passed on the command line, if any"""
        if self.initial_file:
            debug_log("EDITOR", f"Loading initial file: {self.initial_file}")
            self.controller.import_file(self.initial_file)

    def _restore_geometry(self):
        geometry = self.controller.settings.get("window_geometry")
        if geometry and isinstance(geometry, dict):
            self.move(geometry.get("x", 100), geometry.get("y", 100))
            self.resize(geometry.get("width", 600), geometry.get("height", 640))

    def closeEvent(self, event):
        self.controller.shutdown()
        self.controller.settings.set(
            "window_geometry",
            {
                "x": self.x(),
                "y": self.y(),
                "width": self.width(),
                "height": self.height(),
            },
        )
        super().closeEvent(event)


def main(argv=None):
    """Command-line interface"""
    import argparse

    parser = argparse.ArgumentParser(description="Pixel Art Editor")
    parser.add_argument(
        "--grid-size",
        type=int,
        choices=GRID_SIZES,
        help="Grid size for this session (the saved default is unchanged)",
    )
    parser.add_argument("image", nargs="?", help="Image to load into the grid")
    args = parser.parse_args(argv)

    setup_logging()

    app = QApplication(sys.argv[:1])
    app.setApplicationName(MAIN_WINDOW_TITLE)

    initial_file = None
    if args.image:
        if os.path.exists(args.image):
            initial_file = args.image
        else:
            debug_log("MAIN", f"File not found: {args.image}", "ERROR")

    editor = PixelArtEditorWindow(SettingsManager(), initial_file, args.grid_size)
    editor.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
