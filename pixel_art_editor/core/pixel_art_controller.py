#!/usr/bin/env python3
"""
Controller for the pixel art editor
Handles all editor commands and coordinates between the core, managers and views
"""

# Standard library imports
import os
from pathlib import Path
from typing import Optional

# Third-party imports
import numpy as np
from PIL import Image
from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QGuiApplication

from .pixel_art_constants import (
    FALLBACK_EXPORT_HEIGHT,
    FALLBACK_EXPORT_WIDTH,
    GRID_SIZES,
    SHORT_STATUS_TIMEOUT,
    STATUS_MESSAGE_TIMEOUT,
)
from .pixel_art_editor_core import RasterEditorCore
from .pixel_art_exceptions import (
    DecodeError,
    ValidationError,
    format_error_message,
)
from .pixel_art_managers import FileManager, GestureManager
from .pixel_art_raster import export_geometry
from .pixel_art_settings import SettingsManager
from .pixel_art_utils import RGBA, debug_log
from .pixel_art_workers import FileExportWorker, FileImportWorker


class PixelArtController(QObject):
    """Controller coordinating all pixel art editor operations"""

    # Signals
    imageChanged = pyqtSignal()  # Whole grid must be re-read
    cellChanged = pyqtSignal(int, int)  # x, y of a single repainted cell
    gridSizeChanged = pyqtSignal(int)
    colorChanged = pyqtSignal(object)  # RGBA tuple
    statusMessage = pyqtSignal(str, int)  # message, timeout
    error = pyqtSignal(str)

    def __init__(
        self,
        settings: Optional[SettingsManager] = None,
        parent=None,
        grid_size: Optional[int] = None,
    ):
        super().__init__(parent)

        self.settings = settings if settings is not None else SettingsManager()

        # An explicit grid size applies to this session only
        if grid_size not in GRID_SIZES:
            grid_size = self.settings.get_default_grid_size()
        self.core = RasterEditorCore(grid_size)
        self.core.set_color(self.settings.get_last_color())

        self.gesture_manager = GestureManager(self.core)
        self.file_manager = FileManager()
        self.file_manager.error_callback = self.error.emit

        # Workers
        self.import_worker: Optional[FileImportWorker] = None
        self.export_worker: Optional[FileExportWorker] = None
        self._export_geometry: Optional[tuple[int, int, int]] = None

    # Read access
    @property
    def grid_size(self) -> int:
        return self.core.grid_size

    @property
    def current_color(self) -> RGBA:
        return self.core.current_color

    def get_grid(self) -> np.ndarray:
        return self.core.get_grid()

    def can_undo(self) -> bool:
        return self.core.can_undo

    # Editing commands
    def set_grid_size(self, size: int) -> bool:
        """Switch to a blank grid of an enumerated size"""
        if size not in GRID_SIZES:
            self.error.emit(
                format_error_message(
                    "change grid size",
                    ValidationError(f"Grid size must be one of {GRID_SIZES}, got {size}"),
                )
            )
            return False

        self.gesture_manager.reset()
        self.core.set_grid_size(size)
        self.settings.set_default_grid_size(size)

        self.gridSizeChanged.emit(size)
        self.imageChanged.emit()
        self.statusMessage.emit(f"New {size}x{size} canvas", SHORT_STATUS_TIMEOUT)
        return True

    def set_color(self, color) -> bool:
        try:
            self.core.set_color(color)
        except ValidationError as e:
            self.error.emit(format_error_message("set color", e))
            return False

        self.settings.set_last_color(self.core.current_color)
        self.colorChanged.emit(self.core.current_color)
        return True

    def undo(self) -> None:
        # Undo mid-drag pops the gesture's own snapshot, so the drag ends here
        self.gesture_manager.reset()
        if self.core.undo():
            self.imageChanged.emit()
            self.statusMessage.emit("Undo", SHORT_STATUS_TIMEOUT)
        else:
            self.statusMessage.emit("Nothing to undo", SHORT_STATUS_TIMEOUT)

    def clear(self) -> None:
        self.gesture_manager.reset()
        self.core.clear()
        self.imageChanged.emit()

    # Pointer gestures (cell coordinates)
    def handle_pointer_press(self, x: int, y: int, erase: bool = False) -> None:
        if self.gesture_manager.pointer_down(x, y, erase):
            self.cellChanged.emit(x, y)

    def handle_pointer_move(self, x: int, y: int) -> None:
        if self.gesture_manager.pointer_move(x, y):
            self.cellChanged.emit(x, y)

    def handle_pointer_release(self) -> None:
        self.gesture_manager.pointer_up()

    # Export
    def get_export_size(self) -> tuple[int, int]:
        """Export resolution from settings, else the primary screen size"""
        configured = self.settings.get_export_resolution()
        if configured:
            return configured

        screen = QGuiApplication.primaryScreen() if QGuiApplication.instance() else None
        if screen is not None:
            size = screen.size()
            if size.width() > 0 and size.height() > 0:
                return (size.width(), size.height())

        debug_log("CONTROLLER", "No screen available, using fallback export size", "WARNING")
        return (FALLBACK_EXPORT_WIDTH, FALLBACK_EXPORT_HEIGHT)

    def export_file(
        self,
        file_path: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Optional[FileExportWorker]:
        """Compose the export image and write it to disk in a worker"""
        if width is None or height is None:
            width, height = self.get_export_size()

        try:
            image = self.core.export_raster(width, height)
        except ValidationError as e:
            self.error.emit(format_error_message("export image", e))
            return None

        if not self._wait_for(self.export_worker):
            self._report_busy("export image")
            return None
        self.export_worker = self.file_manager.export_file(image, file_path)
        if not self.export_worker:
            return None

        cell_size, _, _ = export_geometry(width, height, self.core.grid_size)
        self._export_geometry = (cell_size * self.core.grid_size, width, height)

        self.export_worker.progress.connect(
            lambda p, msg: debug_log("CONTROLLER", f"Export progress: {p}% - {msg}", "DEBUG")
        )
        self.export_worker.error.connect(self._handle_export_error)
        self.export_worker.saved.connect(self._handle_export_success)

        self.export_worker.start()
        return self.export_worker

    def _handle_export_error(self, error_msg: str) -> None:
        debug_log("CONTROLLER", f"Export error: {error_msg}", "ERROR")
        self.error.emit(error_msg)

    def _handle_export_success(self, file_path: str) -> None:
        side, width, height = self._export_geometry or (0, 0, 0)
        self.settings.set("last_export_dir", str(Path(file_path).parent))
        self.statusMessage.emit(
            f"Exported {side}x{side} grid centered in {width}x{height} - saved to {file_path}",
            STATUS_MESSAGE_TIMEOUT,
        )
        debug_log("CONTROLLER", f"Successfully exported: {file_path}")

    # Import
    def import_file(self, file_path: str) -> Optional[FileImportWorker]:
        """Decode an image file in a worker, then resample it into the grid"""
        if not self._wait_for(self.import_worker):
            self._report_busy("load image")
            return None
        self.import_worker = self.file_manager.import_file(file_path)
        if not self.import_worker:
            return None

        self.import_worker.progress.connect(
            lambda p, msg: debug_log("CONTROLLER", f"Import progress: {p}% - {msg}", "DEBUG")
        )
        self.import_worker.error.connect(self._handle_import_error)
        self.import_worker.result.connect(self._handle_import_result)

        self.import_worker.start()
        return self.import_worker

    def _handle_import_error(self, error_msg: str) -> None:
        debug_log("CONTROLLER", f"Import error: {error_msg}", "ERROR")
        self.error.emit(error_msg)

    def _handle_import_result(self, image: Image.Image) -> None:
        try:
            self.core.import_raster(image)
        except DecodeError as e:
            self._handle_import_error(format_error_message("load image", e))
            return

        self.gesture_manager.reset()
        self.imageChanged.emit()

        worker = self.import_worker
        if worker is not None and worker.file_path is not None:
            file_path = str(worker.file_path)
            self.settings.add_recent_file(file_path)
            self.settings.set("last_import_dir", str(worker.file_path.parent))
            self.statusMessage.emit(
                f"Loaded {os.path.basename(file_path)}", STATUS_MESSAGE_TIMEOUT
            )

    @staticmethod
    def _wait_for(worker, timeout_ms: int = 5000) -> bool:
        """Wait for a worker; False if it is still running afterwards"""
        if worker is not None and worker.isRunning():
            worker.wait(timeout_ms)
            return not worker.isRunning()
        return True

    def _report_busy(self, operation: str) -> None:
        # The running worker stays referenced until it finishes
        debug_log("CONTROLLER", f"Previous worker still running, cannot {operation}", "WARNING")
        self.error.emit(f"Cannot {operation}: a previous file operation is still running")

    def wait_for_workers(self, timeout_ms: int = 5000) -> None:
        """Block until running file workers have finished"""
        for worker in (self.import_worker, self.export_worker):
            self._wait_for(worker, timeout_ms)

    def shutdown(self, timeout_ms: int = 5000) -> None:
        """Cancel pending file workers so no result lands after close, then wait"""
        for worker in (self.import_worker, self.export_worker):
            if worker is not None:
                worker.cancel()
        self.wait_for_workers(timeout_ms)
