#!/usr/bin/env python3
"""
Manager classes for the pixel art editor
Handle coordination between the editing core, pointer gestures and files
"""

# Standard library imports
import os
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Optional, Union

from PIL import Image

from .pixel_art_constants import MAX_IMPORT_FILE_SIZE
from .pixel_art_editor_core import RasterEditorCore
from .pixel_art_exceptions import ValidationError, format_error_message
from .pixel_art_raster import ensure_png_suffix
from .pixel_art_utils import debug_exception, debug_log
from .pixel_art_workers import FileExportWorker, FileImportWorker


class GestureState(Enum):
    """Pointer gesture states"""

    IDLE = auto()
    DRAWING = auto()


class BrushMode(Enum):
    """What a gesture writes into the cells it touches"""

    PAINT = auto()
    ERASE = auto()


class GestureManager:
    """
    Turns pointer down/move/up into core commands
    Each gesture takes exactly one undo snapshot, on pointer-down.
    """

    def __init__(self, core: RasterEditorCore) -> None:
        self.core = core
        self.state = GestureState.IDLE
        self.mode: Optional[BrushMode] = None

    @property
    def is_drawing(self) -> bool:
        return self.state is GestureState.DRAWING

    def pointer_down(self, x: int, y: int, erase: bool = False) -> bool:
        """Start a gesture; returns True if the first cell changed"""
        if self.is_drawing:
            debug_log("GESTURE", "Pointer down while drawing, starting new gesture", "DEBUG")

        self.core.snapshot_for_undo()
        self.state = GestureState.DRAWING
        self.mode = BrushMode.ERASE if erase else BrushMode.PAINT
        return self.core.paint_cell(x, y, erase)

    def pointer_move(self, x: int, y: int) -> bool:
        """Continue the gesture with the mode recorded at pointer-down"""
        if not self.is_drawing:
            return False
        return self.core.paint_cell(x, y, self.mode is BrushMode.ERASE)

    def pointer_up(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Return to IDLE without touching the core"""
        self.state = GestureState.IDLE
        self.mode = None


class FileManager:
    """Manages file operations for the pixel art editor"""

    def __init__(self) -> None:
        self.error_callback: Optional[Callable[[str], None]] = None

    def _report(self, operation: str, error: Exception) -> None:
        debug_exception("FILE", error)
        if self.error_callback:
            self.error_callback(format_error_message(operation, error))

    def import_file(self, file_path: Union[str, Path]) -> Optional[FileImportWorker]:
        """
        Validate a source file and create a worker to decode it
        Returns None (after reporting the error) if validation fails
        """
        try:
            file_path_str = str(file_path) if file_path else ""
            if not file_path_str:
                raise ValidationError("File path cannot be empty")

            if not os.path.exists(file_path_str):
                raise FileNotFoundError(f"File not found: {file_path_str}")

            if not os.access(file_path_str, os.R_OK):
                raise PermissionError(f"Cannot read file: {file_path_str}")

            file_size = os.path.getsize(file_path_str)
            if file_size > MAX_IMPORT_FILE_SIZE:
                raise ValidationError(
                    f"File too large: {file_size / 1024 / 1024:.1f}MB (max 100MB)"
                )

            # Let caller handle threading
            worker = FileImportWorker(file_path_str)
            debug_log("FILE", f"Importing file: {file_path_str}")
            return worker

        except (OSError, ValidationError) as e:
            self._report("load image", e)
            return None

    def export_file(
        self, image: Image.Image, file_path: Union[str, Path]
    ) -> Optional[FileExportWorker]:
        """
        Validate an export target and create a worker to write the PNG
        A .png suffix is appended when missing.
        """
        try:
            if image is None:
                raise ValidationError("No image to export")

            if not file_path:
                raise ValidationError("File path cannot be empty")

            path = ensure_png_suffix(file_path)

            directory = path.parent
            if not directory.exists():
                raise FileNotFoundError(f"Directory does not exist: {directory}")
            if not os.access(directory, os.W_OK):
                raise PermissionError(f"Cannot write to directory: {directory}")

            worker = FileExportWorker(image, path)
            debug_log("FILE", f"Exporting file: {path}")
            return worker

        except (OSError, ValidationError) as e:
            self._report("save image", e)
            return None
