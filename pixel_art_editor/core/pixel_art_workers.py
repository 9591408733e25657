"""
Worker threads for async file operations in the pixel art editor.

Decoding and encoding PNGs can take a moment for large files or full-screen
exports, so they run off the UI thread. Each worker reports exactly one
outcome: a result signal on success or an error signal on failure.
"""

# Standard library imports
from pathlib import Path
from typing import Optional, Union

# Third-party imports
from PIL import Image
from PyQt6.QtCore import QObject, QThread, pyqtSignal

from .pixel_art_exceptions import FileOperationError, format_error_message
from .pixel_art_raster import decode_raster, encode_png
from .pixel_art_utils import debug_exception, debug_log


class BaseWorker(QThread):
    """Base worker class for async operations.

    Signals:
        progress: Emitted with progress percentage (0-100)
        error: Emitted with error message when operation fails
        finished: Emitted when operation completes successfully
    """

    progress = pyqtSignal(int, str)  # Progress percentage 0-100, optional message
    error = pyqtSignal(str)  # Error message
    finished = pyqtSignal()  # Operation completed

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        parent: Optional[QObject] = None,
    ):
        """Initialize the base worker.

        Args:
            file_path: Optional file path (string or Path object)
            parent: Parent QObject for proper cleanup
        """
        super().__init__(parent)
        self._is_cancelled = False
        self._file_path: Optional[Path] = Path(file_path) if file_path is not None else None

    def cancel(self) -> None:
        """Cancel the operation."""
        self._is_cancelled = True

    def is_cancelled(self) -> bool:
        return self._is_cancelled

    @property
    def file_path(self) -> Optional[Path]:
        """Get the file path as a Path object (read-only)."""
        return self._file_path

    def emit_progress(self, value: int, message: str = "") -> None:
        if not self._is_cancelled:
            self.progress.emit(value, message)

    def emit_error(self, message: str) -> None:
        if not self._is_cancelled:
            self.error.emit(message)

    def emit_finished(self) -> None:
        if not self._is_cancelled:
            self.finished.emit()


class FileImportWorker(BaseWorker):
    """Worker for decoding an image file.

    Signals:
        result: Emitted with the decoded RGBA PIL Image
    """

    result = pyqtSignal(object)  # PIL Image

    def __init__(self, file_path: Union[str, Path], parent: Optional[QObject] = None):
        super().__init__(file_path, parent)

    def run(self) -> None:
        """Decode the image file in background thread."""
        try:
            if self._file_path is None:
                self.emit_error("No file path provided")
                return

            self.emit_progress(0, f"Loading {self._file_path.name}...")
            image = decode_raster(self._file_path)
            if self.is_cancelled():
                return

            self.emit_progress(100, "Loading complete!")
            debug_log(
                "WORKER", f"Decoded {self._file_path.name}: {image.width}x{image.height}", "DEBUG"
            )
            self.result.emit(image)
            self.emit_finished()

        except FileOperationError as e:
            debug_exception("WORKER", e)
            self.emit_error(format_error_message("load image", e))


class FileExportWorker(BaseWorker):
    """Worker for writing an exported image as PNG.

    Signals:
        saved: Emitted with the written file path
    """

    saved = pyqtSignal(str)  # Saved file path

    def __init__(
        self,
        image: Image.Image,
        file_path: Union[str, Path],
        parent: Optional[QObject] = None,
    ):
        """Initialize the export worker.

        Args:
            image: Composed export image
            file_path: Path where to save the image (string or Path object)
            parent: Parent QObject for proper cleanup
        """
        super().__init__(file_path, parent)
        self.image = image

    def run(self) -> None:
        """Save the image file in background thread."""
        try:
            if self._file_path is None:
                self.emit_error("No file path provided")
                return

            self.emit_progress(0, "Writing PNG to disk...")
            encode_png(self.image, self._file_path)
            if self.is_cancelled():
                return

            self.emit_progress(100, "Save complete!")
            self.saved.emit(str(self._file_path))
            self.emit_finished()

        except FileOperationError as e:
            debug_exception("WORKER", e)
            self.emit_error(format_error_message("save image", e))
