"""Core pixel art editor modules"""

# Make key classes available at package level
from .pixel_art_canvas import PixelArtCanvas
from .pixel_art_controller import PixelArtController
from .pixel_art_editor_core import RasterEditorCore
from .pixel_art_window import PixelArtEditorWindow

__all__ = ["PixelArtCanvas", "PixelArtController", "PixelArtEditorWindow", "RasterEditorCore"]
