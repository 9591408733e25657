#!/usr/bin/env python3
"""
Raster editing core for the pixel art editor
Owns the pixel grid, the drawing color and the bounded undo history.
The presentation layer calls the command methods and re-reads the grid.
"""

# Standard library imports
from typing import Optional

# Third-party imports
import numpy as np
from PIL import Image

from .pixel_art_commands import UndoStack
from .pixel_art_constants import BACKGROUND_COLOR, DEFAULT_GRID_SIZE
from .pixel_art_models import EditorState, PixelGrid
from .pixel_art_raster import (
    RasterSource,
    compose_export,
    decode_raster,
    resample_nearest,
)
from .pixel_art_utils import RGBA, debug_color, debug_log, normalize_rgba


class RasterEditorCore:
    """Command interface over an EditorState"""

    def __init__(
        self,
        grid_size: int = DEFAULT_GRID_SIZE,
        state: Optional[EditorState] = None,
    ) -> None:
        if state is None:
            state = EditorState(grid=PixelGrid(size=grid_size), undo_stack=UndoStack())
        self.state = state

    # Read access for rendering
    @property
    def grid(self) -> PixelGrid:
        return self.state.grid

    @property
    def grid_size(self) -> int:
        return self.state.grid_size

    @property
    def current_color(self) -> RGBA:
        return self.state.current_color

    @property
    def undo_depth(self) -> int:
        return len(self.state.undo_stack)

    @property
    def can_undo(self) -> bool:
        return self.state.undo_stack.can_undo

    def get_grid(self) -> np.ndarray:
        """Current (size, size, 4) grid array; treat as read-only"""
        return self.state.grid.data

    def get_cell(self, x: int, y: int) -> Optional[RGBA]:
        return self.state.grid.get_pixel(x, y)

    # Commands
    def set_grid_size(self, size: int) -> None:
        """Replace the grid with a blank one and drop all history"""
        self.state.grid = PixelGrid(size=size)
        self.state.undo_stack.clear()
        debug_log("CORE", f"Grid size set to {size}x{size}")

    def set_color(self, color) -> None:
        self.state.current_color = normalize_rgba(color)
        debug_log("CORE", f"Drawing color set to {debug_color(self.state.current_color)}", "DEBUG")

    def paint_cell(self, x: int, y: int, use_erase_color: bool = False) -> bool:
        """
        Write the drawing color (or the background when erasing) at a cell
        Out-of-bounds cells are ignored. Returns True if the cell changed.
        """
        color = BACKGROUND_COLOR if use_erase_color else self.state.current_color
        return self.state.grid.set_pixel(x, y, color)

    def snapshot_for_undo(self) -> None:
        """Push a copy of the current grid; call once per gesture"""
        self.state.undo_stack.push(self.state.grid.data)
        debug_log("CORE", f"Undo snapshot taken (depth {self.undo_depth})", "DEBUG")

    def undo(self) -> bool:
        """Restore the most recent snapshot; False if there was none"""
        data = self.state.undo_stack.pop()
        if data is None:
            return False
        self.state.grid = PixelGrid.from_array(data)
        debug_log("CORE", f"Undo (depth {self.undo_depth})", "DEBUG")
        return True

    def clear(self) -> None:
        self.snapshot_for_undo()
        self.state.grid.fill(BACKGROUND_COLOR)
        debug_log("CORE", "Canvas cleared")

    def export_raster(self, target_width: int, target_height: int) -> Image.Image:
        """Render the grid with square pixels centered on a background canvas"""
        return compose_export(
            self.state.grid.data, target_width, target_height, BACKGROUND_COLOR
        )

    def import_raster(self, source: RasterSource) -> None:
        """
        Replace the grid with a nearest-neighbor resample of an image

        Raises:
            DecodeError: If the source is not a decodable image; state and
                history are left untouched
        """
        image = decode_raster(source)
        self.snapshot_for_undo()
        self.state.grid = PixelGrid.from_array(resample_nearest(image, self.grid_size))
        debug_log(
            "CORE",
            f"Imported {image.width}x{image.height} image into {self.grid_size}x{self.grid_size} grid",
        )
