#!/usr/bin/env python3
"""
Core data models for the pixel art editor
These models handle the editing state without any UI dependencies
"""

# Standard library imports
from dataclasses import dataclass, field
from typing import Optional

# Third-party imports
import numpy as np

from .pixel_art_commands import UndoStack
from .pixel_art_constants import (
    BACKGROUND_COLOR,
    DEFAULT_DRAW_COLOR,
    DEFAULT_GRID_SIZE,
    RGBA_CHANNELS,
)
from .pixel_art_exceptions import ValidationError
from .pixel_art_utils import RGBA, normalize_rgba


def blank_grid_data(size: int, color: RGBA = BACKGROUND_COLOR) -> np.ndarray:
    """Create a size x size RGBA array filled with a single color"""
    data = np.empty((size, size, RGBA_CHANNELS), dtype=np.uint8)
    data[:, :] = color
    return data


@dataclass
class PixelGrid:
    """
    Square RGBA pixel buffer
    Data is a (size, size, 4) uint8 array indexed [y, x]
    """

    size: int = DEFAULT_GRID_SIZE
    data: Optional[np.ndarray] = None

    def __post_init__(self):
        """Ensure data array matches dimensions"""
        if isinstance(self.size, bool) or not isinstance(self.size, (int, np.integer)):
            raise ValidationError(f"Grid size must be an integer, got {self.size!r}")
        if self.size <= 0:
            raise ValidationError(f"Grid size must be positive, got {self.size}")
        self.size = int(self.size)

        expected = (self.size, self.size, RGBA_CHANNELS)
        if self.data is None or self.data.shape != expected:
            self.data = blank_grid_data(self.size)
        elif self.data.dtype != np.uint8:
            self.data = self.data.astype(np.uint8)

    @classmethod
    def from_array(cls, data: np.ndarray) -> "PixelGrid":
        """Wrap an existing square RGBA array (no copy)"""
        if data.ndim != 3 or data.shape[0] != data.shape[1] or data.shape[2] != RGBA_CHANNELS:
            raise ValidationError(f"Expected square RGBA array, got shape {data.shape}")
        return cls(size=data.shape[0], data=data)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def get_pixel(self, x: int, y: int) -> Optional[RGBA]:
        """Get pixel color at coordinates, None when out of bounds"""
        if not self.in_bounds(x, y):
            return None
        r, g, b, a = (int(c) for c in self.data[y, x])
        return (r, g, b, a)

    def set_pixel(self, x: int, y: int, color: RGBA) -> bool:
        """
        Set pixel color at coordinates
        Returns True if pixel was changed
        """
        if not self.in_bounds(x, y):
            return False
        if np.array_equal(self.data[y, x], color):
            return False
        self.data[y, x] = color
        return True

    def fill(self, color: RGBA = BACKGROUND_COLOR) -> None:
        """Fill the whole grid with one color"""
        self.data[:, :] = color

    def is_blank(self, color: RGBA = BACKGROUND_COLOR) -> bool:
        """Check if every pixel has the given color"""
        return bool(np.all(self.data == np.asarray(color, dtype=np.uint8)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.data, other.data)


@dataclass
class EditorState:
    """
    Everything the editing core owns: the grid, the drawing color
    and the undo history
    """

    grid: PixelGrid = field(default_factory=PixelGrid)
    current_color: RGBA = DEFAULT_DRAW_COLOR
    undo_stack: UndoStack = field(default_factory=UndoStack)

    def __post_init__(self):
        self.current_color = normalize_rgba(self.current_color)

    @property
    def grid_size(self) -> int:
        return self.grid.size
