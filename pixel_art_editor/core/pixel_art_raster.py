#!/usr/bin/env python3
"""
Raster helpers for the pixel art editor
Coordinate mapping, nearest-neighbor scaling and PNG decode/encode.
Nothing here touches editor state; the core composes these functions.
"""

# Standard library imports
import io
from pathlib import Path
from typing import BinaryIO, Optional, Union

# Third-party imports
import numpy as np
from PIL import Image

from .pixel_art_constants import BACKGROUND_COLOR, PNG_SUFFIX, RGBA_CHANNELS
from .pixel_art_exceptions import DecodeError, EncodeError, ValidationError
from .pixel_art_utils import RGBA, debug_log

RasterSource = Union[Image.Image, str, Path, bytes, bytearray, BinaryIO]


# ================================================================================
# Coordinate Mapping
# ================================================================================


def cell_size_for_surface(width: int, height: int, grid_size: int) -> int:
    """Cell size in surface pixels for a grid drawn on a width x height surface

    Uses the larger surface dimension for both axes, so on non-square
    surfaces the cells are square but the grid overflows the short side.
    """
    if grid_size <= 0:
        return 0
    return max(int(width), int(height)) // grid_size


def map_point_to_cell(
    mx: float, my: float, width: int, height: int, grid_size: int
) -> Optional[tuple[int, int]]:
    """Map a surface position to a cell coordinate

    The result may lie outside the grid; callers treat that as a no-op.
    Returns None when the surface is too small to give cells any size.
    """
    cell_size = cell_size_for_surface(width, height, grid_size)
    if cell_size <= 0:
        return None
    return (int(mx // cell_size), int(my // cell_size))


# ================================================================================
# Nearest-Neighbor Scaling
# ================================================================================


def scale_nearest(data: np.ndarray, factor: int) -> np.ndarray:
    """Integer nearest-neighbor upscale of an (h, w, c) array"""
    if factor == 1:
        return data

    # np.repeat is much faster than per-pixel loops for pixel art
    scaled = np.repeat(data, factor, axis=0)  # Scale vertically
    return np.repeat(scaled, factor, axis=1)  # Scale horizontally


def resample_nearest(image: Image.Image, size: int) -> np.ndarray:
    """Resample any image to a size x size RGBA array without blending"""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    if rgba.size != (size, size):
        rgba = rgba.resize((size, size), Image.Resampling.NEAREST)
    return np.array(rgba, dtype=np.uint8).reshape(size, size, RGBA_CHANNELS)


def export_geometry(
    target_width: int, target_height: int, grid_size: int
) -> tuple[int, int, int]:
    """Cell size and centering offsets for an export

    Returns:
        (cell_size, offset_x, offset_y)
    """
    cell_size = min(target_width, target_height) // grid_size
    side = cell_size * grid_size
    return cell_size, (target_width - side) // 2, (target_height - side) // 2


def compose_export(
    grid_data: np.ndarray,
    target_width: int,
    target_height: int,
    background: RGBA = BACKGROUND_COLOR,
) -> Image.Image:
    """Center a square-pixel upscale of the grid on a background canvas

    Grid pixels are copied as-is (no alpha compositing) so a 1:1 export
    carries the exact grid contents.
    """
    if target_width <= 0 or target_height <= 0:
        raise ValidationError(
            f"Export size must be positive, got {target_width}x{target_height}"
        )

    grid_size = grid_data.shape[0]
    cell_size, offset_x, offset_y = export_geometry(
        target_width, target_height, grid_size
    )

    canvas = np.empty((target_height, target_width, RGBA_CHANNELS), dtype=np.uint8)
    canvas[:, :] = background

    if cell_size > 0:
        side = cell_size * grid_size
        canvas[offset_y : offset_y + side, offset_x : offset_x + side] = scale_nearest(
            grid_data, cell_size
        )
    else:
        debug_log(
            "RASTER",
            f"Export target {target_width}x{target_height} smaller than grid {grid_size}",
            "WARNING",
        )

    return Image.fromarray(canvas)


# ================================================================================
# File Boundary
# ================================================================================


def decode_raster(source: RasterSource) -> Image.Image:
    """Decode a raster image into a fully loaded RGBA PIL Image

    Args:
        source: A PIL Image, a file path, raw encoded bytes or a binary file object

    Raises:
        DecodeError: If the source cannot be decoded as an image
    """
    if isinstance(source, Image.Image):
        try:
            return source.convert("RGBA")
        except (OSError, ValueError) as e:
            raise DecodeError(f"Cannot convert image: {e}") from e

    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))

    try:
        with Image.open(source) as image:
            image.load()
            debug_log(
                "RASTER",
                f"Decoded image: size={image.size}, mode={image.mode}, format={image.format}",
                "DEBUG",
            )
            return image.convert("RGBA")
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Not an image: {e}") from e


def encode_png(image: Image.Image, file_path: Union[str, Path]) -> Path:
    """Write an image as PNG

    Raises:
        EncodeError: If the file cannot be written
    """
    path = Path(file_path)
    try:
        image.save(str(path), format="PNG")
    except (OSError, ValueError) as e:
        raise EncodeError(f"Cannot write {path}: {e}") from e
    debug_log("RASTER", f"Wrote {image.width}x{image.height} PNG to {path}")
    return path


def ensure_png_suffix(file_path: Union[str, Path]) -> Path:
    """Append .png to a path that does not already end with it"""
    path = Path(file_path)
    if path.suffix.lower() != PNG_SUFFIX:
        path = path.with_name(path.name + PNG_SUFFIX)
    return path
