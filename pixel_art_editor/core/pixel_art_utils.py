#!/usr/bin/env python3
"""
Common utilities for the pixel art editor
Extracted to avoid duplication between modules
"""

# Standard library imports
import logging
from typing import Any, Union

from .pixel_art_constants import CHANNEL_MAX, CHANNEL_MIN, RGBA_CHANNELS
from .pixel_art_exceptions import ValidationError

RGBA = tuple[int, int, int, int]

LOGGER_NAME = "pixel_art_editor"

# ================================================================================
# Debug Logging Utilities
# ================================================================================

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def get_logger(category: str) -> logging.Logger:
    """Get the logger for a category (e.g. "CORE" -> pixel_art_editor.core)"""
    return logging.getLogger(f"{LOGGER_NAME}.{category.lower()}")


def debug_log(category: str, message: str, level: str = "INFO") -> None:
    """Log a message under a category

    Args:
        category: Category for the log message (e.g., "CORE", "CANVAS", "FILE")
        message: The log message
        level: Log level ("INFO", "WARNING", "ERROR", "DEBUG")
    """
    get_logger(category).log(_LEVELS.get(level.upper(), logging.INFO), message)


def debug_exception(category: str, exception: BaseException) -> None:
    """Log exceptions with full traceback

    Args:
        category: Category for the log message
        exception: The exception to log
    """
    get_logger(category).error(
        "Exception: %s: %s",
        type(exception).__name__,
        exception,
        exc_info=(type(exception), exception, exception.__traceback__),
    )


def debug_color(color: RGBA) -> str:
    """Format color information for debugging"""
    return f"RGBA{tuple(color)} ({rgba_to_hex(color)})"


# ================================================================================
# Color Validation Utilities
# ================================================================================


def _parse_hex_color(value: str) -> RGBA:
    text = value.strip().lstrip("#")
    if len(text) not in (6, 8):
        raise ValidationError(f"Invalid hex color: {value!r}")
    try:
        channels = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
    except ValueError as e:
        raise ValidationError(f"Invalid hex color: {value!r}") from e
    if len(channels) == 3:
        channels.append(CHANNEL_MAX)
    return (channels[0], channels[1], channels[2], channels[3])


def normalize_rgba(color: Union[str, tuple, list, Any]) -> RGBA:
    """Validate a color and normalize it to an (r, g, b, a) tuple

    Args:
        color: RGB/RGBA sequence of 8-bit ints, or "#RRGGBB"/"#RRGGBBAA"

    Returns:
        RGBA tuple; three-channel input is treated as fully opaque

    Raises:
        ValidationError: If the value is not a valid color
    """
    if isinstance(color, str):
        return _parse_hex_color(color)

    try:
        channels = [int(c) for c in color]
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid color: {color!r}") from e

    if len(channels) == 3:
        channels.append(CHANNEL_MAX)
    if len(channels) != RGBA_CHANNELS:
        raise ValidationError(f"Expected 3 or 4 color channels, got {len(channels)}")
    if any(c < CHANNEL_MIN or c > CHANNEL_MAX for c in channels):
        raise ValidationError(f"Color channels must be 0-255: {tuple(channels)}")

    return (channels[0], channels[1], channels[2], channels[3])


def rgba_to_hex(color: RGBA) -> str:
    """Format an RGBA tuple as #RRGGBBAA"""
    r, g, b, a = color
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"
