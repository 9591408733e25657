#!/usr/bin/env python3
"""
Constants for the Pixel Art Editor
Centralizes all magic numbers and configuration values
"""

# ============================================================================
# GRID CONSTANTS
# ============================================================================

GRID_SIZES = (8, 16, 32, 64, 128)  # Enumerated canvas resolutions
DEFAULT_GRID_SIZE = 32

# ============================================================================
# COLOR CONSTANTS
# ============================================================================

CHANNEL_MIN = 0
CHANNEL_MAX = 255
RGBA_CHANNELS = 4

BACKGROUND_COLOR = (255, 255, 255, 255)  # Opaque white, also the erase color
DEFAULT_DRAW_COLOR = (0, 0, 0, 255)  # Opaque black

GRID_LINE_COLOR = (0, 0, 0, 50)  # Translucent black grid lines
CANVAS_BORDER_COLOR = (128, 128, 128)

# ============================================================================
# UNDO CONSTANTS
# ============================================================================

UNDO_STACK_SIZE = 20
UNDO_COMPRESSION_AGE = 5  # Snapshots this many steps below the top get compressed

# ============================================================================
# UI DIMENSIONS
# ============================================================================

CANVAS_PREFERRED_SIZE = 512
CANVAS_MIN_SIZE = 128

MAIN_WINDOW_TITLE = "Pixel Art Editor"

# ============================================================================
# FILE CONSTANTS
# ============================================================================

PNG_SUFFIX = ".png"
PNG_FILE_FILTER = "PNG Images (*.png)"
MAX_IMPORT_FILE_SIZE = 100 * 1024 * 1024  # 100MB
MAX_RECENT_FILES = 10

# Fallback export size when no screen is available (e.g. headless)
FALLBACK_EXPORT_WIDTH = 1920
FALLBACK_EXPORT_HEIGHT = 1080

# ============================================================================
# TIMING CONSTANTS
# ============================================================================

STATUS_MESSAGE_TIMEOUT = 3000  # Status bar message duration in milliseconds
SHORT_STATUS_TIMEOUT = 1000
