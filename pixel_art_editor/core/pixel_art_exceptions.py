#!/usr/bin/env python3
"""
Custom exceptions and error handling utilities for the pixel art editor.

This module defines domain-specific exceptions and provides utilities
for consistent error reporting across the application.
"""


class PixelArtEditorError(Exception):
    """Base exception for all pixel art editor errors"""


class FileOperationError(PixelArtEditorError):
    """Raised when file operations fail"""


class DecodeError(FileOperationError):
    """Raised when a source cannot be decoded as a raster image"""


class EncodeError(FileOperationError):
    """Raised when a raster image cannot be encoded or written"""


class ValidationError(PixelArtEditorError):
    """Raised when input validation fails"""


def format_error_message(operation: str, error: Exception) -> str:
    """
    Format an error message for user display.

    Args:
        operation: Description of the operation that failed
        error: The exception that was raised

    Returns:
        User-friendly error message
    """
    if isinstance(error, FileNotFoundError):
        return f"File not found during {operation}"
    if isinstance(error, PermissionError):
        return f"Permission denied during {operation}"
    if isinstance(error, MemoryError):
        return f"Out of memory during {operation}"
    if isinstance(error, OSError) and error.errno == 28:  # No space left
        return f"Disk full - cannot complete {operation}"
    if isinstance(error, DecodeError):
        return f"Error loading image: {error}"
    if isinstance(error, EncodeError):
        return f"Error saving image: {error}"
    if isinstance(error, ValidationError):
        return f"Invalid input: {error}"
    return f"Failed to {operation}: {error}"
