"""Pixel Art Editor - a small grid-based RGBA pixel art editor"""

__version__ = "1.0.0"
