"""Logging configuration for the pixel art editor"""
from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from .pixel_art_utils import LOGGER_NAME

DEBUG_ENV_VAR = "PIXEL_ART_EDITOR_DEBUG"


def default_log_dir() -> Path:
    """Directory for log files under the user's home"""
    return Path.home() / f".{LOGGER_NAME}" / "logs"


def setup_logging(
    log_dir: Path | None = None, log_level: str = "INFO"
) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        log_dir: Directory for log files (defaults to ~/.pixel_art_editor/logs)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    if os.environ.get(DEBUG_ENV_VAR, "").lower() in ("1", "true", "yes"):
        log_level = "DEBUG"

    if log_dir is None:
        log_dir = default_log_dir()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(
        logging.Formatter("%(levelname)s - %(name)s - %(message)s")
    )
    logger.addHandler(console_handler)

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / f"{LOGGER_NAME}.log", maxBytes=5_000_000, backupCount=3  # 5MB
        )
    except OSError as e:
        # Console logging still works without a writable log directory
        logger.warning("File logging disabled: %s", e)
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
            )
        )
        logger.addHandler(file_handler)

    logger.propagate = False
    logger.debug("Logging initialized at level %s", log_level.upper())
    return logger
