"""
Logging setup for GeoGuessr AutoSave.

Diagnostics go through loguru. User-facing progress is printed by the
notifier instead (see ui.notifier).
"""

import os
import sys
from typing import Optional

from loguru import logger


def setup_logger(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru handlers.

    Args:
        log_level: Console level (LOG_LEVEL environment variable if unset, else WARNING)
        log_file: Optional log file path (LOG_FILE environment variable if unset);
            gets DEBUG-level output with rotation
        rotation: Log rotation size
        retention: How long rotated logs are kept
    """
    logger.remove()

    level = (log_level or os.environ.get("LOG_LEVEL") or "WARNING").upper()
    log_file = log_file or os.environ.get("LOG_FILE")

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan> | "
        "<level>{message}</level>"
    )
    logger.configure(extra={"name": "autosave"})
    logger.add(
        sys.stderr,
        format=console_format,
        level=level,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )

    if log_file:
        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss} | "
            "{level: <8} | "
            "{extra[name]}:{function}:{line} | "
            "{message}"
        )
        logger.add(
            log_file,
            format=file_format,
            level="DEBUG",
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )

    logger.debug(f"Logger initialized with level: {level}")


def get_logger(name: Optional[str] = None):
    """Get a logger bound to a component name."""
    if name:
        return logger.bind(name=name)
    return logger
