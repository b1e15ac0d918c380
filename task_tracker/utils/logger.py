"""Logging configuration for task tracker."""

from __future__ import annotations

import sys
import logging
from pathlib import Path
from datetime import datetime


def setup_logger(
    name: str = "task_tracker",
    log_dir: Path | None = None,
    level: int = logging.WARNING,
) -> logging.Logger:
    """Configure logging with console and optional file handlers

    The console handler writes to stderr; stdout belongs to the menu.

    Args:
        name: Logger name
        log_dir: Directory for log files (None disables file logging)
        level: Logging level

    Returns:
        Configured logger instance
    """

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"tracker_{datetime.now():%Y%m%d}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
