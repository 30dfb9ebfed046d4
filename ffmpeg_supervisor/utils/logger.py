"""
Logging utilities with Rich integration.

This module provides logging setup and utilities for console output.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "ffmpeg_supervisor"


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: str = "INFO",
    log_file: Optional[Path] = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Setup logger with Rich handler and optional file output.

    Args:
        name: Logger name (use "ffmpeg_supervisor" to match package name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        verbose: Enable verbose output with file paths
        console: Rich console to use (creates new if None)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=True,
        show_path=verbose,
        omit_repeated_times=False,
        level=log_level,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Get a logger instance.

    Modules call get_logger(__name__); the resulting
    "ffmpeg_supervisor.module" loggers inherit from the package logger
    configured by setup_logger().

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
