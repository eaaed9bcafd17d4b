"""Logging configuration for chord-chart."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from chord_chart.exceptions import ConfigError

LOGGER_NAME = "chord_chart"

VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SHORT_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(
    level: str = "WARNING", log_file: Path | None = None, verbose: bool = False
) -> logging.Logger:
    """Install handlers on the package logger.

    Parameters
    ----------
    level : str
        Level name, case-insensitive (e.g., "debug").
    log_file : Path | None
        Also write records to this file; parent directories are created.
    verbose : bool
        Include timestamps and logger names.

    Returns
    -------
    logging.Logger
        The ``chord_chart`` logger.

    Raises
    ------
    ConfigError
        If ``level`` is not a logging level name.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ConfigError(f"Invalid log level: {level}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    formatter = logging.Formatter(VERBOSE_FORMAT if verbose else SHORT_FORMAT)

    # stderr keeps JSON on stdout clean
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
