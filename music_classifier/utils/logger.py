"""Structured logging setup for Music Classifier.

All modules log through children of the ``music_classifier`` logger. The
handlers live for one run: ``setup_logger`` installs them once the config is
known and ``shutdown_logger`` closes them when the run ends, so a log file is
flushed even when the run aborts.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from music_classifier.utils.constants import APP_NAME, LOG_LEVELS

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s.%(module)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    log_level: str = "INFO",
    log_file: str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach console and optional file handlers to the application logger.

    Args:
        log_level: One of ``LOG_LEVELS``, case-insensitive. Unknown names
            fall back to INFO.
        log_file: Optional log file path; parent directories are created.
        stream: Console stream. Defaults to the current ``sys.stderr`` so
            the popularity report on stdout stays clean enough to pipe.

    Returns:
        The application logger. Calling this again while handlers are
        attached returns it unchanged.
    """
    logger = logging.getLogger(APP_NAME)
    if logger.handlers:
        return logger

    level_name = log_level.upper()
    level = getattr(logging, level_name) if level_name in LOG_LEVELS else logging.INFO
    logger.setLevel(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def shutdown_logger() -> None:
    """Detach and close every handler installed by ``setup_logger``."""
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def get_logger(module_name: str | None = None) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        module_name: Dotted module name (e.g. 'core.scanner').

    Returns:
        Logger instance.
    """
    base = logging.getLogger(APP_NAME)
    if module_name:
        return base.getChild(module_name)
    return base
