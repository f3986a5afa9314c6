"""Shared logger for the orchestration layer."""
from __future__ import annotations

import logging
import threading

LOG_FORMAT = "%(asctime)s | %(levelname)-5s | %(module)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def get_logger(name: str = "pdfstudio") -> logging.Logger:
    """Return the shared logger, installing a console handler on first use."""

    global _logger
    if _logger is not None:
        return _logger
    with _logger_lock:
        if _logger is not None:
            return _logger
        _logger = logging.getLogger(name)
        _logger.setLevel(logging.DEBUG)

        console = logging.StreamHandler()
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        _logger.addHandler(console)
    return _logger


def set_console_level(level: str | int) -> None:
    """Adjust the console handler threshold, e.g. from configuration."""

    logger = get_logger()
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level}")
        level = resolved
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
