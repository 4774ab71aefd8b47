from __future__ import annotations

import logging

from colorlog import ColoredFormatter

_PACKAGE_LOGGER = "capture_search"
LOG_FORMAT = "%(log_color)s[%(levelname)s]%(reset)s %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Send package logs to stderr as colored ``[LEVEL] module: message`` lines."""

    logger = logging.getLogger(_PACKAGE_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(ColoredFormatter(LOG_FORMAT))
        logger.addHandler(handler)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    logger.propagate = False
    return logger
