"""
Console logging setup for the chronicle package.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

_HANDLER_NAME = "chronicle-console"


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Attach a single stdout handler to the ``chronicle`` logger.

    Safe to call repeatedly; the handler is only installed once and the level is
    updated on every call.
    """
    logger = logging.getLogger("chronicle")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
