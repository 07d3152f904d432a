"""Console logging setup for the privnet CLI."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "privnet"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stderr handler to the package logger, replacing one from an earlier call."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for existing in list(logger.handlers):
        if getattr(existing, "_privnet_console", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._privnet_console = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
