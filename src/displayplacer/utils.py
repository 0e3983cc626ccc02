"""Utility helpers: logging setup."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "displayplacer"

# Default output reads like plain diagnostics on stderr
DEFAULT_FORMAT = "%(message)s"
VERBOSE_FORMAT = "[displayplacer] %(levelname)s %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route package logs to stderr; DEBUG with *verbose*, else WARNING and up.

    Safe to call more than once: the handler installed by a previous call
    is replaced, not duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if handler.get_name() == LOGGER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(LOGGER_NAME)
    handler.setFormatter(logging.Formatter(VERBOSE_FORMAT if verbose else DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
