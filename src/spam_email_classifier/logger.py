"""Logging setup for the spam classifier.

Module loggers are children of the package logger, which owns the console
handler and the level. ``set_level`` changes the level for all of them.
"""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "spam_email_classifier"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))


def set_level(level: str) -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the package logger.

    The first call attaches the handler and takes the initial level from
    SPAM_CLASSIFIER_LOG_LEVEL (default INFO).
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler not in package_logger.handlers:
        package_logger.addHandler(_handler)
        package_logger.propagate = False
        set_level(os.getenv("SPAM_CLASSIFIER_LOG_LEVEL") or "INFO")

    return logging.getLogger(name)
