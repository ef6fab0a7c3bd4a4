"""Logging helpers.

The package only creates loggers; handlers are left to the application.
"""

import logging
from functools import lru_cache

from methodutils.config import get_config

PACKAGE_LOGGER = "methodutils"


@lru_cache
def _configure_package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(str(get_config("logging.level", "WARNING")).upper())
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, applying the configured package level once."""
    _configure_package_logger()
    return logging.getLogger(name)
