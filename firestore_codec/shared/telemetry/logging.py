"""Logging configuration for the codec.

Every module logs through ``get_logger(__name__)``, so all records land
under the ``firestore_codec`` logger. The codec never configures logging on
import; applications that want its output call ``setup_logging()``.
"""

import logging
import sys

from firestore_codec.core.config import get_settings

PACKAGE_LOGGER = "firestore_codec"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: logging.Handler | None = None


def setup_logging(level: int | None = None) -> logging.Logger:
    """Send codec log records to stdout.

    Level is DEBUG when settings.debug is True, otherwise INFO, unless
    ``level`` is given. Calling it again only updates the level.

    Args:
        level: Optional explicit logging level.

    Returns:
        The package logger.
    """
    global _handler

    if level is None:
        level = logging.DEBUG if get_settings().debug else logging.INFO
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
