"""Logging setup for the yachtbook backend."""

import logging
import sys

LOGGER_NAME = "yachtbook"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``yachtbook`` logger hierarchy.

    Safe to call more than once; later calls only change the level.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not _configured:
        logger.handlers.clear()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``yachtbook`` namespace."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
