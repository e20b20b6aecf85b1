"""Logging helpers for the wot_meta package."""

from __future__ import annotations

import logging
import sys

_LOGGER_NAME = 'wot_meta'


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the wot_meta hierarchy."""
    if not name or name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + '.'):
        return logging.getLogger(name or _LOGGER_NAME)
    return logging.getLogger(f'{_LOGGER_NAME}.{name}')


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Send wot_meta logs to stderr; stdout stays reserved for JSON-RPC output."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('[wot_meta] %(levelname)s %(name)s: %(message)s'))
    logger.addHandler(handler)
    return logger


__all__ = ['configure_logging', 'get_logger']
