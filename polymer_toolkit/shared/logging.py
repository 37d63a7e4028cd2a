"""
Lightweight logging utilities for the Polymer proof toolkit.

Provides a consistent logger with a simple stderr handler and optional
log-level override via the POLYMER_LOG_LEVEL environment variable.
stdout is left to command results.
"""

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_ROOT_LOGGER = "polymer_toolkit"


def _root_logger() -> logging.Logger:
    logger = logging.getLogger(_ROOT_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)

        level_str = os.getenv("POLYMER_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_str, logging.WARNING)
        logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the toolkit's root logger.

    The first call attaches a StreamHandler with a plain-text formatter to
    the ``polymer_toolkit`` logger; module loggers propagate to it.
    """
    root = _root_logger()
    if not name or name == _ROOT_LOGGER:
        return root
    return logging.getLogger(name)


def configure_logging(debug: bool) -> None:
    """Switch the toolkit's loggers to DEBUG when the debug flag is set."""
    if debug:
        _root_logger().setLevel(logging.DEBUG)
