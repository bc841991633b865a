"""Logging setup for linkgnome.

Every module logs through ``logging.getLogger(__name__)``; this installs the
single console handler on the package logger. Debug output is enabled by
``--verbose`` or the LINKGNOME_DEBUG environment variable.
"""

import logging
import os

LOG_FORMAT = "[%(levelname)s] %(asctime)s %(message)s"


def debug_enabled() -> bool:
    """Return True when LINKGNOME_DEBUG is set to 1."""
    return os.getenv("LINKGNOME_DEBUG", "0") == "1"


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure and return the ``linkgnome`` logger.

    Safe to call more than once; the handler is installed only the first
    time, but the level is updated on every call.
    """
    logger = logging.getLogger("linkgnome")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose or debug_enabled() else logging.INFO)
    return logger
