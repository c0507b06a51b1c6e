"""Logging setup for the CLI process"""

import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: str = "INFO", name: str = "draftpub") -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    Repeated calls update the level and rebind the handler to the current
    sys.stderr instead of stacking handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    handler = next((h for h in logger.handlers if h.get_name() == name), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(name)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    else:
        handler.setStream(sys.stderr)
    return logger
