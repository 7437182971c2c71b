"""Logging configuration for the command line.

Diagnostics go to stderr through the ``prosefmt`` logger so that stdout
carries only the report.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "prosefmt"
LOG_FORMAT = "%(message)s"

VERBOSITY_LEVELS = {
    "silent": logging.CRITICAL,
    "compact": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "compact", stream: Optional[TextIO] = None) -> logging.Logger:
    """Setup the prosefmt logger for a verbosity level.

    Args:
        verbosity: One of "silent", "compact" or "verbose"
        stream: Stream to write to (default: sys.stderr at call time)

    Returns:
        The configured package logger. Calling this again replaces the
        handler installed by the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_prosefmt_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._prosefmt_handler = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(VERBOSITY_LEVELS.get(verbosity, logging.WARNING))
    logger.propagate = False
    return logger
