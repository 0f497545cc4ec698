"""Logging setup for the afswalk command line.

Library modules only call ``logging.getLogger(__name__)``; the CLI
calls :func:`configure_logging` once to route them to stderr.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "afswalk"
DEFAULT_FORMAT = "afswalk: %(levelname)s: %(message)s"

_handler: logging.Handler | None = None


def verbosity_to_level(debug: int) -> int:
    """Map the number of ``-d`` flags to a logging level.

    Args:
        debug: How many times ``-d`` was given.

    Returns:
        WARNING for 0, INFO for 1, DEBUG for 2 or more.
    """
    if debug <= 0:
        return logging.WARNING
    if debug == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(level: int = logging.WARNING, stream: TextIO | None = None) -> None:
    """Attach a single stderr handler to the afswalk logger.

    Safe to call multiple times; the previous handler is replaced.

    Args:
        level: Logging level for the afswalk namespace.
        stream: Destination stream. Defaults to the current sys.stderr.
    """
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)
