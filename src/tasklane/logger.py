"""Verbosity-aware logging for tasklane.

The CLI's -v count maps onto two custom levels between the standard ones:
CHANGES for computed layouts and skipped tasks, CHECKS for cache lookups and
grouping fallbacks. Verbosity 3 adds row-by-row packing at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

LOGGER_NAME = "tasklane"

CHANGES_LEVEL = 25  # Between INFO (20) and WARNING (30)
CHECKS_LEVEL = 15  # Between DEBUG (10) and INFO (20)

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3

# Indexed by verbosity
LEVEL_BY_VERBOSITY = (logging.ERROR, CHANGES_LEVEL, CHECKS_LEVEL, logging.DEBUG)


class TasklaneLogger(logging.Logger):
    """Logger with one method per verbosity level.

    - changes(): level 1, layouts computed and tasks skipped
    - checks(): level 2, cache hits/misses and grouping decisions
    - debug(): level 3, per-task packing
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def level_for_verbosity(verbosity: int) -> int:
    """Logging level for a verbosity count; values past 3 mean debug."""
    index = max(VERBOSITY_SILENT, min(verbosity, VERBOSITY_DEBUG))
    return LEVEL_BY_VERBOSITY[index]


def get_logger() -> TasklaneLogger:
    """Get the shared tasklane logger.

    Modules grab it at import time; setup_logger() decides what it emits.
    """
    logging.setLoggerClass(TasklaneLogger)
    logger = logging.getLogger(LOGGER_NAME)
    assert isinstance(logger, TasklaneLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Send tasklane log records at or above a verbosity to a stream.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        verbosity: 0=errors only, 1=changes, 2=checks, 3=debug
        stream: Destination (defaults to sys.stderr; tests pass a StringIO)
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(level_for_verbosity(verbosity))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and return to errors-only, propagating to the root logger."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)
    logger.propagate = True


def changes_enabled() -> bool:
    return get_logger().isEnabledFor(CHANGES_LEVEL)


def checks_enabled() -> bool:
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    """True at verbosity 3; guard expensive debug messages with it."""
    return get_logger().isEnabledFor(logging.DEBUG)
