"""Logging setup for the imgops CLI.

Two levels are resolved from the command line: one for the root logger
(CLI progress and errors) and one for the ``imageops`` package, which logs
each pipeline step, edge counts and codec details at DEBUG. A single ``-v``
opens only the ``imageops`` logger, so per-step output appears without
debug noise from anything else.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable

IMAGEOPS_LOGGER = "imageops"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LOG_LEVEL_CHOICES: Iterable[str] = tuple(LOG_LEVELS.keys())

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def add_logging_args(parser) -> None:
    """Add --log-level, -v and -q to an argparse parser."""
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        help="Set one level for all output (overrides -v/-q)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="-v logs each pipeline step, -vv enables all debug output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="-q shows warnings and errors, -qq errors only",
    )


def resolve_log_levels(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> tuple[int, int]:
    """Return ``(root_level, imageops_level)``.

    Examples:
        >>> resolve_log_levels(verbose=1)
        (20, 10)
        >>> resolve_log_levels("error", verbose=2)
        (40, 40)
    """
    if log_level:
        level = LOG_LEVELS[log_level.lower()]
        return level, level

    offset = verbose - quiet
    if offset >= 2:
        return logging.DEBUG, logging.DEBUG
    if offset == 1:
        return logging.INFO, logging.DEBUG
    if offset == 0:
        return logging.INFO, logging.INFO
    if offset == -1:
        return logging.WARNING, logging.WARNING
    return logging.ERROR, logging.ERROR


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Configure the root and ``imageops`` loggers and return the root level.

    Root handlers are set to the lower of the two levels so records the
    ``imageops`` logger lets through are not dropped on output. Calling this
    again only adjusts levels on the existing handlers.
    """
    root_level, library_level = resolve_log_levels(log_level, verbose, quiet)
    handler_level = min(root_level, library_level)
    root_logger = logging.getLogger()

    if root_logger.handlers:
        root_logger.setLevel(root_level)
        for handler in root_logger.handlers:
            handler.setLevel(handler_level)
    else:
        logging.basicConfig(
            level=root_level,
            format=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            stream=sys.stderr,
        )
        for handler in root_logger.handlers:
            handler.setLevel(handler_level)

    logging.getLogger(IMAGEOPS_LOGGER).setLevel(library_level)
    return root_level
