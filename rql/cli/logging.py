"""Logging setup for the command line.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves; the CLI attaches them to the ``rql`` logger
for the duration of a command.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "rql"

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class LoggingState:
    level: int
    handlers: list[logging.Handler]


def level_for_verbosity(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(*, verbosity: int, log_file: Path | None = None) -> LoggingState:
    """Attach stderr (and optional file) handlers; return the previous state."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    previous = LoggingState(level=logger.level, handlers=list(logger.handlers))

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True, force_terminal=False),
            show_time=False,
            show_path=False,
        )
    ]
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logger.handlers = handlers
    logger.setLevel(level_for_verbosity(verbosity))
    return previous


def restore_logging(previous: LoggingState) -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers:
        if handler not in previous.handlers:
            handler.close()
    logger.handlers = previous.handlers
    logger.setLevel(previous.level)
