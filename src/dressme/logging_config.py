"""Logging setup for the command-line application."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LogLevel


def setup_logging(level: str = "warning", console: Console | None = None) -> None:
    """Route the ``dressme`` loggers through a Rich handler.

    Args:
        level: Level name (debug, info, warning, error); unknown names mean warning
        console: Console to write to (default: stderr)
    """
    numeric_level = LogLevel.from_string(level)

    logger = logging.getLogger("dressme")
    logger.setLevel(numeric_level)

    # Avoid duplicate handlers
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        log_time_format="%H:%M:%S",
    )
    handler.setLevel(numeric_level)
    logger.addHandler(handler)
    logger.propagate = False
