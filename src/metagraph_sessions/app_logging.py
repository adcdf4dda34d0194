"""Logging configuration helpers."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "metagraph_sessions"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stderr Rich handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if logger.handlers:
        return logger
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
