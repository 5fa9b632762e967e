"""Diagnostic logging setup for the checkfile CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "checkfile"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr ``RichHandler`` to the package logger.

    Calling this again replaces the handler installed by a previous call.

    Args:
        level: Logging level name such as ``"DEBUG"``.

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger


__all__ = ["PACKAGE_LOGGER", "setup_logging"]
