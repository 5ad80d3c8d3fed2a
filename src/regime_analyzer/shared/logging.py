"""Logging helpers.

All loggers are children of ``regime_analyzer`` so the CLI (or an embedding
application) controls verbosity in one place. Events are short snake_case
names with structured context passed through ``extra``.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_PREFIX = "regime_analyzer"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    if name.startswith(_LOGGER_PREFIX):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a rich handler (on stderr) to the package logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING...)

    Returns:
        The package root logger
    """
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.setLevel(level.upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True, markup=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
