"""Logging setup shared by all tools."""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

# Logs go to stderr so stdout only carries tool output.
_console = Console(stderr=True, soft_wrap=True)


def setup_logger(name: str, level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Configure a logger with a rich handler.

    Calling it again for the same name replaces the previous handler.

    Args:
        name: Logger name (usually a package name, so module loggers inherit it)
        level: Logging level name or number

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
