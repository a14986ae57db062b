"""Console helpers shared by all tool CLIs."""

import functools
import sys
from typing import Any, Callable

from rich.console import Console
from rich.text import Text

console = Console(stderr=True, soft_wrap=True, highlight=False)


def _print(symbol: str, style: str, message: str) -> None:
    # Text.assemble keeps the message literal, so brackets in it are not read as markup.
    console.print(Text.assemble((f"{symbol} ", style), message))


def info(message: str) -> None:
    """Print an informational message."""
    _print("ℹ", "bold blue", message)


def success(message: str) -> None:
    """Print a success message."""
    _print("✓", "bold green", message)


def warning(message: str) -> None:
    """Print a warning message."""
    _print("⚠", "bold yellow", message)


def error(message: str) -> None:
    """Print an error message."""
    _print("✗", "bold red", f"Error: {message}")


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorate a command so Ctrl-C exits with status 130 instead of a traceback."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)

        except KeyboardInterrupt:
            error("Interrupted")
            sys.exit(130)

    return wrapper
