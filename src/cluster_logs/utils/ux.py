"""User experience utilities for the cluster logs CLI."""

import logging
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Define a custom theme for consistent styling
CUSTOM_THEME = Theme(
    {
        "warning": "bold yellow",
        "error": "bold red",
    }
)

# Status messages go to stderr so they never mix with log output on stdout
console = Console(theme=CUSTOM_THEME, stderr=True)

logger = logging.getLogger("cluster-logs")


def print_warning(
    message: str,
    *args: Any,
    log: bool = True,
    console_output: bool = True,
    **kwargs: Any,
) -> None:
    """Print a warning message."""
    if console_output:
        console.print(f"[warning]WARNING:[/warning] {escape(message)}", *args, **kwargs)
    if log:
        logger.warning(message)


def print_error(
    message: str,
    *args: Any,
    log: bool = True,
    console_output: bool = True,
    **kwargs: Any,
) -> None:
    """Print an error message."""
    if console_output:
        console.print(f"[error]ERROR:[/error] {escape(message)}", *args, **kwargs)
    if log:
        logger.error(message, exc_info=True)
