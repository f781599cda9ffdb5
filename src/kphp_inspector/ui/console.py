"""
Rich-based console output utilities.

This module holds the shared console instances and the color theme used by
the printer, the menu and the interactive console.
"""

from typing import Optional

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from kphp_inspector import __version__


custom_theme = Theme(
    {
        "error": "red",
        "header": "underline",
        "label": "bold",
        "type": "magenta",
        "type.var": "red",
        "note": "cyan",
        "dim": "dim",
        "selected": "reverse",
    }
)

console = Console(theme=custom_theme, highlight=False)
console_err = Console(theme=custom_theme, stderr=True, highlight=False)


def print_error(message: str) -> None:
    """Print error message in red.

    Args:
        message: Error message to display
    """
    console_err.print(Text(message, style="error"))


def print_not_found(message: str, target: Optional[Console] = None) -> None:
    """Print an empty search result, which is not an error."""
    (target or console).print(Text(message, style="error"))


def show_version() -> None:
    console.print(f"kphp-inspector v{__version__}")


__all__ = [
    "console",
    "console_err",
    "custom_theme",
    "print_error",
    "print_not_found",
    "show_version",
]
