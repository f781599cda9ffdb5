"""
Interactive selection menu.

Shown when a query matches many functions or classes: up/left and down/right
move the highlighted line, Enter chooses it, any other key cancels. The menu
is a small state machine (idle or open) whose transitions do not touch the
terminal; rendering and keyboard reading are separate steps.
"""

from enum import Enum
from typing import List, Optional
import logging

from rich.console import Console
from rich.live import Live
from rich.text import Text

from .console import console as default_console
from .keyboard import Key, KeyboardReader


logger = logging.getLogger(__name__)


class MenuState(Enum):
    """States of the selection menu."""
    IDLE = "idle"
    MENU_OPEN = "menu_open"


KEY_MOVES = {
    Key.UP: -1,
    Key.LEFT: -1,
    Key.DOWN: 1,
    Key.RIGHT: 1,
}


def next_active_index(active: int, delta: int, count: int) -> int:
    """
    Move the highlighted line, wrapping around at both ends.

    Args:
        active: Currently highlighted index
        delta: -1 to move up, 1 to move down
        count: Number of menu items

    Returns:
        New highlighted index
    """
    return (active + delta + count) % count


class SelectionMenu:
    """
    Selection state of one menu.

    Attributes:
        state: Whether the menu is open
        labels: Menu items
        active: Highlighted index
        result: Chosen index after closing, None when cancelled
    """

    def __init__(self):
        self.state = MenuState.IDLE
        self.labels: List[str] = []
        self.active = 0
        self.result: Optional[int] = None

    def open(self, labels: List[str]) -> None:
        """
        Open the menu with the given items.

        Raises:
            RuntimeError: If the menu is already open or there is nothing to choose
        """
        if self.state == MenuState.MENU_OPEN:
            raise RuntimeError("Selection menu is already open")
        if not labels:
            raise RuntimeError("Selection menu needs at least one item")

        self.labels = list(labels)
        self.active = 0
        self.result = None
        self.state = MenuState.MENU_OPEN

    def handle_key(self, key: Key) -> bool:
        """
        Apply a keypress.

        Args:
            key: Pressed key

        Returns:
            True if the key closed the menu
        """
        if self.state != MenuState.MENU_OPEN:
            return True

        if key in KEY_MOVES:
            self.active = next_active_index(self.active, KEY_MOVES[key], len(self.labels))
            return False

        self.result = self.active if key == Key.ENTER else None
        self.state = MenuState.IDLE
        return True

    def render(self) -> Text:
        """Render menu items, the highlighted one in reverse video."""
        text = Text()
        for i, label in enumerate(self.labels):
            if i:
                text.append("\n")
            text.append(label, style="selected" if i == self.active else "")
        return text


def choose_interactively(labels: List[str], console: Optional[Console] = None,
                         reader: Optional[KeyboardReader] = None) -> Optional[int]:
    """
    Show a menu and wait until the user chooses an item or cancels.

    The menu disappears from the screen once closed.

    Args:
        labels: Menu items
        console: Console to draw on
        reader: Keyboard reader, a new one by default

    Returns:
        Chosen index, or None if cancelled or the terminal cannot read keys
    """
    console = console or default_console
    reader = reader or KeyboardReader()
    menu = SelectionMenu()
    menu.open(labels)

    with reader:
        if not reader.is_started:
            logger.warning("Terminal does not support interactive selection")
            return None

        with Live(menu.render(), console=console, auto_refresh=False, transient=True) as live:
            while True:
                # None means stdin was closed: cancel like any other key
                key = reader.read_key() or Key.OTHER
                if menu.handle_key(key):
                    break
                live.update(menu.render(), refresh=True)

    return menu.result
