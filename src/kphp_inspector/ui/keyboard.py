"""Keyboard input handling for the selection menu.

Uses termios/tty on Unix systems to read single keypresses without waiting
for Enter.
"""

from __future__ import annotations

import logging
import os
import select
import sys
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

# Check if we're on a Unix-like system
_IS_UNIX = hasattr(sys.stdin, "fileno") and os.name != "nt"

if _IS_UNIX:
    import termios
    import tty


class Key(Enum):
    """Recognized key codes."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESCAPE = "escape"
    OTHER = "other"


# Escape sequence mappings for arrow keys
_ESCAPE_SEQUENCES = {
    "[A": Key.UP,
    "[B": Key.DOWN,
    "[C": Key.RIGHT,
    "[D": Key.LEFT,
    "OA": Key.UP,
    "OB": Key.DOWN,
    "OC": Key.RIGHT,
    "OD": Key.LEFT,
}

_CHAR_MAPPINGS = {
    "\r": Key.ENTER,
    "\n": Key.ENTER,
}


def decode_key(chars: str) -> Key:
    """Map the characters of one keypress to a Key.

    Args:
        chars: A single character, or ESC followed by its escape sequence

    Returns:
        The recognized key, Key.OTHER for anything else
    """
    if chars.startswith("\x1b"):
        sequence = chars[1:]
        if not sequence:
            return Key.ESCAPE
        return _ESCAPE_SEQUENCES.get(sequence, Key.OTHER)
    return _CHAR_MAPPINGS.get(chars, Key.OTHER)


class KeyboardReader:
    """Keyboard reader for the selection menu.

    Bytes are read straight from the file descriptor: a buffered text stream
    would swallow the tail of an escape sequence, hiding it from select().

    Usage:
        with KeyboardReader() as reader:
            key = reader.read_key()
    """

    def __init__(self, fd: Optional[int] = None) -> None:
        """
        Args:
            fd: Terminal descriptor to read from, stdin by default
        """
        self._fd = fd
        self._old_settings: Optional[list] = None
        self._is_started: bool = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    @property
    def fd(self) -> int:
        return self._fd if self._fd is not None else sys.stdin.fileno()

    def start(self) -> None:
        """Enter cbreak mode to read individual keypresses."""
        if not _IS_UNIX or self._is_started:
            return

        try:
            self._old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
            self._is_started = True
        except (termios.error, OSError, ValueError):
            # Not a TTY
            self._old_settings = None

    def stop(self) -> None:
        """Restore terminal to normal mode."""
        if not _IS_UNIX:
            return

        if self._old_settings is not None:
            try:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self._old_settings)
            except (termios.error, OSError):
                logger.debug("Cannot restore terminal settings", exc_info=True)
            self._old_settings = None
        self._is_started = False

    def read_key(self, timeout: Optional[float] = None) -> Optional[Key]:
        """Read a single keypress.

        Args:
            timeout: Maximum time to wait for input (seconds). None blocks.

        Returns:
            Key enum if a key was pressed, None otherwise.
        """
        if not self._is_started:
            return None

        try:
            ready, _, _ = select.select([self.fd], [], [], timeout)
            if not ready:
                return None

            data = os.read(self.fd, 1)
            if not data:
                return None

            if data == b"\x1b":
                data += self._read_escape_sequence()
            return decode_key(data.decode("utf-8", errors="replace"))

        except OSError:
            return None

    def _read_escape_sequence(self) -> bytes:
        """Read the rest of an escape sequence, empty for a lone ESC."""
        seq = b""
        for _ in range(2):
            ready, _, _ = select.select([self.fd], [], [], 0.05)
            if not ready:
                break
            chunk = os.read(self.fd, 1)
            if not chunk:
                break
            seq += chunk
        return seq

    def __enter__(self) -> KeyboardReader:
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
