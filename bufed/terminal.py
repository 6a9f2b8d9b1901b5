"""Terminal interface using Blessed for display and Curtsies for input."""

import sys
import select
from typing import Optional, TextIO

import blessed

from .screen import Position, Screen, Size


class TerminalInterface:
    """Handles terminal setup, teardown and key input."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None, stream: Optional[TextIO] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.stream = stream or sys.stdout
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and raw key input."""
        self.stream.write(self.term.enter_fullscreen + self.term.clear)
        self.stream.flush()
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            # Entering the Input context puts the tty in raw mode so reads
            # deliver Ctrl-S/Ctrl-Q instead of flow control
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()  # type: ignore

    def cleanup(self):
        """Exit fullscreen mode and restore the terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            self.stream.write(self.term.exit_fullscreen + self.term.normal_cursor)
            self.stream.flush()
            self.is_fullscreen = False

    def move_cursor(self, pos: Position) -> None:
        """Show the hardware cursor at an absolute position."""
        self.stream.write(self.term.move_yx(pos.row, pos.col) + self.term.normal_cursor)

    def get_key(self, timeout=None):
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name such as '<LEFT>' or 'a', or None on timeout
            or end of input.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        try:
            evt = next(self._curtsies_input)  # type: ignore
        except StopIteration:
            return None
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height


class TerminalScreen(Screen):
    """Screen backed by the live terminal.

    Writes are buffered in the output stream until :meth:`flush`.
    """

    def __init__(self, terminal: TerminalInterface):
        self.terminal = terminal

    def put_at(self, text: str, pos: Position) -> None:
        self.check_position(pos)
        term = self.terminal.term
        self.terminal.stream.write(term.move_yx(pos.row, pos.col) + text)

    def flush(self) -> None:
        self.terminal.stream.flush()

    def size(self) -> Size:
        return Size(self.terminal.height, self.terminal.width)
