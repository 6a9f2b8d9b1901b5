"""Main editor controller: the session loop around one buffer."""

import errno
import logging
from typing import Iterable, Optional

from .buffer import Buffer
from .buffer_editor import BufEditor
from .commands import CommandRegistry
from .constants import EditorConstants
from .fileio import read_lines, write_lines
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .screen import Position, Screen, Size
from .settings_persistence import SettingsPersistence, get_persistence
from .terminal import TerminalInterface, TerminalScreen
from .window import WindowManager

logger = logging.getLogger(__name__)


class Editor:
    """Line editor application controller.

    The screen is split into a text window (every row but the last) and a
    one-row status window. Layout is recomputed from the screen's current
    size before every key and every frame, so a resized terminal is picked
    up on the next event.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 screen: Optional[Screen] = None,
                 persistence: Optional[SettingsPersistence] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.screen = screen or TerminalScreen(self.terminal)
        self.windows = WindowManager(self.screen)
        self.persistence = persistence or get_persistence()
        self.buffer = Buffer()
        self.buf_editor = BufEditor()
        self.command_registry = CommandRegistry()
        self.running = False
        # File handling
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None  # None, 'save_filename', 'save_filename_quit' or 'quit_confirm'
        self.prompt_input = ""
        self._text_window = None
        self._status_window = None

    def run(self, events: Optional[Iterable[KeyEvent]] = None):
        """Run the main editor loop until quit or end of input.

        Args:
            events: Key events to process; defaults to the keyboard.
        """
        self.terminal.setup()
        self.running = True
        try:
            self._draw()
            for key_event in (self.keyboard.events() if events is None else events):
                self.handle_key_event(key_event)
                if not self.running:
                    break
                self._draw()
        finally:
            self.running = False
            self.terminal.cleanup()

    def _layout(self) -> Size:
        """Claim the text and status windows for the current screen size."""
        rows, cols = self.screen.size()
        status_rows = min(rows, EditorConstants.STATUS_LINE_HEIGHT)
        text_rows = rows - status_rows
        self.windows.reset()
        self._text_window = self.windows.create(Size(text_rows, cols))
        self._status_window = self.windows.create(Size(status_rows, cols), Position(text_rows, 0))
        return Size(text_rows, cols)

    def _draw(self):
        """Draw the current editor state to the screen."""
        # Every write in this frame is bounded by the size read here. If the
        # terminal shrinks before the frame is done, put_at raises
        # ContractViolation and the session ends.
        text_size = self._layout()
        # The screen may have shrunk since the last key
        self.buf_editor.update_anchor(text_size)
        with self.windows.borrow(self._text_window) as win:
            win.blank()
            self.buf_editor.draw(self.buffer, win)
            text_origin = win.position
        with self.windows.borrow(self._status_window) as win:
            status = self._status_text(win.cols)
            if win.rows > 0 and status:
                win.put_at(status, Position(0, 0))
            status_origin = win.position
            status_rows = win.rows

        if self.prompt_mode and status_rows > 0:
            col = min(len(self._prompt_text()), max(0, text_size.cols - 1))
            self.terminal.move_cursor(status_origin + Position(0, col))
        elif text_size.rows > 0 and text_size.cols > 0:
            self.terminal.move_cursor(text_origin + self.buf_editor.cursor_offset())
        self.screen.flush()

    def _prompt_text(self) -> str:
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            return EditorConstants.SAVE_PROMPT.format(self.prompt_input)
        if self.prompt_mode == 'quit_confirm':
            return EditorConstants.QUIT_CONFIRM_PROMPT
        return ""

    def _status_text(self, cols: int) -> str:
        """Status line text, padded to one less than the screen width.

        The last column is left alone so the terminal never scrolls.
        """
        width = max(0, cols - 1)
        if self.prompt_mode:
            return self._prompt_text()[:width].ljust(width)
        if self.status_message:
            return self.status_message[:width].ljust(width)
        name = self.filename or EditorConstants.UNNAMED_BUFFER
        left = f"{name}{' [+]' if self.modified else ''}"
        cur = self.buf_editor.editor
        right = f"{cur.row + 1}:{cur.col + 1}"
        hint = EditorConstants.HELP_HINT
        if len(left) + len(hint) + len(right) + 4 <= width:
            right = f"{hint}  {right}"
        gap = max(1, width - len(left) - len(right))
        return (left + " " * gap + right)[:width]

    def handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Clear status message on any keypress (except in prompt mode)
        if self.status_message and not self.prompt_mode:
            self.status_message = None

        if self._handle_prompt_mode(key_event):
            return

        if key_event.is_special('escape'):
            return

        if self.command_registry.execute(self, key_event):
            return

        size = self._layout()
        if self.buf_editor.handle_key(self.buffer, size, key_event):
            self.modified = True

    def _handle_prompt_mode(self, key_event: KeyEvent) -> bool:
        """Handle input in prompt mode.

        Returns:
            True if in prompt mode and event was handled
        """
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            self._handle_filename_prompt(key_event)
            return True
        elif self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return True
        return False

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file starts an empty buffer under that name; any other
        read error propagates.
        """
        lines = read_lines(filename)
        self.filename = filename
        self.buffer = Buffer(lines)
        self.buf_editor = BufEditor()
        self.modified = False
        remembered = self.persistence.load_cursor(filename)
        if remembered is not None:
            self.buf_editor.place(self.buffer, self._layout(), remembered)

    def save_file(self, filename: str) -> bool:
        """Save the buffer to a file atomically.

        Returns:
            True if save succeeded, False otherwise (see status_message)
        """
        try:
            write_lines(filename, self.buffer.lines())
        except PermissionError as e:
            logger.warning("Could not save %s: %s", filename, e)
            self.status_message = f"Error: Permission denied saving {filename}"
            return False
        except OSError as e:
            logger.warning("Could not save %s: %s", filename, e)
            if e.errno == errno.ENOSPC:
                self.status_message = "Error: No space left on device"
            else:
                self.status_message = f"Error: Cannot save to {filename}"
            return False
        self.filename = filename
        self.modified = False
        self._remember_cursor()
        return True

    def _remember_cursor(self):
        if self.filename:
            self.persistence.save_cursor(self.filename, self.buf_editor.editor)

    def handle_save(self):
        """Handle Ctrl-S save command."""
        if self.filename:
            if self.save_file(self.filename):
                self.status_message = EditorConstants.SAVED_MESSAGE.format(self.filename)
        else:
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""

    def handle_quit(self):
        """Handle Ctrl-Q quit command; asks first if there are unsaved changes."""
        if self.modified:
            self.prompt_mode = 'quit_confirm'
        else:
            self._remember_cursor()
            self.running = False

    def _handle_filename_prompt(self, key_event):
        """Handle keypress during filename prompt."""
        if key_event.is_special('escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.prompt_mode = None
            self.prompt_input = ""
        elif key_event.is_special('enter'):
            if self.prompt_input:
                quitting = self.prompt_mode == 'save_filename_quit'
                self.prompt_mode = None
                if self.save_file(self.prompt_input):
                    self.status_message = EditorConstants.SAVED_MESSAGE.format(self.prompt_input)
                    if quitting:
                        self.running = False
                self.prompt_input = ""
        elif key_event.is_special('backspace'):
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR and key_event.value.isprintable():
            self.prompt_input += key_event.value

    def _handle_quit_confirm(self, key_event):
        """Handle keypress during quit confirmation."""
        self.prompt_mode = None
        if key_event.key_type != KeyType.REGULAR:
            return
        char = key_event.value.lower()
        if char == 'y':
            if self.filename:
                if self.save_file(self.filename):
                    self.running = False
            else:
                self.prompt_mode = 'save_filename_quit'
                self.prompt_input = ""
        elif char == 'n':
            self._remember_cursor()
            self.running = False
