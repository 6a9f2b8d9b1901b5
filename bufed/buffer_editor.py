"""Editor controller: key events to buffer edits, and the scrolled view."""

from __future__ import annotations

from typing import Optional

from .buffer import Buffer, BufCursor
from .keyboard import KeyEvent, KeyType
from .screen import Position, Size
from .window import Window


class BufEditor:
    """Edits one Buffer through one window-sized viewport.

    ``editor`` is the editing cursor. ``anchor`` is the buffer coordinate
    shown at the window's top-left cell; it only moves as far as needed to
    keep ``editor`` visible.
    """

    def __init__(self, editor: Optional[BufCursor] = None, anchor: Optional[BufCursor] = None):
        self.editor = editor or BufCursor()
        self.anchor = anchor or BufCursor()

    def handle_key(self, buf: Buffer, size: Size, key: KeyEvent) -> bool:
        """Apply ``key`` to the buffer and cursor, then re-anchor the view.

        Returns:
            True if the buffer was modified
        """
        modified = self._apply_key(buf, key)
        self.update_anchor(size)
        return modified

    def _apply_key(self, buf: Buffer, key: KeyEvent) -> bool:
        cur = self.editor
        if key.key_type == KeyType.REGULAR:
            if len(key.value) != 1 or not key.value.isprintable():
                return False
            buf.insert_at(key.value, cur)
            cur.move_right(buf)
            return True
        if key.key_type != KeyType.SPECIAL:
            return False

        if key.value == 'left':
            cur.move_left(buf)
        elif key.value == 'right':
            cur.move_right(buf)
        elif key.value == 'up':
            cur.move_up(buf)
        elif key.value == 'down':
            cur.move_down(buf)
        elif key.value == 'home':
            cur.move_to_start_of_line(buf)
        elif key.value == 'end':
            cur.move_to_end_of_line(buf)
        elif key.value == 'enter':
            buf.break_line_at(cur)
            cur.move_to_start_of_next_line(buf)
            return True
        elif key.value == 'backspace':
            return self._backspace(buf)
        elif key.value == 'delete':
            return self._delete(buf)
        return False

    def _backspace(self, buf: Buffer) -> bool:
        cur = self.editor
        if cur.col > 0:
            buf.delete_before(cur)
            cur.move_left(buf)
            return True
        if cur.row > 0:
            cur.move_to_end_of_prev_line(buf)
            # From the virtual line there is no line below to join
            if cur.row + 1 < buf.height():
                buf.merge_next_line_up(cur)
                return True
        return False

    def _delete(self, buf: Buffer) -> bool:
        cur = self.editor
        if cur.col < buf.width(cur.row):
            buf.delete_at(cur)
            return True
        if cur.row + 1 < buf.height():
            buf.merge_next_line_up(cur)
            return True
        return False

    def update_anchor(self, size: Size) -> None:
        """Scroll the minimum amount that keeps the editing cursor visible."""
        rows, cols = size
        if rows <= 0 or cols <= 0:
            return
        if self.editor.col < self.anchor.col:
            self.anchor.col = self.editor.col
        elif self.editor.col > self.anchor.col + cols - 1:
            self.anchor.col = self.editor.col - cols + 1
        if self.editor.row < self.anchor.row:
            self.anchor.row = self.editor.row
        elif self.editor.row > self.anchor.row + rows - 1:
            self.anchor.row = self.editor.row - rows + 1

    def place(self, buf: Buffer, size: Size, cursor: BufCursor) -> None:
        """Move the editing cursor to the nearest valid spot to ``cursor``."""
        self.editor = cursor.clamp(buf)
        self.update_anchor(size)

    def line_range(self, buf: Buffer, size: Size) -> range:
        """Buffer rows visible in a window of ``size``."""
        start = self.anchor.row
        end = min(buf.height(), start + size.rows)
        return range(start, max(start, end))

    def char_range(self, buf: Buffer, size: Size, row: int) -> range:
        """Columns of ``row`` visible in a window of ``size``."""
        start = self.anchor.col
        end = min(buf.width(row), start + size.cols)
        return range(start, max(start, end))

    def draw(self, buf: Buffer, win: Window) -> None:
        """Write the visible slice of ``buf`` into ``win``.

        Rows past the end of the buffer are not touched; blank the window
        first to erase stale content.
        """
        for row in self.line_range(buf, win.size):
            cols = self.char_range(buf, win.size, row)
            win.put_at(buf.line(row)[cols.start:cols.stop], Position(row - self.anchor.row, 0))

    def cursor_offset(self) -> Position:
        """Window-local position of the editing cursor."""
        return Position(self.editor.row - self.anchor.row, self.editor.col - self.anchor.col)
