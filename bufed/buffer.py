"""Line buffer and the cursor that addresses it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .errors import ContractViolation


def split_lines(text: str) -> list[str]:
    """Split text into lines with :meth:`str.splitlines`.

    Any line boundary counts, so a lone '\\r' splits a line just as '\\n'
    and '\\r\\n' do. A final line break terminates the last line rather
    than starting an empty one: "a\\nb\\n" and "a\\nb" both give ["a", "b"].
    """
    return text.splitlines()


def has_line_break(text: str) -> bool:
    """True if ``text`` contains any character that ends a line."""
    return text.splitlines(keepends=True) != text.splitlines()


@dataclass
class BufCursor:
    """A (row, col) address into a Buffer.

    A cursor is valid at ``row <= buf.height()`` and ``col <= buf.width(row)``.
    ``col == width`` means "after the last character" and ``row == height``
    is the virtual empty line past the end of the buffer.

    Vertical moves clamp the column to the destination line; there is no
    remembered preferred column.
    """
    row: int = 0
    col: int = 0

    @classmethod
    def at(cls, row: int, col: int) -> "BufCursor":
        return cls(row=row, col=col)

    def move_right(self, buf: "Buffer") -> None:
        if self.row < buf.height():
            if self.col < buf.width(self.row):
                self.col += 1
            else:
                # Wrap to start of next line
                self.row += 1
                self.col = 0

    def move_left(self, buf: "Buffer") -> None:
        if self.col > 0:
            self.col -= 1
        elif self.row > 0:
            self.row -= 1
            self.col = buf.width(self.row)

    def move_up(self, buf: "Buffer") -> None:
        if self.row > 0:
            self.row -= 1
        self._trim_to_end_of_line(buf)

    def move_down(self, buf: "Buffer") -> None:
        if self.row < buf.height():
            self.row += 1
        self._trim_to_end_of_line(buf)

    def _trim_to_end_of_line(self, buf: "Buffer") -> None:
        width = buf.width(self.row)
        if self.col > width:
            self.col = width

    def move_to_start_of_line(self, buf: "Buffer") -> None:
        del buf  # Unused; kept for a uniform movement signature
        self.col = 0

    def move_to_end_of_line(self, buf: "Buffer") -> None:
        self.col = buf.width(self.row)

    def move_to_end_of_prev_line(self, buf: "Buffer") -> None:
        self.move_up(buf)
        self.move_to_end_of_line(buf)

    def move_to_start_of_next_line(self, buf: "Buffer") -> None:
        self.move_down(buf)
        self.move_to_start_of_line(buf)

    def clamp(self, buf: "Buffer") -> "BufCursor":
        """Return the nearest valid cursor for this (row, col) in ``buf``.

        Negative coordinates clamp to zero, rows past the end clamp to the
        virtual line, and columns clamp to the width of the chosen row.
        """
        row = min(max(self.row, 0), buf.height())
        col = min(max(self.col, 0), buf.width(row))
        return BufCursor(row, col)


class Buffer:
    """Ordered lines of text being edited.

    Every mutation is addressed by a BufCursor and checks it first; a
    cursor outside the documented range raises ContractViolation.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: list[str] = list(lines) if lines is not None else []
        for line in self._lines:
            if has_line_break(line):
                raise ContractViolation("buffer lines must not contain line breaks")

    @classmethod
    def from_text(cls, text: str) -> "Buffer":
        """Build a buffer from text, one line per line break.

        A trailing newline does not produce an extra empty line.
        """
        return cls(split_lines(text))

    def __repr__(self):
        return f"Buffer({self._lines!r})"

    def lines(self) -> list[str]:
        """Return a copy of all lines, in order."""
        return list(self._lines)

    def height(self) -> int:
        return len(self._lines)

    def width(self, row: int) -> int:
        """Length of line ``row``; the virtual line at ``height()`` is 0 wide."""
        if row == self.height():
            return 0
        if row > self.height() or row < 0:
            raise ContractViolation("tried to get width past last row of buffer")
        return len(self._lines[row])

    def line(self, row: int) -> str:
        if row >= self.height() or row < 0:
            raise ContractViolation("tried to get line past last row of buffer")
        return self._lines[row]

    def char(self, cur: BufCursor) -> str:
        if cur.row >= self.height():
            raise ContractViolation("tried to get char past last row of buffer")
        if cur.col >= self.width(cur.row) or cur.col < 0:
            raise ContractViolation("tried to get char past last char of line")
        return self._lines[cur.row][cur.col]

    def insert_at(self, ch: str, cur: BufCursor) -> None:
        """Insert ``ch`` before ``cur.col`` on line ``cur.row``.

        Inserting on the virtual line appends a new line first. The cursor
        is not moved.
        """
        if len(ch) != 1 or has_line_break(ch):
            raise ContractViolation("tried to insert something other than one character")
        if cur.row > self.height():
            raise ContractViolation("tried to insert past last line of buffer")
        if cur.col > self.width(cur.row) or cur.col < 0:
            raise ContractViolation("tried to insert past end of line")
        if cur.row == self.height():
            self._lines.append("")
        line = self._lines[cur.row]
        self._lines[cur.row] = line[:cur.col] + ch + line[cur.col:]

    def delete_before(self, cur: BufCursor) -> None:
        """Remove the character just before the cursor."""
        if cur.col <= 0:
            raise ContractViolation("tried to delete before beginning of line")
        if cur.row >= self.height():
            raise ContractViolation("tried to delete past last row of buffer")
        if cur.col > self.width(cur.row):
            raise ContractViolation("tried to delete past end of line")
        line = self._lines[cur.row]
        self._lines[cur.row] = line[:cur.col - 1] + line[cur.col:]

    def delete_at(self, cur: BufCursor) -> None:
        """Remove the character under the cursor."""
        if cur.row >= self.height():
            raise ContractViolation("tried to delete after end of buffer")
        if cur.col >= self.width(cur.row) or cur.col < 0:
            raise ContractViolation("tried to delete after end of line")
        line = self._lines[cur.row]
        self._lines[cur.row] = line[:cur.col] + line[cur.col + 1:]

    def merge_next_line_up(self, cur: BufCursor) -> None:
        """Append line ``cur.row + 1`` to line ``cur.row`` and remove it."""
        if cur.row + 1 >= self.height() or cur.row < 0:
            raise ContractViolation("tried to merge line from past end of buffer")
        line = self._lines.pop(cur.row + 1)
        self._lines[cur.row] += line

    def break_line_at(self, cur: BufCursor) -> None:
        """Split line ``cur.row`` at ``cur.col``.

        The prefix stays on ``cur.row`` and the suffix becomes the next
        line. Breaking on the virtual line appends one empty line.
        """
        if cur.row > self.height():
            raise ContractViolation("tried to break line past last row of buffer")
        if cur.col > self.width(cur.row) or cur.col < 0:
            raise ContractViolation("tried to break line past end of line")
        if cur.row == self.height():
            self._lines.append("")
            return
        line = self._lines[cur.row]
        self._lines[cur.row] = line[:cur.col]
        self._lines.insert(cur.row + 1, line[cur.col:])
