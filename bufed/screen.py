"""Absolute character-grid screens.

A Screen is the only thing bufed draws on. The live implementation lives
in :mod:`bufed.terminal`; :class:`RecordingScreen` records calls instead of
drawing and backs the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from .errors import ContractViolation


class Position(NamedTuple):
    row: int
    col: int

    def __add__(self, other):
        return Position(self.row + other.row, self.col + other.col)


class Size(NamedTuple):
    rows: int
    cols: int

    def contains(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols


class Screen(ABC):
    """Capability for writing text at absolute screen coordinates."""

    @abstractmethod
    def put_at(self, text: str, pos: Position) -> None:
        """Write ``text`` starting at ``pos``.

        Raises:
            ContractViolation: ``pos`` is outside the current size.
            OSError: the underlying device failed.
        """

    @abstractmethod
    def flush(self) -> None:
        """Push pending output to the device."""

    @abstractmethod
    def size(self) -> Size:
        """Current size. It may change between calls, so never cache it."""

    def check_position(self, pos: Position) -> None:
        if not self.size().contains(pos):
            raise ContractViolation(f"tried to put at {pos} outside screen")


@dataclass
class PutAtCall:
    text: str
    position: Position


@dataclass
class RecordingScreen(Screen):
    """Screen double that records writes and keeps a character grid.

    The size can be changed between calls to simulate a terminal resize.
    """
    rows: int = 24
    cols: int = 80
    calls: List[PutAtCall] = field(default_factory=list)
    flushes: int = 0
    _grid: Optional[List[List[str]]] = field(default=None, init=False, repr=False)

    def put_at(self, text: str, pos: Position) -> None:
        self.check_position(pos)
        self.calls.append(PutAtCall(text, Position(*pos)))
        row = self._rows_grid()[pos.row]
        for i, ch in enumerate(text):
            if pos.col + i >= self.cols:
                break
            row[pos.col + i] = ch

    def flush(self) -> None:
        self.flushes += 1

    def size(self) -> Size:
        return Size(self.rows, self.cols)

    def resize(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self._grid = None

    def clear_calls(self) -> None:
        self.calls.clear()

    def text(self) -> List[str]:
        """Rows of the recorded grid, trailing blanks stripped."""
        return [''.join(row).rstrip() for row in self._rows_grid()]

    def _rows_grid(self) -> List[List[str]]:
        if self._grid is None:
            self._grid = [[' '] * self.cols for _ in range(self.rows)]
        return self._grid
