"""Rectangular windows over a Screen.

A WindowManager keeps the rectangles claimed on one Screen and hands out
opaque handles. Borrowing a handle yields a Window for the duration of a
``with`` block; only one Window per manager may be borrowed at a time, so
two windows never interleave writes to the same screen.

Example::

    wm = WindowManager(screen)
    text = wm.create(Size(rows - 1, cols))
    with wm.borrow(text) as win:
        win.blank()
        win.put_at("hello", Position(0, 0))
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, NamedTuple

from .errors import ContractViolation
from .screen import Position, Screen, Size


class WindowHandle(NamedTuple):
    """Opaque reference to a rectangle claimed on a WindowManager."""
    index: int
    generation: int


class Region(NamedTuple):
    position: Position
    size: Size


class Window:
    """A borrowed rectangle with its own local coordinates."""

    def __init__(self, screen: Screen, region: Region):
        self._screen = screen
        self.position = region.position
        self.size = region.size
        self._released = False

    @property
    def rows(self) -> int:
        return self.size.rows

    @property
    def cols(self) -> int:
        return self.size.cols

    def put_at(self, text: str, pos: Position) -> None:
        """Write ``text`` at window-local ``pos``.

        Bounds are checked by the screen against its real size, so a window
        that claims more cells than the terminal currently has fails only
        when a write actually lands outside the terminal.
        """
        self._check_borrowed()
        self._screen.put_at(text, self.position + Position(*pos))

    def blank(self) -> None:
        """Fill every cell of the window with a space, row by row."""
        for row in range(self.size.rows):
            for col in range(self.size.cols):
                self.put_at(" ", Position(row, col))

    def _check_borrowed(self) -> None:
        if self._released:
            raise ContractViolation("tried to use a window after its borrow ended")


class WindowManager:
    """Registry of rectangles claimed on one Screen."""

    def __init__(self, screen: Screen):
        self._screen = screen
        self._regions: list[Region] = []
        self._generation = 0
        self._borrowed = False

    @property
    def screen(self) -> Screen:
        return self._screen

    def create(self, size: Size, position: Position = Position(0, 0)) -> WindowHandle:
        """Claim a rectangle of ``size`` with its top-left cell at ``position``."""
        self._regions.append(Region(Position(*position), Size(*size)))
        return WindowHandle(len(self._regions) - 1, self._generation)

    def create_full(self) -> WindowHandle:
        """Claim a rectangle covering the whole screen at its current size."""
        return self.create(self._screen.size())

    def reset(self) -> None:
        """Drop every claim; handles created before this become invalid."""
        if self._borrowed:
            raise ContractViolation("tried to reset windows while one is borrowed")
        self._regions.clear()
        self._generation += 1

    def region(self, handle: WindowHandle) -> Region:
        if handle.generation != self._generation or not 0 <= handle.index < len(self._regions):
            raise ContractViolation(f"unknown window handle {handle}")
        return self._regions[handle.index]

    def size_of(self, handle: WindowHandle) -> Size:
        return self.region(handle).size

    @contextmanager
    def borrow(self, handle: WindowHandle) -> Iterator[Window]:
        """Resolve ``handle`` into a Window for the duration of a ``with`` block."""
        region = self.region(handle)
        if self._borrowed:
            raise ContractViolation("tried to borrow a window while another is borrowed")
        self._borrowed = True
        window = Window(self._screen, region)
        try:
            yield window
        finally:
            window._released = True
            self._borrowed = False
