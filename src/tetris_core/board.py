"""Board representation for the playfield."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List

import numpy as np
from numpy.typing import NDArray

from .tetromino import Piece


# Dimensions of the visible playfield.
WIDTH = 10
HEIGHT = 20

# Border cells surrounding the playfield on every side.  Shape offsets are
# never negative, so a margin of two keeps every anchor a piece can reach
# inside the allocated array.
MARGIN = 2

Grid = NDArray[np.uint8]


class Cell(IntEnum):
    """Content of a single grid cell."""

    EMPTY = 0
    BORDER = 1
    LOCKED = 2
    FALLING = 3


def create_empty_grid() -> Grid:
    """Return a new grid with an empty playfield framed by border cells."""

    grid = np.full(
        (HEIGHT + 2 * MARGIN, WIDTH + 2 * MARGIN), Cell.BORDER, dtype=np.uint8
    )
    grid[MARGIN:MARGIN + HEIGHT, MARGIN:MARGIN + WIDTH] = Cell.EMPTY
    return grid


class Board:
    """Playfield grid holding border, locked and falling cells.

    Coordinates are absolute grid coordinates ``(x, y)`` with ``y`` growing
    downwards.  The visible area spans ``MARGIN <= x < MARGIN + WIDTH`` and
    ``MARGIN <= y < MARGIN + HEIGHT``.
    """

    width: int = WIDTH
    height: int = HEIGHT
    margin: int = MARGIN

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    @property
    def left(self) -> int:
        return self.margin

    @property
    def top(self) -> int:
        return self.margin

    @property
    def bottom(self) -> int:
        """Grid row index of the lowest visible row."""
        return self.margin + self.height - 1

    def is_inside(self, x: int, y: int) -> bool:
        """Return ``True`` if ``(x, y)`` lies within the allocated grid."""

        rows, cols = self.grid.shape
        return 0 <= x < cols and 0 <= y < rows

    def is_visible(self, x: int, y: int) -> bool:
        return (
            self.left <= x < self.left + self.width
            and self.top <= y < self.top + self.height
        )

    def get_cell(self, x: int, y: int) -> Cell:
        """Safely return the cell at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """
        if self.is_inside(x, y):
            return Cell(int(self.grid[y, x]))
        raise IndexError("Cell out of bounds")

    def set_cell(self, x: int, y: int, value: Cell) -> None:
        """Safely set the cell at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """
        if self.is_inside(x, y):
            self.grid[y, x] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_open(self, x: int, y: int) -> bool:
        """Return ``True`` if a piece may occupy ``(x, y)``.

        Falling cells count as open: the only falling material on the board
        is the active piece, and it must not block its own next pose.  Any
        coordinates outside the grid are treated as occupied.
        """

        if not self.is_inside(x, y):
            return False
        return int(self.grid[y, x]) in (Cell.EMPTY, Cell.FALLING)

    def draw(self, piece: Piece, value: Cell = Cell.FALLING) -> None:
        """Write ``value`` into every cell covered by ``piece``."""

        for x, y in piece.blocks():
            self.set_cell(x, y, value)

    def erase(self, piece: Piece) -> None:
        """Clear the footprint of ``piece`` back to empty."""

        self.draw(piece, Cell.EMPTY)

    def lock_piece(self, piece: Piece) -> None:
        """Lock the piece's blocks into the board grid."""

        self.draw(piece, Cell.LOCKED)

    def visible(self) -> Grid:
        """Return a copy of the visible playfield indexed ``[y, x]``."""

        return self.grid[
            self.top:self.top + self.height, self.left:self.left + self.width
        ].copy()

    def count(self, value: Cell) -> int:
        """Return how many visible cells hold ``value``."""

        return int(np.count_nonzero(self.visible() == value))

    def is_row_full(self, y: int) -> bool:
        """Return ``True`` if every visible cell of grid row ``y`` is locked."""

        row = self.grid[y, self.left:self.left + self.width]
        return bool(np.all(row == Cell.LOCKED))

    def full_rows(self, rows: Iterable[int]) -> List[int]:
        """Return the visible rows among ``rows`` that are full, in order."""

        return [
            y
            for y in rows
            if self.top <= y <= self.bottom and self.is_row_full(y)
        ]

    def collapse_full_rows(self) -> int:
        """Remove full rows and compact the rows above them downwards.

        Rows are walked from the bottom up with a write cursor.  Full rows are
        skipped; every other row is copied to the cursor, which then moves up
        by one.  Everything above the final cursor position becomes empty.
        Returns the number of rows removed.
        """

        cols = slice(self.left, self.left + self.width)
        write = self.bottom
        cleared = 0
        for read in range(self.bottom, self.top - 1, -1):
            if self.is_row_full(read):
                cleared += 1
                continue
            if write != read:
                self.grid[write, cols] = self.grid[read, cols]
            write -= 1
        if write >= self.top:
            self.grid[self.top:write + 1, cols] = Cell.EMPTY
        return cleared
