"""Utility helpers for the rule engine."""

from __future__ import annotations

from typing import Iterable, Tuple

from .board import Board, Cell, Grid
from .tetromino import Piece


BASE_GRAVITY_MS = 500


def gravity_interval_ms(level: int) -> float:
    """Return the fall interval in milliseconds for ``level``.

    One gravity tick happens every ``1 / (level + 1)`` of the base interval,
    so higher levels tick faster.
    """

    if level < 0:
        raise ValueError(f"Level must be non-negative, got {level}")
    return BASE_GRAVITY_MS / (level + 1)


def gravity_ticks(accumulated_ms: float, level: int) -> Tuple[int, float]:
    """Split ``accumulated_ms`` into whole gravity ticks and a remainder.

    Front-ends own the millisecond accumulator; they feed the tick count to
    :meth:`GameCore.on_tick` and carry the remainder into the next frame.
    """

    interval = gravity_interval_ms(level)
    ticks = int(accumulated_ms // interval)
    return ticks, accumulated_ms - ticks * interval


def is_legal(board: Board, piece: Piece) -> bool:
    """Return ``True`` if ``piece`` may occupy its pose on ``board``.

    Every block must land inside the allocated grid on a cell that is empty
    or covered by the falling piece itself.  The board is never modified, so
    this is used to vet moves and rotations before they are applied.
    """

    for x, y in piece.blocks():
        if not board.is_open(x, y):
            return False
    return True


_GLYPHS = {
    Cell.EMPTY: ".",
    Cell.BORDER: "|",
    Cell.LOCKED: "#",
    Cell.FALLING: "@",
}


def render_ascii(grid: Grid) -> str:
    """Return ``grid`` as text, one line per row."""

    return "\n".join(
        "".join(_GLYPHS[Cell(int(value))] for value in row) for row in grid
    )


def render_cells(cells: Iterable[Tuple[int, int]], width: int, height: int) -> str:
    """Return a ``width`` by ``height`` text panel with ``cells`` marked."""

    marked = set(cells)
    return "\n".join(
        "".join("@" if (x, y) in marked else "." for x in range(width))
        for y in range(height)
    )
