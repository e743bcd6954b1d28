"""Tetromino definitions and basic behaviour.

The shape table below is literal data: every kind lists its four rotation
states explicitly instead of deriving them with a rotation formula, because
several kinds use hand-placed offsets that a geometric rotation would not
reproduce.  Offsets are ``(dx, dy)`` pairs relative to a piece's anchor and
are always non-negative, with ``dy`` growing downwards.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple

Offset = Tuple[int, int]
RotationState = FrozenSet[Offset]

ROTATIONS = 4

# Side length of the off-playfield grid used to show the upcoming piece.
PREVIEW_SIZE = 4


class PieceKind(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    J = "J"
    L = "L"
    S = "S"
    Z = "Z"


def _states(*rows: Tuple[Offset, ...]) -> Tuple[RotationState, ...]:
    return tuple(frozenset(row) for row in rows)


SHAPE_TABLE: Dict[PieceKind, Tuple[RotationState, ...]] = {
    PieceKind.I: _states(
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((2, 0), (2, 1), (2, 2), (2, 3)),
        ((0, 2), (1, 2), (2, 2), (3, 2)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
    # O looks the same in every rotation; the entries are kept for uniformity.
    PieceKind.O: _states(
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    PieceKind.T: _states(
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 1)),
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 0), (1, 1), (1, 2)),
    ),
    PieceKind.J: _states(
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 0)),
        ((0, 1), (1, 1), (2, 1), (2, 2)),
        ((0, 2), (1, 0), (1, 1), (1, 2)),
    ),
    PieceKind.L: _states(
        ((2, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 2)),
        ((0, 1), (1, 1), (2, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
    ),
    PieceKind.S: _states(
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
        ((1, 1), (2, 1), (0, 2), (1, 2)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
    ),
    PieceKind.Z: _states(
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (1, 2), (2, 2)),
        ((1, 0), (0, 1), (1, 1), (0, 2)),
    ),
}


def occupied_offsets(kind: PieceKind, rotation: int) -> RotationState:
    """Return the four ``(dx, dy)`` offsets of ``kind`` at ``rotation``.

    Raises:
        ValueError: If ``rotation`` is not in ``range(4)``.  Rotation
            arithmetic wraps in :meth:`Piece.rotated`, so an out-of-range
            index here means a caller skipped that step.
    """

    if not 0 <= rotation < ROTATIONS:
        raise ValueError(f"Rotation index out of range: {rotation}")
    return SHAPE_TABLE[kind][rotation]


@dataclass(frozen=True)
class Piece:
    """A tetromino pose: kind, rotation index and anchor ``(x, y)``.

    Pieces are immutable.  Moves and rotations produce candidate poses that
    are only adopted once they have been validated against the board.
    """

    kind: PieceKind
    rotation: int = 0
    anchor: Tuple[int, int] = (0, 0)

    def moved(self, dx: int, dy: int) -> "Piece":
        """Return a copy translated by ``dx`` columns and ``dy`` rows."""

        x, y = self.anchor
        return replace(self, anchor=(x + dx, y + dy))

    def rotated(self, direction: int = 1) -> "Piece":
        """Return a copy rotated in place.

        Positive values rotate clockwise whilst negative values rotate
        counter-clockwise.  Only the sign of ``direction`` matters; the index
        wraps from 3 back to 0.
        """

        step = 1 if direction >= 0 else -1
        return replace(self, rotation=(self.rotation + step) % ROTATIONS)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(x, y)`` coordinates covered by this piece."""

        x, y = self.anchor
        offsets = occupied_offsets(self.kind, self.rotation)
        return sorted((x + dx, y + dy) for dx, dy in offsets)

    def rows(self) -> List[int]:
        """Return the distinct rows covered by this piece, topmost first."""

        return sorted({y for _, y in self.blocks()})


def spawn_rotation(kind: PieceKind) -> int:
    """Return the rotation index a freshly spawned ``kind`` starts with.

    The I piece enters vertically so that it sits flush against the top of
    the playfield; every other kind starts in rotation 0.
    """

    return 1 if kind is PieceKind.I else 0


def preview_piece(kind: PieceKind) -> Piece:
    """Return ``kind`` positioned inside the preview mini-grid."""

    return Piece(kind, spawn_rotation(kind), (0, 0))
