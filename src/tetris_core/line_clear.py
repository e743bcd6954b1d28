"""Locking settled pieces, detecting full rows and spawning the next piece.

These routines receive the board from :class:`~tetris_core.game_state.GameCore`
and mutate it directly; they never hold on to it between calls.  Spawning
does not draw the new piece: the caller paints the falling footprint once it
has adopted the returned pose.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging

from .board import MARGIN, WIDTH, Board
from .events import BoardState
from .randomizer import BagRandomizer
from .tetromino import Piece, PieceKind, preview_piece, spawn_rotation
from .utils import is_legal

LOGGER = logging.getLogger(__name__)

SPAWN_ANCHOR = (MARGIN + WIDTH // 2 - 2, MARGIN)


def spawn_piece(kind: PieceKind) -> Piece:
    """Return ``kind`` at its spawn pose near the top centre of the board."""

    return Piece(kind, spawn_rotation(kind), SPAWN_ANCHOR)


@dataclass(frozen=True)
class Resolution:
    """Outcome of locking a piece or resolving a clear."""

    state: BoardState
    active: Optional[Piece]
    preview: Piece
    full_rows: int = 0


def spawn_next(board: Board, queue: BagRandomizer) -> Resolution:
    """Deal the next piece and report whether it fits at its spawn pose."""

    active = spawn_piece(queue.next())
    preview = preview_piece(queue.peek())
    if not is_legal(board, active):
        LOGGER.info("No room to spawn %s piece; game over", active.kind.value)
        return Resolution(BoardState.OVER, active, preview)
    LOGGER.debug("Spawned %s piece, next is %s", active.kind.value, preview.kind.value)
    return Resolution(BoardState.MOVING, active, preview)


def lock_and_resolve(board: Board, piece: Piece, queue: BagRandomizer) -> Resolution:
    """Lock ``piece`` into ``board`` and decide what happens next.

    The caller has already established that the piece cannot descend any
    further, so no legality check is made here.  Only the rows the piece
    covers can have become full; they are scanned from the top down.  When
    any of them is full the board enters the clearing phase and no piece is
    spawned until the collapse has run.
    """

    board.lock_piece(piece)
    full = board.full_rows(piece.rows())
    if full:
        visible = [y - board.top for y in full]
        LOGGER.debug("Full rows at %s; clearing", visible)
        return Resolution(
            BoardState.CLEARING, None, preview_piece(queue.peek()), len(full)
        )
    return spawn_next(board, queue)


__all__ = [
    "Resolution",
    "SPAWN_ANCHOR",
    "lock_and_resolve",
    "spawn_next",
    "spawn_piece",
]
