"""Rule engine for a falling-block puzzle game."""

from .board import Board, Cell
from .events import BoardState, InputEvent
from .game_state import Frame, GameCore, new_game
from .line_clear import Resolution, lock_and_resolve, spawn_next, spawn_piece
from .randomizer import BagRandomizer
from .rules import advance_level, get_score
from .tetromino import Piece, PieceKind, occupied_offsets
from .utils import gravity_interval_ms, gravity_ticks, is_legal, render_ascii

__all__ = [
    "Board",
    "Cell",
    "BoardState",
    "InputEvent",
    "Frame",
    "GameCore",
    "new_game",
    "Resolution",
    "lock_and_resolve",
    "spawn_next",
    "spawn_piece",
    "BagRandomizer",
    "advance_level",
    "get_score",
    "Piece",
    "PieceKind",
    "occupied_offsets",
    "gravity_interval_ms",
    "gravity_ticks",
    "is_legal",
    "render_ascii",
]
