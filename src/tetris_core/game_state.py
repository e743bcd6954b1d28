"""High level game state machine.

:class:`GameCore` owns the board, the randomizer, the active and preview
pieces and the score counters.  A front-end drives it with two calls,
:meth:`GameCore.on_tick` for gravity and :meth:`GameCore.on_input` for key
presses, and reads it back once per frame through :meth:`GameCore.snapshot`
or the individual accessors.  Nothing outside this class mutates the board.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union
import logging

import numpy as np

from .board import Board, Cell, Grid
from .events import BoardState, InputEvent
from .line_clear import Resolution, lock_and_resolve, spawn_next
from .randomizer import BagRandomizer
from .rules import advance_level, get_score
from .tetromino import PREVIEW_SIZE, Piece, PieceKind
from .utils import gravity_interval_ms, is_legal


LOGGER = logging.getLogger(__name__)

Coords = Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class Frame:
    """Read-only view of the game handed to renderers once per frame."""

    grid: Grid
    active: Coords
    preview: Coords
    preview_kind: PieceKind
    score: int
    level: int
    lines: int
    state: BoardState


class GameCore:
    """Mutable state for a game session and the rules that advance it."""

    def __init__(
        self,
        randomizer: Optional[BagRandomizer] = None,
        *,
        seed: Optional[int] = None,
    ) -> None:
        self.board = Board()
        self.randomizer = randomizer or BagRandomizer(seed=seed)
        self.quit_requested = False
        self._score = 0
        self._level = 0
        self._lines = 0
        self._pieces = 0
        self._pending_rows = 0
        self._state = BoardState.MOVING
        self._active: Optional[Piece] = None
        self._preview: Optional[Piece] = None
        self._adopt(spawn_next(self.board, self.randomizer))

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def score(self) -> int:
        return self._score

    @property
    def level(self) -> int:
        return self._level

    @property
    def lines(self) -> int:
        """Rows cleared since the last level-up."""
        return self._lines

    @property
    def pieces(self) -> int:
        """Number of pieces locked so far."""
        return self._pieces

    @property
    def active(self) -> Optional[Piece]:
        return self._active

    @property
    def preview(self) -> Optional[Piece]:
        return self._preview

    def visible_grid(self) -> Grid:
        """Return a copy of the visible playfield indexed ``[y, x]``."""

        return self.board.visible()

    def active_cells(self) -> Coords:
        """Return the active piece's cells in visible coordinates."""

        if self._active is None:
            return ()
        left, top = self.board.left, self.board.top
        return tuple((x - left, y - top) for x, y in self._active.blocks())

    def preview_cells(self) -> Coords:
        """Return the preview piece's cells within the preview mini-grid."""

        if self._preview is None:
            return ()
        return tuple(self._preview.blocks())

    def preview_grid(self) -> Grid:
        """Return the preview mini-grid with the upcoming piece marked."""

        grid = np.zeros((PREVIEW_SIZE, PREVIEW_SIZE), dtype=np.uint8)
        for x, y in self.preview_cells():
            grid[y, x] = Cell.FALLING
        return grid

    def gravity_interval_ms(self) -> float:
        """Return the current gravity interval for the front-end's timer."""

        return gravity_interval_ms(self._level)

    def snapshot(self) -> Frame:
        """Return a read-only copy of everything a renderer needs."""

        grid = self.visible_grid()
        grid.setflags(write=False)
        assert self._preview is not None
        return Frame(
            grid=grid,
            active=self.active_cells(),
            preview=self.preview_cells(),
            preview_kind=self._preview.kind,
            score=self._score,
            level=self._level,
            lines=self._lines,
            state=self._state,
        )

    # ------------------------------------------------------------------
    # Event entry points
    # ------------------------------------------------------------------
    def on_tick(self, elapsed_ticks: int = 1) -> None:
        """Advance gravity by ``elapsed_ticks`` discrete steps.

        While moving, each tick drops the active piece one row or locks it.
        While clearing, the first tick collapses the full rows and spawns the
        next piece.  Paused and finished games ignore ticks.
        """

        if elapsed_ticks < 0:
            raise ValueError(f"Tick count must be non-negative, got {elapsed_ticks}")
        for _ in range(elapsed_ticks):
            if self._state is BoardState.MOVING:
                self._step_down()
            elif self._state is BoardState.CLEARING:
                self._resolve_clear()
            else:
                break

    def on_input(self, event: Union[InputEvent, str]) -> None:
        """Apply a single player input.

        Inputs that are not allowed in the current state are ignored.
        ``event`` may also be given as the string value of an
        :class:`InputEvent`.
        """

        event = InputEvent(event)
        if event is InputEvent.QUIT:
            self._quit()
            return
        if event is InputEvent.PAUSE_TOGGLE:
            self._toggle_pause()
            return
        if self._state is not BoardState.MOVING:
            LOGGER.debug("Ignoring %s while %s", event.value, self._state.value)
            return

        assert self._active is not None
        if event is InputEvent.LEFT:
            self._try_move(self._active.moved(-1, 0))
        elif event is InputEvent.RIGHT:
            self._try_move(self._active.moved(1, 0))
        elif event is InputEvent.ROTATE:
            self._try_move(self._active.rotated())
        elif event is InputEvent.SOFT_DROP:
            self._step_down()
        elif event is InputEvent.HARD_DROP:
            while self._try_move(self._active.moved(0, 1)):
                pass
            self._lock()

    # ------------------------------------------------------------------
    # Testing conveniences
    # ------------------------------------------------------------------
    def set_active(self, piece: Piece) -> None:
        """Replace the active piece with ``piece``.

        This helper exists for unit tests that need a specific piece at a
        specific pose.  The previous footprint is erased and the new one is
        drawn without a legality check.
        """

        if self._state is not BoardState.MOVING:
            raise RuntimeError(f"Cannot replace the active piece while {self._state.value}")
        if self._active is not None:
            self.board.erase(self._active)
        self._active = piece
        self.board.draw(piece, Cell.FALLING)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _try_move(self, candidate: Piece) -> bool:
        """Adopt ``candidate`` as the active pose if it is legal."""

        if not is_legal(self.board, candidate):
            return False
        assert self._active is not None
        self.board.erase(self._active)
        self._active = candidate
        self.board.draw(candidate, Cell.FALLING)
        return True

    def _step_down(self) -> None:
        assert self._active is not None
        if not self._try_move(self._active.moved(0, 1)):
            self._lock()

    def _lock(self) -> None:
        if self._active is None:
            raise RuntimeError("No active piece to lock")
        self._pieces += 1
        self._adopt(lock_and_resolve(self.board, self._active, self.randomizer))

    def _resolve_clear(self) -> None:
        cleared = self._pending_rows
        self._score += get_score(cleared, self._level)
        level, self._lines = advance_level(self._level, self._lines, cleared)
        if level != self._level:
            LOGGER.info("Level up: %d -> %d", self._level, level)
        self._level = level

        removed = self.board.collapse_full_rows()
        if removed != cleared:
            raise RuntimeError(
                f"Expected to collapse {cleared} row(s) but removed {removed}"
            )
        LOGGER.info("Cleared %d row(s). Score: %d", cleared, self._score)
        self._adopt(spawn_next(self.board, self.randomizer))

    def _adopt(self, resolution: Resolution) -> None:
        previous = self._state
        self._state = resolution.state
        self._active = resolution.active
        self._preview = resolution.preview
        self._pending_rows = resolution.full_rows
        if resolution.state is BoardState.MOVING:
            assert resolution.active is not None
            self.board.draw(resolution.active, Cell.FALLING)
        elif resolution.state is BoardState.OVER:
            LOGGER.info("Game over. Score: %d, level: %d", self._score, self._level)
        if previous is not resolution.state:
            LOGGER.debug("State %s -> %s", previous.value, resolution.state.value)

    def _toggle_pause(self) -> None:
        if self._state is BoardState.MOVING:
            self._state = BoardState.PAUSED
            LOGGER.info("Paused")
        elif self._state is BoardState.PAUSED:
            self._state = BoardState.MOVING
            LOGGER.info("Resumed")
        else:
            LOGGER.debug("Pause ignored while %s", self._state.value)

    def _quit(self) -> None:
        self.quit_requested = True
        if self._state is not BoardState.OVER:
            LOGGER.info("Quit requested; ending game")
            self._state = BoardState.OVER


def new_game(seed: Optional[int] = None) -> GameCore:
    """Start a new game with a freshly shuffled randomizer."""

    return GameCore(seed=seed)
