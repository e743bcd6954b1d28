"""Shuffled-bag piece randomizer.

Pieces are dealt from bags holding each of the seven kinds once, shuffled
with :meth:`random.Random.shuffle` (a Fisher-Yates shuffle).  A fresh bag is
appended as soon as a single piece remains queued, so :meth:`peek` always has
an answer for the preview panel.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional
import random

from .tetromino import PieceKind


class BagRandomizer:
    """Queue of upcoming piece kinds fed by shuffled 7-bags."""

    def __init__(self, *, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self._queue: Deque[PieceKind] = deque()
        self._queue.extend(self._new_bag())

    def reset(self, *, seed: Optional[int] = None) -> None:
        """Discard the queue and start again from a fresh bag."""

        if seed is not None:
            self._rng.seed(seed)
        self._queue.clear()
        self._queue.extend(self._new_bag())

    def next(self) -> PieceKind:
        """Remove and return the kind at the head of the queue."""

        if len(self._queue) <= 1:
            self._queue.extend(self._new_bag())
        return self._queue.popleft()

    def peek(self) -> PieceKind:
        """Return the kind :meth:`next` will deal without removing it."""

        return self._queue[0]

    def upcoming(self) -> List[PieceKind]:
        """Return a copy of the queued kinds, head first."""

        return list(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def _new_bag(self) -> List[PieceKind]:
        bag = list(PieceKind)
        self._rng.shuffle(bag)
        return bag
