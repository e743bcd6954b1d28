"""Scoring and level progression."""

from __future__ import annotations

from typing import Dict, Tuple


# Base points per simultaneous line clear, multiplied by ``level + 1``.
LINE_SCORES: Dict[int, int] = {1: 40, 2: 100, 3: 300, 4: 1200}

LINES_PER_LEVEL = 10


def get_score(cleared: int, level: int) -> int:
    """Return the points awarded for clearing ``cleared`` rows at ``level``.

    Raises:
        ValueError: If ``cleared`` is not between 1 and 4 or ``level`` is
            negative.  A single lock can never produce other values.
    """

    if cleared not in LINE_SCORES:
        raise ValueError(f"Cleared row count must be 1-4, got {cleared}")
    if level < 0:
        raise ValueError(f"Level must be non-negative, got {level}")
    return LINE_SCORES[cleared] * (level + 1)


def advance_level(level: int, lines: int, cleared: int) -> Tuple[int, int]:
    """Return the new ``(level, lines)`` after clearing ``cleared`` rows.

    ``lines`` counts rows cleared since the last level-up; every
    :data:`LINES_PER_LEVEL` rows roll over into one more level.
    """

    lines += cleared
    while lines >= LINES_PER_LEVEL:
        lines -= LINES_PER_LEVEL
        level += 1
    return level, lines
