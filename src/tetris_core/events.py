"""Board states and the discrete inputs that drive them."""

from __future__ import annotations

from enum import Enum


class BoardState(str, Enum):
    """Phase of the game governing which operations are accepted."""

    MOVING = "moving"
    CLEARING = "clearing"
    PAUSED = "paused"
    OVER = "over"


class InputEvent(str, Enum):
    """Discrete player inputs delivered by the front-end."""

    ROTATE = "rotate"
    LEFT = "left"
    RIGHT = "right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    PAUSE_TOGGLE = "pause_toggle"
    QUIT = "quit"
