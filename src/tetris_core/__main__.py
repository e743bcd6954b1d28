"""Simple ASCII demo for the rule engine.

Run with: `python -m tetris_core`

The demo plays a seeded game with random inputs, feeding simulated frame
times through the gravity timer exactly as a real front-end would, then
prints the final board and score.  It doubles as a smoke test that the whole
engine runs end to end.
"""

from __future__ import annotations

from typing import Optional, Sequence
import argparse
import logging
import random

from . import BoardState, GameCore, InputEvent, gravity_ticks, new_game, render_ascii
from .tetromino import PREVIEW_SIZE
from .utils import render_cells


LOGGER = logging.getLogger(__name__)

# Inputs the autoplayer picks from; quitting and pausing are left out.
_PLAY_INPUTS = (
    InputEvent.LEFT,
    InputEvent.RIGHT,
    InputEvent.ROTATE,
    InputEvent.SOFT_DROP,
    InputEvent.HARD_DROP,
)


def autoplay(
    game: GameCore,
    *,
    frames: int,
    frame_ms: float,
    seed: Optional[int] = None,
    input_chance: float = 0.2,
) -> int:
    """Drive ``game`` for up to ``frames`` frames and return how many ran."""

    rng = random.Random(seed)
    accumulated = 0.0
    frame = 0
    while frame < frames and game.state is not BoardState.OVER:
        frame += 1
        if rng.random() < input_chance:
            game.on_input(rng.choice(_PLAY_INPUTS))
        accumulated += frame_ms
        ticks, accumulated = gravity_ticks(accumulated, game.level)
        if ticks:
            game.on_tick(ticks)
    return frame


def format_frame(game: GameCore) -> str:
    frame = game.snapshot()
    parts = [
        render_ascii(frame.grid),
        "",
        f"Next: {frame.preview_kind.value}",
        render_cells(frame.preview, PREVIEW_SIZE, PREVIEW_SIZE),
        "",
        f"Score: {frame.score}  Level: {frame.level}  Lines: {frame.lines}  "
        f"State: {frame.state.value}",
    ]
    return "\n".join(parts)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a seeded demo game in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for pieces and inputs.")
    parser.add_argument("--frames", type=int, default=5000, help="Maximum frames to simulate.")
    parser.add_argument(
        "--frame-ms", type=float, default=1000.0 / 60, help="Simulated milliseconds per frame."
    )
    parser.add_argument("--verbose", action="store_true", help="Log state transitions.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    game = new_game(seed=args.seed)
    played = autoplay(game, frames=args.frames, frame_ms=args.frame_ms, seed=args.seed)
    LOGGER.info("Simulated %d frame(s)", played)
    print(format_frame(game))


if __name__ == "__main__":
    main()
