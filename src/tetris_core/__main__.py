"""Headless demo for the engine.

Run with: `python -m tetris_core`

A seeded random player issues one command per step, each followed by a gravity
tick, until the step budget runs out or the game ends.  The final field is
printed with the active piece overlaid, followed by a one-line summary.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from .engine import Command, GameEngine, GameState, new_game

LOGGER = logging.getLogger(__name__)

PLAYER_COMMANDS = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
)


def play(engine: GameEngine, steps: int, rng: random.Random) -> int:
    """Play up to ``steps`` steps and return how many were taken."""

    taken = 0
    for _ in range(steps):
        if engine.state is GameState.GAME_OVER:
            break
        engine.dispatch(rng.choice(PLAYER_COMMANDS))
        engine.gravity_tick()
        taken += 1
    LOGGER.debug("Played %d step(s)", taken)
    return taken


def summary_line(engine: GameEngine) -> str:
    return f"Score: {engine.score}  Lines: {engine.completed_lines}  State: {engine.state.name}"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m tetris_core", description=__doc__)
    parser.add_argument("--columns", type=int, default=10, help="Field width in blocks.")
    parser.add_argument("--rows", type=int, default=20, help="Field height in blocks.")
    parser.add_argument("--steps", type=int, default=500, help="Maximum number of steps to play.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for pieces and player moves.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    rng = random.Random(args.seed)
    engine = new_game(args.columns, args.rows, rng=rng)
    play(engine, args.steps, rng)
    print(engine.field.format(grid=engine.render_grid()))
    print(summary_line(engine))


if __name__ == "__main__":
    main()
