"""Command-line entry point for Tetrix.

Run with: `python -m tetrix`

The default ``ascii`` front-end prints a single frame composed of the board,
the ghost projection and the active piece, useful as a minimal smoke test.
``--frontend pygame`` opens the playable desktop window.
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence

from . import Bag, GameState, render_grid


def format_grid(grid: List[List[int]]) -> str:
    """Render a grid from :func:`render_grid` as text."""

    symbols = {0: ".", -1: ":"}
    return "\n".join("".join(symbols.get(cell, "#") for cell in row) for row in grid)


def ascii_frame(seed: Optional[int] = None) -> str:
    gs = GameState(bag=Bag(random.Random(seed)))
    gs.reset_game()
    return format_grid(render_grid(gs.board, gs.active, gs.ghost_row()))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tetrix", description=__doc__)
    parser.add_argument(
        "--frontend",
        choices=("ascii", "pygame"),
        default="ascii",
        help="Print one text frame or open the pygame window.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer.")
    parser.add_argument(
        "--scores",
        type=Path,
        default=None,
        help="High score file (defaults to $TETRIX_SCORES_PATH or ~/.tetrixapp.json).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if args.frontend == "pygame":
        from .run_pygame import main as run_pygame

        run_pygame(seed=args.seed, scores_path=args.scores)
        return
    print(ascii_frame(args.seed))


if __name__ == "__main__":
    main()
