"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .shapes import Piece


BASE_DROP_INTERVAL_MS = 1000
MIN_DROP_INTERVAL_MS = 100
DROP_INTERVAL_STEP_MS = 75
LINES_PER_LEVEL = 10

# Points for clearing 0, 1, 2, 3 and 4 rows at once, before the level factor.
LINE_CLEAR_POINTS = (0, 100, 300, 500, 800)


def drop_interval_ms(level: int) -> int:
    """Return the gravity interval in milliseconds for ``level``.

    Level 1 starts at one second; every level shaves 75 ms off down to a
    100 ms floor.
    """

    return max(
        MIN_DROP_INTERVAL_MS,
        BASE_DROP_INTERVAL_MS - (level - 1) * DROP_INTERVAL_STEP_MS,
    )


def line_clear_score(cleared: int, level: int) -> int:
    """Return the points awarded for clearing ``cleared`` rows at ``level``."""

    index = min(max(cleared, 0), len(LINE_CLEAR_POINTS) - 1)
    return LINE_CLEAR_POINTS[index] * level


def render_grid(
    board: Board,
    active: Optional[Piece] = None,
    ghost_row: Optional[int] = None,
) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state.  Cells occupied by the active
    piece receive the piece's colour id.  When ``ghost_row`` is given, empty
    cells under the ghost projection are marked with ``-1``.
    """

    grid = board.rows()
    if active is None:
        return grid
    if ghost_row is not None:
        ghost = active.copy()
        ghost.position = (ghost_row, active.position[1])
        for r, c in ghost.blocks():
            if 0 <= r < board.height and 0 <= c < board.width and not grid[r][c]:
                grid[r][c] = -1
    for r, c in active.blocks():
        if 0 <= r < board.height and 0 <= c < board.width:
            grid[r][c] = active.value
    return grid
