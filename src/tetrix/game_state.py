"""High level game state container.

:class:`GameState` owns the board, the randomizer and the scoring counters of
one session and exposes the player operations as methods.  It has no clock of
its own: drivers feed elapsed milliseconds through :meth:`GameState.advance`
and the state decides when gravity is due.

Every operation either applies completely or leaves the state as it found it.
Illegal moves and rotations are reverted in place and a spawn that collides
resets the session instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional
import logging

from .bag import Bag
from .board import Board
from .shapes import Piece, rotate
from .utils import (
    BASE_DROP_INTERVAL_MS,
    LINES_PER_LEVEL,
    drop_interval_ms,
    line_clear_score,
)


LOGGER = logging.getLogger(__name__)

# Horizontal offsets tried in order after a rotation; the first that fits wins.
ROTATION_KICKS = (0, -1, 1, -2, 2)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session for renderers."""

    cells: List[List[int]]
    active: Optional[Piece]
    ghost_row: Optional[int]
    upcoming: Optional[Piece]
    score: int
    level: int
    lines: int
    best: int
    paused: bool


@dataclass
class GameState:
    """Mutable state for a Tetris game session."""

    board: Board = field(default_factory=Board)
    bag: Bag = field(default_factory=Bag)
    active: Optional[Piece] = None
    upcoming: Optional[Piece] = None
    score: int = 0
    lines: int = 0
    level: int = 1
    drop_interval: int = BASE_DROP_INTERVAL_MS
    best: int = 0
    paused: bool = False
    drop_counter: float = 0.0
    on_best: Optional[Callable[[int], None]] = field(
        default=None, repr=False, compare=False
    )

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def reset_game(self) -> None:
        """Clear the board and counters, then spawn a fresh piece."""

        self.board.clear()
        self._reset_counters()
        self.player_reset()

    def _reset_counters(self) -> None:
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval = BASE_DROP_INTERVAL_MS
        self.drop_counter = 0.0

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        LOGGER.debug("Paused" if self.paused else "Resumed")

    def advance(self, dt: float) -> bool:
        """Advance simulated time by ``dt`` milliseconds.

        Returns ``True`` when a gravity drop ran.  Time does not accumulate
        while paused.

        Raises:
            ValueError: If ``dt`` is negative.
        """

        if dt < 0:
            raise ValueError("Time cannot run backwards")
        if self.paused or self.active is None:
            return False
        self.drop_counter += dt
        if self.drop_counter > self.drop_interval:
            self.player_drop()
            return True
        return False

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------
    def _center(self, piece: Piece) -> None:
        piece.position = (0, self.board.width // 2 - piece.width // 2)

    def player_reset(self) -> Piece:
        """Spawn a new active piece straight from the bag.

        A spawn that overlaps locked cells ends the game: the board and
        counters are wiped and the new piece stays where it was placed.  The
        upcoming piece is always redrawn afterwards.
        """

        self.active = Piece.create(self.bag.next())
        self._center(self.active)
        if self.board.collide(self.active):
            LOGGER.info("Game over at %d points. Resetting.", self.score)
            self.board.clear()
            self._reset_counters()
        self.upcoming = Piece.create(self.bag.next())
        return self.active

    def _spawn_next(self) -> None:
        upcoming = self.upcoming or Piece.create(self.bag.next())
        self.active = upcoming.copy()
        self._center(self.active)
        self.upcoming = Piece.create(self.bag.next())
        if self.board.collide(self.active):
            self.player_reset()

    # ------------------------------------------------------------------
    # Locking and scoring
    # ------------------------------------------------------------------
    def _lock(self) -> None:
        if self.active is None:
            return
        self.board.merge(self.active)
        cleared = self.board.clear_lines()
        if cleared:
            self._score_lines(cleared)
        self._spawn_next()

    def _score_lines(self, cleared: int) -> None:
        self.lines += cleared
        self.score += line_clear_score(cleared, self.level)
        LOGGER.debug("Cleared %d row(s). Score: %d", cleared, self.score)
        if self.lines >= self.level * LINES_PER_LEVEL:
            self.level += 1
            self.drop_interval = drop_interval_ms(self.level)
            LOGGER.info("Level %d, gravity every %d ms", self.level, self.drop_interval)
        if self.score > self.best:
            self.best = self.score
            if self.on_best is not None:
                self.on_best(self.best)

    # ------------------------------------------------------------------
    # Player operations
    # ------------------------------------------------------------------
    def player_drop(self) -> None:
        """Move the piece down one row, locking it if it cannot move."""

        if self.active is not None:
            self.active.move(0, 1)
            if self.board.collide(self.active):
                self.active.move(0, -1)
                self._lock()
        self.drop_counter = 0.0

    def soft_drop(self) -> bool:
        """Move the piece down one row without ever locking it."""

        if self.active is None:
            return False
        self.active.move(0, 1)
        if self.board.collide(self.active):
            self.active.move(0, -1)
            return False
        return True

    def hard_drop(self) -> None:
        """Drop the piece to its landing row and lock it immediately."""

        if self.active is None:
            return
        while not self.board.collide(self.active):
            self.active.move(0, 1)
        self.active.move(0, -1)
        self.player_drop()

    def player_move(self, direction: int) -> bool:
        """Shift the piece one column left (``-1``) or right (``+1``)."""

        if self.active is None:
            return False
        self.active.move(direction, 0)
        if self.board.collide(self.active):
            self.active.move(-direction, 0)
            return False
        return True

    def player_rotate(self) -> bool:
        """Rotate the piece clockwise, trying each offset of ``ROTATION_KICKS``.

        The piece is left untouched when no offset fits.
        """

        if self.active is None:
            return False
        previous = self.active.matrix
        row, col = self.active.position
        self.active.matrix = rotate(previous)
        for kick in ROTATION_KICKS:
            self.active.position = (row, col + kick)
            if not self.board.collide(self.active):
                return True
        self.active.matrix = previous
        self.active.position = (row, col)
        return False

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------
    def ghost_row(self) -> Optional[int]:
        """Return the row the active piece would land on, without moving it."""

        if self.active is None:
            return None
        ghost = self.active.copy()
        while not self.board.collide(ghost):
            ghost.move(0, 1)
        return ghost.position[0] - 1

    def snapshot(self) -> Snapshot:
        return Snapshot(
            cells=self.board.rows(),
            active=self.active.copy() if self.active else None,
            ghost_row=self.ghost_row(),
            upcoming=self.upcoming.copy() if self.upcoming else None,
            score=self.score,
            level=self.level,
            lines=self.lines,
            best=self.best,
            paused=self.paused,
        )


__all__ = ["GameState", "Snapshot", "ROTATION_KICKS"]
