"""Desktop pygame front-end for the Tetris engine.

The runner owns the frame loop: it turns key presses into commands, feeds the
clock delta to :meth:`GameState.advance` and draws a :class:`Snapshot` each
frame.  All game rules live in :mod:`tetrix.game_state`.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Dict, Optional
import random

import pygame

from .bag import Bag
from .board import Board
from .commands import Command, apply
from .game_state import GameState, Snapshot
from .shapes import CELL_COLORS, Piece
from .storage import JsonScoreStore


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60
# Width of the side panel holding the preview and the HUD
PANEL_WIDTH = 5 * CELL_SIZE

BACKGROUND = pygame.Color("#0a0f1a")
GRID_LINE = pygame.Color(30, 36, 52)
HUD_TEXT = pygame.Color(220, 226, 240)
GHOST_ALPHA = 64

KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_w: Command.ROTATE,
    pygame.K_z: Command.ROTATE,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_r: Command.RESET,
}


def command_for_key(key: int) -> Optional[Command]:
    """Return the command bound to ``key``, if any."""

    return KEY_COMMANDS.get(key)


def _cell_rect(col: int, row: int, size: int = CELL_SIZE, x0: int = 0, y0: int = 0) -> pygame.Rect:
    return pygame.Rect(x0 + col * size, y0 + row * size, size, size)


def draw_board(screen: pygame.Surface, snapshot: Snapshot) -> None:
    """Render the locked cells and grid lines."""

    for r, row in enumerate(snapshot.cells):
        for c, value in enumerate(row):
            rect = _cell_rect(c, r)
            if value:
                pygame.draw.rect(screen, pygame.Color(CELL_COLORS[value]), rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_piece(screen: pygame.Surface, piece: Piece, row: Optional[int] = None, ghost: bool = False) -> None:
    """Render ``piece``, optionally at ``row`` instead of its own row."""

    color = pygame.Color(piece.color)
    origin_row = piece.position[0] if row is None else row
    origin_col = piece.position[1]
    for y, line in enumerate(piece.matrix):
        for x, value in enumerate(line):
            if not value or origin_row + y < 0:
                continue
            rect = _cell_rect(origin_col + x, origin_row + y)
            if ghost:
                overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
                overlay.fill((color.r, color.g, color.b, GHOST_ALPHA))
                screen.blit(overlay, rect)
            else:
                pygame.draw.rect(screen, color, rect)
                pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_panel(screen: pygame.Surface, font: pygame.font.Font, snapshot: Snapshot) -> None:
    """Render the next-piece preview and the score readout."""

    x0 = Board.width * CELL_SIZE + CELL_SIZE // 2
    preview_size = CELL_SIZE * 3 // 4
    if snapshot.upcoming is not None:
        color = pygame.Color(snapshot.upcoming.color)
        matrix = snapshot.upcoming.matrix
        off_x = (4 - len(matrix[0])) // 2
        off_y = (4 - len(matrix)) // 2
        for y, line in enumerate(matrix):
            for x, value in enumerate(line):
                if value:
                    rect = _cell_rect(x + off_x, y + off_y, preview_size, x0, CELL_SIZE)
                    pygame.draw.rect(screen, color, rect)
    lines = [
        f"Score {snapshot.score}",
        f"Level {snapshot.level}",
        f"Lines {snapshot.lines}",
        f"Best  {snapshot.best}",
    ]
    if snapshot.paused:
        lines.append("PAUSED")
    y = CELL_SIZE * 5
    for text in lines:
        screen.blit(font.render(text, True, HUD_TEXT), (x0, y))
        y += font.get_linesize() + 4


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(self, *, seed: Optional[int] = None, scores_path: Optional[Path] = None) -> None:
        self._running = False
        self._task: asyncio.Task | None = None
        self._screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._clock: pygame.time.Clock | None = None
        self.store = JsonScoreStore(scores_path)
        self.state = GameState(bag=Bag(random.Random(seed)))

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self.state.paused

    def new_game(self) -> None:
        self.state.best = self.store.load_best()
        self.state.on_best = self.store.save_best
        self.state.reset_game()
        LOGGER.info("Game started (best %d)", self.state.best)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            command = command_for_key(event.key)
            if command is not None:
                apply(self.state, command)

    def step(self, dt: float) -> None:
        """Advance the game by ``dt`` milliseconds.

        An unexpected error is logged and the game restarted so the session
        can continue.
        """

        try:
            self.state.advance(dt)
        except Exception:
            LOGGER.exception("Crash detected. Resetting.")
            self.state.reset_game()

    def draw(self) -> None:
        if self._screen is None or self._font is None:
            return
        snapshot = self.state.snapshot()
        self._screen.fill(BACKGROUND)
        draw_board(self._screen, snapshot)
        if snapshot.active is not None:
            if snapshot.ghost_row is not None:
                draw_piece(self._screen, snapshot.active, snapshot.ghost_row, ghost=True)
            draw_piece(self._screen, snapshot.active)
        draw_panel(self._screen, self._font, snapshot)
        pygame.display.set_caption(
            f"Tetrix - {'Paused - ' if snapshot.paused else ''}Score: {snapshot.score}"
        )
        pygame.display.flip()

    async def _run_loop(self) -> None:
        # Ensure SDL/pygame binds to the visible canvas in the page when running on Web.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        size = (Board.width * CELL_SIZE + PANEL_WIDTH, Board.height * CELL_SIZE)
        self._screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Tetrix")
        self._font = pygame.font.Font(None, 26)
        self._clock = pygame.time.Clock()

        self.new_game()
        self._running = True
        while self._running:
            dt = self._clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)
            self.step(dt)
            self.draw()
            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (plain Python); run synchronously
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())

    def pause(self) -> None:
        if not self._running:
            LOGGER.info("Pause ignored: game not running")
            return
        if not self.state.paused:
            self.state.toggle_pause()

    def resume(self) -> None:
        if not self._running:
            LOGGER.info("Resume ignored: game not running")
            return
        if self.state.paused:
            self.state.toggle_pause()

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._running = False


def main(*, seed: Optional[int] = None, scores_path: Optional[Path] = None) -> None:
    """Run the desktop game until the window is closed."""

    GameRunner(seed=seed, scores_path=scores_path).start()


__all__ = ["GameRunner", "KEY_COMMANDS", "command_for_key", "main"]
