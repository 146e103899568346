"""Canvas-based web front-end for Tetris.

This renderer draws directly to the HTML5 canvas via PyScript/pyodide's JS
bridge.  Keyboard, on-screen buttons and touch gestures are translated into
commands by :mod:`tetrix.controls`; the high score lives in
``localStorage``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
import logging

from js import document, window  # type: ignore
from pyodide.ffi import create_proxy  # type: ignore

from .board import Board
from .commands import Command, apply
from .controls import BUTTON_COMMANDS, KEY_CODE_COMMANDS, HoldRepeater, SwipeTracker
from .game_state import GameState, Snapshot
from .shapes import CELL_COLORS, Piece
from .storage import LocalStorageStore


LOGGER = logging.getLogger(__name__)

CELL_SIZE = 30
PREVIEW_CELLS = 4
BACKGROUND = "#0a0f1a"
HIGHLIGHT = "rgba(255,255,255,0.06)"
GHOST_ALPHA = 0.25


def _scale_canvas(canvas, width: int, height: int):
    """Size ``canvas`` for the device pixel ratio and return its context."""

    dpr = max(1, min(2, window.devicePixelRatio or 1))
    canvas.width = width * dpr
    canvas.height = height * dpr
    canvas.style.width = f"{width}px"
    canvas.style.height = f"{height}px"
    ctx = canvas.getContext("2d")
    ctx.scale(dpr, dpr)
    return ctx


def _fill_cell(ctx, col: int, row: int, color: str, size: int = CELL_SIZE) -> None:
    ctx.fillStyle = color
    ctx.fillRect(col * size, row * size, size, size)
    ctx.fillStyle = HIGHLIGHT
    ctx.fillRect(col * size + 2, row * size + 2, size - 4, size - 4)


@dataclass
class Runner:
    state: GameState = field(default_factory=GameState)
    store: Optional[LocalStorageStore] = None
    running: bool = False
    last_ts: float = 0.0
    raf_handle: Optional[int] = None
    swipe: SwipeTracker = field(default_factory=SwipeTracker)
    repeater: Optional[HoldRepeater] = None
    _ctx: object = field(default=None, repr=False)
    _next_ctx: object = field(default=None, repr=False)
    _bound: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        if self.repeater is None:
            self.repeater = HoldRepeater(self.dispatch)

    # ------------------------------------------------------------------
    # Diagnostics and HUD
    # ------------------------------------------------------------------
    def _log(self, msg: str) -> None:
        LOGGER.info(msg)
        el = document.getElementById("diagnostics")
        if el:
            div = document.createElement("div")
            div.textContent = msg
            el.prepend(div)

    def _update_hud(self) -> None:
        """Write score, level, lines and best into the page if present."""

        values = {
            "score": self.state.score,
            "level": self.state.level,
            "lines": self.state.lines,
            "best": self.state.best,
        }
        for element_id, value in values.items():
            el = document.getElementById(element_id)
            if el:
                el.textContent = str(value)

    def _on_best(self, best: int) -> None:
        if self.store is not None:
            self.store.save_best(best)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def _draw_piece(self, piece: Piece, row: int, ghost: bool = False) -> None:
        ctx = self._ctx
        col = piece.position[1]
        if ghost:
            ctx.globalAlpha = GHOST_ALPHA
        for y, line in enumerate(piece.matrix):
            for x, value in enumerate(line):
                if value:
                    _fill_cell(ctx, col + x, row + y, piece.color)
        if ghost:
            ctx.globalAlpha = 1

    def _draw_next(self, snapshot: Snapshot) -> None:
        ctx = self._next_ctx
        if ctx is None:
            return
        size = PREVIEW_CELLS * CELL_SIZE
        ctx.clearRect(0, 0, size, size)
        piece = snapshot.upcoming
        if piece is None:
            return
        off_x = (PREVIEW_CELLS - len(piece.matrix[0])) // 2
        off_y = (PREVIEW_CELLS - len(piece.matrix)) // 2
        for y, line in enumerate(piece.matrix):
            for x, value in enumerate(line):
                if value:
                    _fill_cell(ctx, x + off_x, y + off_y, piece.color)

    def _draw(self) -> None:
        ctx = self._ctx
        if ctx is None:
            return
        snapshot = self.state.snapshot()
        ctx.fillStyle = BACKGROUND
        ctx.fillRect(0, 0, Board.width * CELL_SIZE, Board.height * CELL_SIZE)
        for r, row in enumerate(snapshot.cells):
            for c, value in enumerate(row):
                if value:
                    _fill_cell(ctx, c, r, CELL_COLORS[value])
        if snapshot.active is not None:
            if snapshot.ghost_row is not None:
                self._draw_piece(snapshot.active, snapshot.ghost_row, ghost=True)
            self._draw_piece(snapshot.active, snapshot.active.position[0])
        self._draw_next(snapshot)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def dispatch(self, command: Command) -> None:
        """Apply ``command`` and refresh the page."""

        if not self.running:
            return
        apply(self.state, command)
        self._update_hud()
        self._draw()

    def _on_key(self, evt) -> None:
        command = KEY_CODE_COMMANDS.get(evt.code)
        if command is None:
            return
        if command is not Command.TOGGLE_PAUSE and command is not Command.RESET:
            evt.preventDefault()
        self.dispatch(command)

    def _on_button_press(self, evt) -> None:
        command = BUTTON_COMMANDS.get(evt.currentTarget.dataset.act)
        if command is None:
            return
        evt.preventDefault()
        self.repeater.press(command)

    def _on_button_release(self, _evt) -> None:
        self.repeater.release()

    def _on_button_click(self, evt) -> None:
        command = BUTTON_COMMANDS.get(evt.currentTarget.dataset.act)
        if command is not None:
            self.dispatch(command)

    def _on_touch_start(self, evt) -> None:
        if evt.touches.length > 1:
            return
        evt.preventDefault()
        touch = evt.touches[0]
        self.swipe.start(touch.clientX, touch.clientY)

    def _on_touch_move(self, evt) -> None:
        if not self.swipe.active or evt.touches.length > 1:
            return
        evt.preventDefault()
        touch = evt.touches[0]
        for command in self.swipe.move(touch.clientX, touch.clientY):
            self.dispatch(command)

    def _on_touch_end(self, _evt) -> None:
        for command in self.swipe.end():
            self.dispatch(command)

    def _bind_inputs(self, canvas) -> None:
        document.addEventListener("keydown", create_proxy(self._on_key))
        for button in document.querySelectorAll(".btn"):
            button.addEventListener("touchstart", create_proxy(self._on_button_press))
            button.addEventListener("touchend", create_proxy(self._on_button_release))
            button.addEventListener("click", create_proxy(self._on_button_click))
        if canvas:
            canvas.addEventListener("touchstart", create_proxy(self._on_touch_start))
            canvas.addEventListener("touchmove", create_proxy(self._on_touch_move))
            canvas.addEventListener("touchend", create_proxy(self._on_touch_end))

    def _show_tutorial(self) -> None:
        """Show the gesture tutorial once on mobile devices."""

        overlay = document.getElementById("tutorialOverlay")
        close_btn = document.getElementById("closeTutorial")
        if not overlay or not close_btn or self.store is None:
            return
        agent = str(window.navigator.userAgent).lower()
        if "mobi" not in agent and "android" not in agent:
            return
        if self.store.tutorial_seen():
            return
        overlay.hidden = False

        def close(_evt) -> None:
            overlay.hidden = True
            self.store.mark_tutorial_seen()

        close_btn.addEventListener("click", create_proxy(close))

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------
    def _tick(self, ts: float) -> None:
        if not self.running:
            return
        try:
            if self.last_ts == 0:
                self.last_ts = ts
            dt = max(0.0, ts - self.last_ts)
            self.last_ts = ts
            if self.state.advance(dt):
                self._update_hud()
            self.repeater.update(dt)
            self._draw()
        except Exception as exc:  # pragma: no cover - defensive guard
            # If anything goes wrong during the animation tick, log the error
            # and reset the game so a fresh session can continue.
            self._log(f"Crash detected: {exc}")
            self.state.reset_game()
            self._update_hud()
            self.last_ts = 0
        self.raf_handle = window.requestAnimationFrame(create_proxy(self._tick))

    def start(self) -> None:
        if self.running:
            self._log("Already running")
            return
        canvas = document.getElementById("game")
        if canvas:
            self._ctx = _scale_canvas(canvas, Board.width * CELL_SIZE, Board.height * CELL_SIZE)
            canvas.focus()
        next_canvas = document.getElementById("next")
        if next_canvas:
            size = PREVIEW_CELLS * CELL_SIZE
            self._next_ctx = _scale_canvas(next_canvas, size, size)
        if self.store is None:
            self.store = LocalStorageStore(window.localStorage)
        self.state.best = self.store.load_best()
        self.state.on_best = self._on_best
        self.state.reset_game()
        self.running = True
        self.last_ts = 0
        if not self._bound:
            # Listeners outlive stop(); a restart reuses them.
            self._bind_inputs(canvas)
            self._show_tutorial()
            self._bound = True
        self._update_hud()
        self._draw()
        self.raf_handle = window.requestAnimationFrame(create_proxy(self._tick))
        self._log("Game started")

    def stop(self) -> None:
        if not self.running:
            self._log("Stop ignored: not running")
            return
        self.running = False
        self.repeater.release()
        if self.raf_handle is not None:
            window.cancelAnimationFrame(self.raf_handle)
            self.raf_handle = None
        self._log("Game stopped")


runner = Runner()


def start() -> None:
    runner.start()


def stop() -> None:
    runner.stop()
