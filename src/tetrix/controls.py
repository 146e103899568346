"""Translate keyboard, button and touch input into :class:`Command` values.

Nothing here touches the game state.  Adapters only report which commands a
device event stands for; the driver forwards them through
:func:`tetrix.commands.apply`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .commands import Command


# ``KeyboardEvent.code`` values understood by the browser front-end.
KEY_CODE_COMMANDS: Dict[str, Command] = {
    "ArrowLeft": Command.MOVE_LEFT,
    "ArrowRight": Command.MOVE_RIGHT,
    "ArrowDown": Command.SOFT_DROP,
    "ArrowUp": Command.ROTATE,
    "KeyW": Command.ROTATE,
    "KeyZ": Command.ROTATE,
    "Space": Command.HARD_DROP,
    "KeyP": Command.TOGGLE_PAUSE,
    "KeyR": Command.RESET,
}

# ``data-act`` values of the on-screen buttons.
BUTTON_COMMANDS: Dict[str, Command] = {
    "left": Command.MOVE_LEFT,
    "right": Command.MOVE_RIGHT,
    "down": Command.SOFT_DROP,
    "rotate": Command.ROTATE,
    "drop": Command.HARD_DROP,
    "pause": Command.TOGGLE_PAUSE,
    "reset": Command.RESET,
}

REPEAT_INTERVAL_MS = 110
SWIPE_STEP_PX = 18
HARD_DROP_SWIPE_PX = 40


class HoldRepeater:
    """Repeat a command while a button is held down.

    The command fires once on :meth:`press` and again every
    ``interval`` milliseconds of time fed to :meth:`update` until
    :meth:`release`.
    """

    def __init__(
        self,
        emit: Callable[[Command], None],
        interval: float = REPEAT_INTERVAL_MS,
    ) -> None:
        if interval <= 0:
            raise ValueError("Repeat interval must be positive")
        self._emit = emit
        self.interval = interval
        self.command: Optional[Command] = None
        self._elapsed = 0.0

    @property
    def held(self) -> bool:
        return self.command is not None

    def press(self, command: Command) -> None:
        self.command = command
        self._elapsed = 0.0
        self._emit(command)

    def release(self) -> None:
        self.command = None
        self._elapsed = 0.0

    def update(self, dt: float) -> int:
        """Advance the repeat timer and return how many repeats fired."""

        if self.command is None:
            return 0
        self._elapsed += dt
        fired = 0
        while self._elapsed >= self.interval:
            self._elapsed -= self.interval
            self._emit(self.command)
            fired += 1
        return fired


@dataclass
class _Touch:
    start_x: float
    start_y: float
    last_x: float
    last_y: float
    current_y: float
    moved: bool = False


class SwipeTracker:
    """Turn single-finger drags on the playfield into commands.

    Each horizontal step of ``step`` pixels moves the piece one column and
    each downward step soft drops it.  Lifting the finger without having
    moved rotates; an upward swipe of at least ``hard_drop`` pixels overall
    hard drops.
    """

    def __init__(self, step: float = SWIPE_STEP_PX, hard_drop: float = HARD_DROP_SWIPE_PX) -> None:
        self.step = step
        self.hard_drop = hard_drop
        self._touch: Optional[_Touch] = None

    @property
    def active(self) -> bool:
        return self._touch is not None

    def start(self, x: float, y: float, touches: int = 1) -> None:
        if touches > 1:
            return
        self._touch = _Touch(start_x=x, start_y=y, last_x=x, last_y=y, current_y=y)

    def move(self, x: float, y: float, touches: int = 1) -> List[Command]:
        touch = self._touch
        if touch is None or touches > 1:
            return []
        commands: List[Command] = []
        dx = x - touch.last_x
        dy = y - touch.last_y
        touch.current_y = y
        if abs(dx) >= self.step:
            commands.append(Command.MOVE_RIGHT if dx > 0 else Command.MOVE_LEFT)
            touch.last_x = x
            touch.moved = True
        if dy >= self.step:
            commands.append(Command.SOFT_DROP)
            touch.last_y = y
            touch.moved = True
        elif dy <= -self.step:
            touch.moved = True
        return commands

    def end(self) -> List[Command]:
        touch = self._touch
        self._touch = None
        if touch is None:
            return []
        if not touch.moved:
            return [Command.ROTATE]
        if touch.current_y - touch.start_y <= -self.hard_drop:
            return [Command.HARD_DROP]
        return []


__all__ = [
    "KEY_CODE_COMMANDS",
    "BUTTON_COMMANDS",
    "HoldRepeater",
    "SwipeTracker",
]
