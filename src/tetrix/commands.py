"""Player command vocabulary and the single entry point that applies it.

Input adapters translate device events into :class:`Command` values and push
them through :func:`apply`, one at a time, so the game state only ever has
one writer.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

from .game_state import GameState


class Command(str, Enum):
    """Every action a player can request."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE = "rotate"
    TOGGLE_PAUSE = "toggle_pause"
    RESET = "reset"


_HANDLERS: Dict[Command, Callable[[GameState], object]] = {
    Command.MOVE_LEFT: lambda state: state.player_move(-1),
    Command.MOVE_RIGHT: lambda state: state.player_move(1),
    Command.SOFT_DROP: lambda state: state.soft_drop(),
    Command.HARD_DROP: lambda state: state.hard_drop(),
    Command.ROTATE: lambda state: state.player_rotate(),
    Command.TOGGLE_PAUSE: lambda state: state.toggle_pause(),
    Command.RESET: lambda state: state.reset_game(),
}


def apply(state: GameState, command: Command | str) -> None:
    """Apply ``command`` to ``state``.

    Pausing only stops gravity; movement commands are still honoured here and
    it is up to the input layer to drop them if it wants to.

    Raises:
        ValueError: If ``command`` is not a known command.
    """

    _HANDLERS[Command(command)](state)


__all__ = ["Command", "apply"]
