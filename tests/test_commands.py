from __future__ import annotations

import pytest

from tetrix.commands import Command, apply
from tetrix.game_state import GameState
from tetrix.shapes import ShapeKind


@pytest.fixture
def state() -> GameState:
    gs = GameState()
    gs.bag.pool = [ShapeKind.T, ShapeKind.O]
    gs.reset_game()
    return gs


def test_vocabulary_is_fixed() -> None:
    assert {c.name for c in Command} == {
        "MOVE_LEFT",
        "MOVE_RIGHT",
        "SOFT_DROP",
        "HARD_DROP",
        "ROTATE",
        "TOGGLE_PAUSE",
        "RESET",
    }


def test_movement_commands(state: GameState) -> None:
    apply(state, Command.MOVE_LEFT)
    assert state.active.position == (0, 3)
    apply(state, Command.MOVE_RIGHT)
    apply(state, Command.MOVE_RIGHT)
    assert state.active.position == (0, 5)
    apply(state, Command.SOFT_DROP)
    assert state.active.position == (1, 5)


def test_rotate_command(state: GameState) -> None:
    apply(state, Command.HARD_DROP)
    assert state.active.kind == ShapeKind.T
    apply(state, Command.ROTATE)
    assert state.active.matrix == [[0, 1, 0], [0, 1, 1], [0, 1, 0]]


def test_string_values_are_accepted(state: GameState) -> None:
    apply(state, "toggle_pause")
    assert state.paused


def test_reset_command_keeps_board_identity(state: GameState) -> None:
    board = state.board
    grid = board.grid
    apply(state, Command.HARD_DROP)
    state.score = 100
    apply(state, Command.RESET)
    assert state.board is board
    assert state.board.grid is grid
    assert not grid.any()
    assert state.score == 0


def test_unknown_command_raises(state: GameState) -> None:
    with pytest.raises(ValueError):
        apply(state, "teleport")
