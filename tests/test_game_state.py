from __future__ import annotations

import random

from tetrix.bag import Bag
from tetrix.game_state import GameState
from tetrix.shapes import ShapeKind


def _new_state(first: ShapeKind, upcoming: ShapeKind = ShapeKind.T) -> GameState:
    state = GameState()
    state.bag.pool = [upcoming, first]
    state.reset_game()
    return state


def test_spawn_is_centred() -> None:
    assert _new_state(ShapeKind.O).active.position == (0, 4)
    assert _new_state(ShapeKind.I).active.position == (0, 3)
    assert _new_state(ShapeKind.T).active.position == (0, 4)


def test_reset_fills_upcoming_piece() -> None:
    state = _new_state(ShapeKind.O, upcoming=ShapeKind.S)
    assert state.active.kind == ShapeKind.O
    assert state.upcoming.kind == ShapeKind.S


def test_move_is_reverted_at_the_wall() -> None:
    state = _new_state(ShapeKind.O)
    moves = [state.player_move(-1) for _ in range(6)]
    assert moves == [True, True, True, True, False, False]
    assert state.active.position == (0, 0)
    assert state.player_move(1)
    assert state.active.position == (0, 1)


def test_rotation_without_kick() -> None:
    state = _new_state(ShapeKind.I)
    assert state.player_rotate()
    assert state.active.position == (0, 3)
    assert [row[2] for row in state.active.matrix] == [1, 1, 1, 1]


def test_rotation_kicks_off_the_right_wall() -> None:
    state = _new_state(ShapeKind.I)
    state.player_rotate()
    for _ in range(10):
        state.player_move(1)
    assert state.active.position == (0, 7)

    assert state.player_rotate()
    assert state.active.position == (0, 6)
    assert sorted(c for _, c in state.active.blocks()) == [6, 7, 8, 9]


def test_rotation_tries_left_before_right() -> None:
    state = _new_state(ShapeKind.I)
    state.player_rotate()
    # The horizontal I would cover row 2, columns 3-6.  Blocking column 3 rules
    # out the unshifted and left-shifted positions but not the right shift.
    state.board.set_cell(2, 3, 1)
    assert state.player_rotate()
    assert state.active.position == (0, 4)


def test_rotation_reverts_when_nothing_fits() -> None:
    state = _new_state(ShapeKind.I)
    state.player_rotate()
    vertical = [row[:] for row in state.active.matrix]
    for col in range(state.board.width):
        if col != 5:
            state.board.set_cell(2, col, 1)
    assert not state.player_rotate()
    assert state.active.matrix == vertical
    assert state.active.position == (0, 3)


def test_soft_drop_never_locks() -> None:
    state = _new_state(ShapeKind.O)
    piece = state.active
    results = [state.soft_drop() for _ in range(25)]
    assert results.count(True) == 18
    assert state.active is piece
    assert state.active.position == (18, 4)
    assert not state.board.grid.any()


def test_hard_drop_locks_and_spawns_next() -> None:
    state = _new_state(ShapeKind.O, upcoming=ShapeKind.L)
    state.hard_drop()
    assert state.board.get_cell(19, 4) != 0
    assert state.board.get_cell(18, 5) != 0
    assert state.active.kind == ShapeKind.L
    assert state.active.position == (0, 4)
    assert state.upcoming is not None


def test_hard_drop_twice_never_overlaps() -> None:
    state = GameState(bag=Bag(random.Random(5)))
    state.reset_game()
    rng = random.Random(9)
    for _ in range(300):
        state.player_move(rng.choice((-1, 1)) * rng.randint(0, 1))
        if rng.random() < 0.5:
            state.player_rotate()
        state.hard_drop()
        assert not state.board.collide(state.active)
        state.hard_drop()
        assert not state.board.collide(state.active)


def test_ghost_row_does_not_move_the_piece() -> None:
    state = _new_state(ShapeKind.O)
    state.board.set_cell(15, 4, 1)
    assert state.ghost_row() == 13
    assert state.active.position == (0, 4)
    state.player_move(-2)
    assert state.ghost_row() == 18


def test_snapshot_is_detached() -> None:
    state = _new_state(ShapeKind.O, upcoming=ShapeKind.Z)
    snap = state.snapshot()
    assert snap.ghost_row == 18
    assert snap.upcoming.kind == ShapeKind.Z
    assert (snap.score, snap.level, snap.lines, snap.paused) == (0, 1, 0, False)
    snap.cells[0][0] = 9
    snap.active.move(0, 5)
    assert state.board.get_cell(0, 0) == 0
    assert state.active.position == (0, 4)


def test_operations_before_start_are_ignored() -> None:
    state = GameState()
    assert not state.player_move(1)
    assert not state.player_rotate()
    assert not state.soft_drop()
    state.hard_drop()
    state.player_drop()
    assert state.active is None
    assert state.ghost_row() is None


def test_lock_without_active_piece_is_ignored() -> None:
    state = GameState()
    state._lock()
    assert state.active is None
    assert state.upcoming is None
    assert not state.board.grid.any()
