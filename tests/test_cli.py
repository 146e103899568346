from __future__ import annotations

import pytest

from tetrix.__main__ import ascii_frame, main
from tetrix.board import Board
from tetrix.shapes import Piece, ShapeKind
from tetrix.utils import render_grid


def test_render_grid_overlays_piece_and_ghost() -> None:
    board = Board()
    board.set_cell(19, 0, 7)
    piece = Piece.create(ShapeKind.O)
    piece.position = (0, 4)
    grid = render_grid(board, piece, ghost_row=18)
    assert grid[0][4] == grid[1][5] == piece.value
    assert grid[18][4] == grid[19][5] == -1
    assert grid[19][0] == 7
    assert not board.grid[0].any()


def test_ascii_frame_shows_active_piece() -> None:
    lines = ascii_frame(seed=4).splitlines()
    assert len(lines) == Board.height
    assert all(len(line) == Board.width for line in lines)
    assert sum(line.count("#") for line in lines) == 4
    assert sum(line.count(":") for line in lines) == 4


def test_main_prints_frame(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--seed", "2", "--log-level", "WARNING"])
    out = capsys.readouterr().out
    assert len(out.splitlines()) == Board.height
