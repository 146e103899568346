"""Falling-block puzzle engine with desktop and browser front-ends."""

from .bag import Bag
from .board import Board
from .commands import Command, apply
from .game_state import GameState, Snapshot
from .shapes import Piece, ShapeKind, rotate
from .storage import JsonScoreStore, LocalStorageStore
from .utils import drop_interval_ms, line_clear_score, render_grid

__all__ = [
    "Bag",
    "Board",
    "Command",
    "GameState",
    "JsonScoreStore",
    "LocalStorageStore",
    "Piece",
    "ShapeKind",
    "Snapshot",
    "apply",
    "drop_interval_ms",
    "line_clear_score",
    "render_grid",
    "rotate",
]
