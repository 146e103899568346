"""Shape catalog and the active piece model.

Each of the seven tetrominoes is described by a square occupancy matrix in its
spawn orientation.  Rotations are not precomputed; the active piece owns a
mutable copy of its matrix and rotates it in place via :func:`rotate`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple

Matrix = List[List[int]]


class ShapeKind(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


SHAPES: Dict[ShapeKind, Tuple[Tuple[int, ...], ...]] = {
    ShapeKind.I: (
        (0, 0, 0, 0),
        (1, 1, 1, 1),
        (0, 0, 0, 0),
        (0, 0, 0, 0),
    ),
    ShapeKind.J: (
        (1, 0, 0),
        (1, 1, 1),
        (0, 0, 0),
    ),
    ShapeKind.L: (
        (0, 0, 1),
        (1, 1, 1),
        (0, 0, 0),
    ),
    ShapeKind.O: (
        (1, 1),
        (1, 1),
    ),
    ShapeKind.S: (
        (0, 1, 1),
        (1, 1, 0),
        (0, 0, 0),
    ),
    ShapeKind.T: (
        (0, 1, 0),
        (1, 1, 1),
        (0, 0, 0),
    ),
    ShapeKind.Z: (
        (1, 1, 0),
        (0, 1, 1),
        (0, 0, 0),
    ),
}

COLORS: Dict[ShapeKind, str] = {
    ShapeKind.I: "#60a5fa",
    ShapeKind.J: "#93c5fd",
    ShapeKind.L: "#f59e0b",
    ShapeKind.O: "#fbbf24",
    ShapeKind.S: "#22c55e",
    ShapeKind.T: "#a78bfa",
    ShapeKind.Z: "#ef4444",
}

# Mapping from ``ShapeKind`` to the integer stored in the board grid.  ``0``
# is reserved for the empty cell.
PIECE_VALUES: Dict[ShapeKind, int] = {k: i + 1 for i, k in enumerate(ShapeKind)}

CELL_COLORS: Dict[int, str] = {PIECE_VALUES[k]: COLORS[k] for k in ShapeKind}


def base_matrix(kind: ShapeKind) -> Matrix:
    """Return a fresh, mutable copy of ``kind``'s spawn matrix."""

    return [list(row) for row in SHAPES[kind]]


def rotate(matrix: Sequence[Sequence[int]]) -> Matrix:
    """Return ``matrix`` rotated 90 degrees clockwise.

    For an ``H x W`` source the result is ``W x H`` with
    ``result[x][H - 1 - y] == matrix[y][x]``.  Rectangular input is accepted;
    the source is never modified.
    """

    height = len(matrix)
    width = len(matrix[0])
    result = [[0] * height for _ in range(width)]
    for y in range(height):
        for x in range(width):
            result[x][height - 1 - y] = matrix[y][x]
    return result


@dataclass
class Piece:
    """A tetromino with its own occupancy matrix and board position."""

    kind: ShapeKind
    matrix: Matrix = field(default_factory=list)
    position: Tuple[int, int] = (0, 0)  # (row, col) of the matrix's top-left

    @classmethod
    def create(cls, kind: ShapeKind) -> "Piece":
        return cls(kind=kind, matrix=base_matrix(kind))

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.kind]

    @property
    def width(self) -> int:
        return len(self.matrix[0]) if self.matrix else 0

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by ``dx`` columns and ``dy`` rows."""

        row, col = self.position
        self.position = (row + dy, col + dx)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(row, col)`` of every occupied cell."""

        row, col = self.position
        return [
            (row + y, col + x)
            for y, line in enumerate(self.matrix)
            for x, value in enumerate(line)
            if value
        ]

    def copy(self) -> "Piece":
        return Piece(
            kind=self.kind,
            matrix=[line[:] for line in self.matrix],
            position=self.position,
        )


__all__ = [
    "ShapeKind",
    "SHAPES",
    "COLORS",
    "PIECE_VALUES",
    "CELL_COLORS",
    "Piece",
    "base_matrix",
    "rotate",
]
