"""Board representation for the Tetris playfield."""

from __future__ import annotations

from typing import List

import numpy as np
from numpy.typing import NDArray

from .shapes import Piece


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Tetris board holding the locked cells.

    Each cell stores ``0`` when empty or the colour id of the piece that was
    merged into it.  Row ``0`` is the top of the playfield.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def collide(self, piece: Piece) -> bool:
        """Return ``True`` if ``piece`` overlaps a wall, the floor or a cell.

        Blocks above the top edge (negative rows) never collide so pieces may
        spawn partially off-screen.
        """

        for row, col in piece.blocks():
            if col < 0 or col >= self.width or row >= self.height:
                return True
            if row >= 0 and self.grid[row, col] != 0:
                return True
        return False

    def merge(self, piece: Piece) -> None:
        """Write the piece's colour id into every on-board cell it covers."""

        value = np.uint8(piece.value)
        for row, col in piece.blocks():
            if 0 <= row < self.height and 0 <= col < self.width:
                self.grid[row, col] = value

    def clear_lines(self) -> int:
        """Remove full rows, shifting the rest down, and return the count.

        Rows are scanned bottom to top; after a removal the same index is
        examined again since the rows above have moved into it.
        """

        cleared = 0
        row = self.height - 1
        while row >= 0:
            if np.all(self.grid[row] != 0):
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0] = 0
                cleared += 1
                continue
            row -= 1
        return cleared

    def clear(self) -> None:
        """Empty every cell in place."""

        self.grid.fill(0)

    def rows(self) -> List[List[int]]:
        """Return a copy of the grid as nested lists."""

        return self.grid.tolist()


__all__ = ["Board", "WIDTH", "HEIGHT", "create_empty_grid"]
