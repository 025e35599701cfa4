"""Grid — the fixed square board that buildings are placed on.

Cells are identified by a linear index ``0..size*size-1`` running row by
row.  The grid converts between indices and ``(row, col)`` pairs and
answers the neighbour queries used by the adjacency bonuses.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass

GRID_SIZE = 7

# Cardinal offsets only: (d_row, d_col)
_CARDINAL: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True)
class Grid:
    """A square board of ``size`` x ``size`` cells.

    Attributes:
        size: Number of rows (and columns).
    """

    size: int = GRID_SIZE

    @property
    def cell_count(self) -> int:
        """Total number of cells on the board."""
        return self.size * self.size

    def contains(self, index: object) -> bool:
        """Return True if ``index`` names a cell on this board.

        Any integer type counts (NumPy integers included); bools and
        non-integers never name a cell.
        """
        if isinstance(index, bool):
            return False
        try:
            value = operator.index(index)
        except TypeError:
            return False
        return 0 <= value < self.cell_count

    def coords_of(self, index: int) -> tuple[int, int]:
        """Return ``(row, col)`` for a linear cell index.

        Raises:
            IndexError: If the index is off the board.
        """
        if not self.contains(index):
            msg = f"cell {index!r} out of bounds for {self.size}x{self.size}"
            raise IndexError(msg)
        return divmod(operator.index(index), self.size)

    def index_of(self, row: int, col: int) -> int:
        """Return the linear index for ``(row, col)``.

        Raises:
            IndexError: If the coordinates are off the board.
        """
        if not (0 <= row < self.size and 0 <= col < self.size):
            msg = f"({row}, {col}) out of bounds for {self.size}x{self.size}"
            raise IndexError(msg)
        return row * self.size + col

    def neighbours(self, index: int) -> list[int]:
        """Return the indices of the up/down/left/right neighbours.

        Edges do not wrap, so corner cells have two neighbours and edge
        cells three.
        """
        row, col = self.coords_of(index)
        result: list[int] = []
        for dr, dc in _CARDINAL:
            rr, cc = row + dr, col + dc
            if 0 <= rr < self.size and 0 <= cc < self.size:
                result.append(rr * self.size + cc)
        return result
