"""Terrain — the static buildability map of the board.

The layout is derived once per session and never changes: a river runs
along the top row and left column, a canal cuts down the middle of the
board, and a few greenbelt patches are scattered on the land.  Water
cells refuse buildings; greenbelt is purely cosmetic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from citycraft.world.grid import Grid


class TerrainKind(Enum):
    """What a cell is made of."""

    LAND = "land"
    WATER = "water"
    GREENBELT = "greenbelt"


# Fixed cosmetic patches as (row, col)
_GREENBELT_CELLS: tuple[tuple[int, int], ...] = ((2, 5), (3, 5), (4, 1), (5, 2))
_CANAL_COLUMN = 3
_CANAL_FIRST_ROW = 2


@dataclass(frozen=True)
class Terrain:
    """Per-cell terrain for one board.

    Attributes:
        grid: The board the layout belongs to.
        kinds: Terrain kind for every cell, indexed linearly.
    """

    grid: Grid
    kinds: tuple[TerrainKind, ...] = field(repr=False)

    @classmethod
    def generate(cls, grid: Grid | None = None) -> Terrain:
        """Build the fixed layout for ``grid``.

        No randomness is involved, so every session sees the same map.

        Args:
            grid: Board to lay out (defaults to the standard 7x7 board).

        Returns:
            A new Terrain instance.
        """
        grid = grid or Grid()
        kinds = [TerrainKind.LAND] * grid.cell_count

        # River along the first row and first column
        for col in range(grid.size):
            kinds[grid.index_of(0, col)] = TerrainKind.WATER
        for row in range(grid.size):
            kinds[grid.index_of(row, 0)] = TerrainKind.WATER

        # Canal through the interior, stopping one row short of the edge
        if _CANAL_COLUMN < grid.size:
            for row in range(_CANAL_FIRST_ROW, grid.size - 1):
                kinds[grid.index_of(row, _CANAL_COLUMN)] = TerrainKind.WATER

        for row, col in _GREENBELT_CELLS:
            if row < grid.size and col < grid.size:
                kinds[grid.index_of(row, col)] = TerrainKind.GREENBELT

        return cls(grid=grid, kinds=tuple(kinds))

    def kind_at(self, index: int) -> TerrainKind:
        """Return the terrain kind of a cell.

        Raises:
            IndexError: If the index is off the board.
        """
        self.grid.coords_of(index)
        return self.kinds[index]

    def is_buildable(self, index: int) -> bool:
        """Return True unless the cell is water."""
        return self.kind_at(index) is not TerrainKind.WATER

    def buildable_cells(self) -> list[int]:
        """Return every cell index that accepts a building, in order."""
        return [i for i, k in enumerate(self.kinds) if k is not TerrainKind.WATER]
