"""Ledger — the authoritative record of which building sits on which cell.

The ledger only stores building ids.  Rule checks (terrain, budget,
phase) belong to the engine; the ledger just refuses writes that would
break its own bookkeeping.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from citycraft.world.grid import Grid


@dataclass
class Ledger:
    """Mapping from cell index to building id, or None when empty.

    Attributes:
        grid: Board the ledger covers.
        cells: Occupant id per cell.
        version: Bumped on every mutation; lets callers cache derived data.
    """

    grid: Grid = field(default_factory=Grid)
    cells: list[str | None] = field(init=False, repr=False)
    version: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Start with every cell empty."""
        self.cells = [None] * self.grid.cell_count

    def occupant(self, index: int) -> str | None:
        """Return the building id on a cell, or None.

        Raises:
            IndexError: If the index is off the board.
        """
        self.grid.coords_of(index)
        return self.cells[index]

    def is_empty(self, index: int) -> bool:
        """Return True if nothing is built on the cell."""
        return self.occupant(index) is None

    def put(self, index: int, building_id: str) -> None:
        """Record a building on an empty cell.

        Raises:
            IndexError: If the index is off the board.
            ValueError: If the cell is already occupied.
        """
        if not self.is_empty(index):
            msg = f"cell {index} already holds {self.cells[index]!r}"
            raise ValueError(msg)
        self.cells[index] = building_id
        self.version += 1

    def remove(self, index: int) -> str:
        """Clear an occupied cell and return the id that was there.

        Raises:
            IndexError: If the index is off the board.
            ValueError: If the cell is already empty.
        """
        current = self.occupant(index)
        if current is None:
            msg = f"cell {index} is empty"
            raise ValueError(msg)
        self.cells[index] = None
        self.version += 1
        return current

    def occupied(self) -> Iterator[tuple[int, str]]:
        """Yield ``(index, building_id)`` for every occupied cell."""
        for index, building_id in enumerate(self.cells):
            if building_id is not None:
                yield index, building_id
