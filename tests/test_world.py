"""Tests for citycraft.world.grid and citycraft.world.terrain."""

import numpy as np
import pytest

from citycraft.city.ledger import Ledger
from citycraft.city.metrics import code_grid, neighbour_mask
from citycraft.world.grid import Grid
from citycraft.world.terrain import Terrain, TerrainKind


class TestGrid:
    """Tests for index arithmetic and neighbour lookups."""

    def test_dimensions(self, grid: Grid) -> None:
        assert grid.size == 7
        assert grid.cell_count == 49

    def test_coords_round_trip(self, grid: Grid) -> None:
        assert grid.coords_of(0) == (0, 0)
        assert grid.coords_of(10) == (1, 3)
        assert grid.coords_of(48) == (6, 6)
        assert grid.index_of(1, 3) == 10

    def test_coords_out_of_bounds(self, grid: Grid) -> None:
        with pytest.raises(IndexError):
            grid.coords_of(49)
        with pytest.raises(IndexError):
            grid.coords_of(-1)
        with pytest.raises(IndexError):
            grid.index_of(7, 0)

    def test_contains_rejects_non_integers(self, grid: Grid) -> None:
        assert grid.contains(0)
        assert not grid.contains("3")  # type: ignore[arg-type]
        assert not grid.contains(None)  # type: ignore[arg-type]

    def test_contains_accepts_numpy_integers(self, grid: Grid) -> None:
        assert grid.contains(np.int64(8))
        assert grid.coords_of(np.int64(8)) == (1, 1)
        assert not grid.contains(np.int64(49))

    def test_contains_rejects_bools(self, grid: Grid) -> None:
        assert not grid.contains(True)
        assert not grid.contains(False)
        with pytest.raises(IndexError):
            grid.coords_of(True)

    def test_neighbours_corner(self, grid: Grid) -> None:
        assert sorted(grid.neighbours(0)) == [1, 7]

    def test_neighbours_edge(self, grid: Grid) -> None:
        assert sorted(grid.neighbours(3)) == [2, 4, 10]

    def test_neighbours_center(self, grid: Grid) -> None:
        assert sorted(grid.neighbours(24)) == [17, 23, 25, 31]

    def test_neighbours_do_not_wrap(self, grid: Grid) -> None:
        # Cell 6 is the end of row 0; cell 7 starts row 1
        assert 7 not in grid.neighbours(6)
        assert 6 not in grid.neighbours(7)


class TestTerrain:
    """Tests for the fixed terrain layout."""

    def test_deterministic(self, grid: Grid) -> None:
        assert Terrain.generate(grid) == Terrain.generate(grid)

    def test_river_border(self, terrain: Terrain, grid: Grid) -> None:
        for i in range(grid.size):
            assert terrain.kind_at(grid.index_of(0, i)) is TerrainKind.WATER
            assert terrain.kind_at(grid.index_of(i, 0)) is TerrainKind.WATER

    def test_canal(self, terrain: Terrain, grid: Grid) -> None:
        for row in range(2, 6):
            assert terrain.kind_at(grid.index_of(row, 3)) is TerrainKind.WATER
        # Canal stops short of row 1 and the last row
        assert terrain.kind_at(grid.index_of(1, 3)) is TerrainKind.LAND
        assert terrain.kind_at(grid.index_of(6, 3)) is TerrainKind.LAND

    def test_greenbelt(self, terrain: Terrain, grid: Grid) -> None:
        expected = {grid.index_of(r, c) for r, c in ((2, 5), (3, 5), (4, 1), (5, 2))}
        found = {i for i, k in enumerate(terrain.kinds) if k is TerrainKind.GREENBELT}
        assert found == expected

    def test_counts(self, terrain: Terrain) -> None:
        kinds = list(terrain.kinds)
        assert kinds.count(TerrainKind.WATER) == 17
        assert kinds.count(TerrainKind.GREENBELT) == 4
        assert kinds.count(TerrainKind.LAND) == 28
        assert len(terrain.buildable_cells()) == 32

    def test_greenbelt_is_buildable(self, terrain: Terrain, grid: Grid) -> None:
        assert terrain.is_buildable(grid.index_of(2, 5))
        assert not terrain.is_buildable(0)

    def test_kind_at_out_of_bounds(self, terrain: Terrain) -> None:
        with pytest.raises(IndexError):
            terrain.kind_at(49)


class TestNeighbourAgreement:
    """Grid.neighbours and the array-shift mask must describe the same board."""

    def test_mask_matches_neighbour_lists(self, grid: Grid) -> None:
        for index in range(grid.cell_count):
            ledger = Ledger(grid=grid)
            ledger.put(index, "park")
            mask = neighbour_mask(code_grid(ledger) >= 0).ravel()
            assert sorted(np.flatnonzero(mask).tolist()) == sorted(grid.neighbours(index))
