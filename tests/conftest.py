"""Shared fixtures for the CityCraft test suite."""

from __future__ import annotations

import pytest

from citycraft.city.ledger import Ledger
from citycraft.simulation.config import GameConfig
from citycraft.simulation.engine import GameEngine
from citycraft.world.grid import Grid
from citycraft.world.terrain import Terrain


@pytest.fixture
def grid() -> Grid:
    """The standard 7x7 board."""
    return Grid()


@pytest.fixture
def terrain(grid: Grid) -> Terrain:
    """The fixed river/canal layout."""
    return Terrain.generate(grid)


@pytest.fixture
def ledger(grid: Grid) -> Ledger:
    """An empty ledger on the standard board."""
    return Ledger(grid=grid)


@pytest.fixture
def default_config() -> GameConfig:
    """Default game config (no YAML file needed)."""
    return GameConfig()


@pytest.fixture
def engine(default_config: GameConfig) -> GameEngine:
    """An engine that has already left the menu."""
    game = GameEngine(config=default_config)
    game.start_game()
    return game


@pytest.fixture
def land_cells(terrain: Terrain) -> list[int]:
    """Every buildable cell, in index order."""
    return terrain.buildable_cells()
