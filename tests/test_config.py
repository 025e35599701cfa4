"""Tests for citycraft.simulation.config — defaults and YAML loading."""

from pathlib import Path

import pytest

from citycraft.__main__ import _DEFAULT_CONFIG, load_config
from citycraft.simulation.config import GameConfig


class TestGameConfig:
    """Tests for YAML config loading."""

    def test_defaults(self, default_config: GameConfig) -> None:
        assert default_config.start_budget == 1000
        assert default_config.max_turns == 30
        assert default_config.overdraft_floor == -50
        assert default_config.marker_seconds == 0.6

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("start_budget: 500\nmax_turns: 12\n")
        cfg = GameConfig.from_yaml(yaml_file)
        assert cfg.start_budget == 500
        assert cfg.max_turns == 12
        assert cfg.overdraft_floor == -50

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert GameConfig.from_yaml(yaml_file) == GameConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            GameConfig.from_yaml(tmp_path / "nope.yaml")

    def test_rejects_zero_turns(self) -> None:
        with pytest.raises(ValueError):
            GameConfig(max_turns=0)

    def test_rejects_floor_above_budget(self) -> None:
        with pytest.raises(ValueError):
            GameConfig(start_budget=10, overdraft_floor=20)

    def test_default_config_ships_inside_package(self) -> None:
        assert _DEFAULT_CONFIG.is_file()
        assert _DEFAULT_CONFIG.parent.parent.name == "citycraft"
        assert GameConfig.from_yaml(_DEFAULT_CONFIG) == GameConfig()

    def test_load_config_falls_back(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "missing.yaml") == GameConfig()
