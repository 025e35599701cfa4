"""Tests for the hover preview and the start-screen text."""

from __future__ import annotations

from citycraft.city.catalogue import HDB, MRT, PARK, get_building
from citycraft.simulation.config import GameConfig
from citycraft.simulation.engine import GameEngine
from citycraft.ui.preview import adjacency_bonuses, hover_hint
from citycraft.ui.pygame_client import HOW_TO_PLAY, objective_lines


class TestHoverHint:
    """Tests for what hovering an empty cell shows."""

    def test_hdb_next_to_mrt(self, engine: GameEngine) -> None:
        engine.place(10, MRT)
        engine.select_building(HDB)
        hint = hover_hint(engine.snapshot(), 9, engine.grid)
        assert hint is not None
        assert hint.buildable
        assert hint.building_id == HDB
        assert hint.bonuses == (("access", 6),)
        assert hint.text == "-$60  +6 access"

    def test_plain_cost_without_neighbours(self, engine: GameEngine) -> None:
        engine.select_building(PARK)
        hint = hover_hint(engine.snapshot(), 9, engine.grid)
        assert hint is not None
        assert hint.bonuses == ()
        assert hint.text == "-$45"

    def test_water_warning(self, engine: GameEngine) -> None:
        engine.select_building(HDB)
        hint = hover_hint(engine.snapshot(), 0, engine.grid)
        assert hint is not None
        assert not hint.buildable
        assert hint.text == "Can't build on water!"
        assert hint.building_id is None

    def test_occupied_cell_has_no_hint(self, engine: GameEngine) -> None:
        engine.select_building(HDB)
        engine.place(9)
        assert hover_hint(engine.snapshot(), 9, engine.grid) is None

    def test_nothing_selected(self, engine: GameEngine) -> None:
        assert hover_hint(engine.snapshot(), 9, engine.grid) is None

    def test_off_board(self, engine: GameEngine) -> None:
        engine.select_building(HDB)
        assert hover_hint(engine.snapshot(), 49, engine.grid) is None
        assert hover_hint(engine.snapshot(), -1, engine.grid) is None

    def test_not_playing(self) -> None:
        game = GameEngine(config=GameConfig())
        game.selected = HDB
        assert hover_hint(game.snapshot(), 9, game.grid) is None


class TestAdjacencyBonuses:
    """Tests for predicting the adjacency change of a placement."""

    def test_mrt_between_two_hdbs(self, engine: GameEngine) -> None:
        engine.place(8, HDB)
        engine.place(10, HDB)
        bonuses = adjacency_bonuses(engine.snapshot(), 9, MRT, engine.grid)
        assert bonuses == {"access": 12}

    def test_park_calms_lonely_hdb(self, engine: GameEngine) -> None:
        engine.place(9, HDB)
        bonuses = adjacency_bonuses(engine.snapshot(), 10, PARK, engine.grid)
        assert bonuses == {"noise": -1}

    def test_second_park_adds_nothing(self, engine: GameEngine) -> None:
        engine.place(9, HDB)
        engine.place(8, PARK)
        bonuses = adjacency_bonuses(engine.snapshot(), 10, PARK, engine.grid)
        assert bonuses == {}

    def test_matches_real_placement(self, engine: GameEngine) -> None:
        engine.place(10, MRT)
        engine.place(16, PARK)
        before = engine.metrics()
        bonuses = adjacency_bonuses(engine.snapshot(), 9, HDB, engine.grid)
        engine.place(9, HDB)
        after = engine.metrics()
        effect = get_building(HDB).effect
        assert after.access - before.access == effect.access + bonuses["access"]
        assert after.noise - before.noise == effect.noise + bonuses["noise"]


class TestStartScreenText:
    """Tests for the objectives and how-to-play lines."""

    def test_objectives_show_targets_and_budget(self) -> None:
        game = GameEngine(config=GameConfig())
        lines = objective_lines(game.snapshot())
        assert "Access >= 85   Green >= 60   Noise <= 50" in lines
        assert "Jobs >= 45   Housing >= 55" in lines
        assert "Budget $1000, 30 turns (placements)." in lines

    def test_objectives_follow_config(self) -> None:
        game = GameEngine(config=GameConfig(start_budget=500, max_turns=12))
        lines = objective_lines(game.snapshot())
        assert "Budget $500, 12 turns (placements)." in lines

    def test_how_to_play_mentions_refund_and_water(self) -> None:
        text = " ".join(HOW_TO_PLAY)
        assert "50% refund" in text
        assert "Water" in text
