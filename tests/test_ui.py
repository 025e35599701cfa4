"""Tests for the UI modules (no display required)."""

from __future__ import annotations

from citycraft.ui.debrief import DEBRIEF_QUESTIONS, DebriefGate
from citycraft.ui.markers import RecentPlacements
from citycraft.ui.pygame_client import PygameRenderer, bar_fill, cell_at_pixel


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from citycraft.__main__ import main

    assert callable(main)


class TestCellAtPixel:
    """Tests for mapping mouse positions to board cells."""

    def test_first_cell(self) -> None:
        assert cell_at_pixel(0, 0, 80, 7) == 0

    def test_row_major(self) -> None:
        assert cell_at_pixel(85, 170, 80, 7) == 2 * 7 + 1

    def test_off_board(self) -> None:
        assert cell_at_pixel(560, 10, 80, 7) is None
        assert cell_at_pixel(10, 560, 80, 7) is None
        assert cell_at_pixel(-1, 10, 80, 7) is None


class TestBarFill:
    """Tests for metric bar proportions."""

    def test_normal_bar(self) -> None:
        assert bar_fill(0, 60) == 0.0
        assert bar_fill(30, 60) == 0.5
        assert bar_fill(120, 60) == 1.0

    def test_negative_value(self) -> None:
        assert bar_fill(-12, 60) == 0.0

    def test_inverse_bar(self) -> None:
        assert bar_fill(10, 50, inverse=True) == 1.0
        assert bar_fill(75, 50, inverse=True) == 0.5
        assert bar_fill(200, 50, inverse=True) == 0.0


class TestRecentPlacements:
    """Tests for the transient placement highlight."""

    def test_marker_expires(self) -> None:
        markers = RecentPlacements(lifetime=0.6)
        markers.mark(8, now=0.0)
        assert markers.active(0.5) == {8}
        assert markers.active(0.6) == set()
        assert markers.age(8, 0.7) is None

    def test_age(self) -> None:
        markers = RecentPlacements(lifetime=1.0)
        markers.mark(3, now=2.0)
        assert markers.age(3, 2.25) == 0.25
        assert markers.age(4, 2.25) is None

    def test_discard_and_clear(self) -> None:
        markers = RecentPlacements()
        markers.mark(1, now=0.0)
        markers.mark(2, now=0.0)
        markers.discard(1)
        markers.discard(5)
        assert markers.active(0.1) == {2}
        markers.clear()
        assert markers.active(0.1) == set()


class TestDebriefGate:
    """Tests for the password-gated debrief questions."""

    def test_locked_by_default(self) -> None:
        gate = DebriefGate()
        assert not gate.unlocked
        assert gate.questions() == ()

    def test_wrong_password(self) -> None:
        gate = DebriefGate()
        assert not gate.try_unlock("city")
        assert gate.questions() == ()

    def test_password_is_case_insensitive(self) -> None:
        gate = DebriefGate()
        assert gate.try_unlock("HEMS")
        assert gate.questions() == DEBRIEF_QUESTIONS
        assert len(gate.questions()) == 6
