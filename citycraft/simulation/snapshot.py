"""Snapshot — the read-only view of a game session.

The view layer never touches the engine's fields directly; it renders a
GameSnapshot taken after each command.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from citycraft.city.metrics import Metrics, Targets
from citycraft.world.terrain import TerrainKind


class Phase(Enum):
    """Where the session is in its lifecycle."""

    MENU = "menu"
    PLAYING = "playing"
    ENDED = "ended"


class EndReason(Enum):
    """Why a session moved to ``Phase.ENDED``."""

    TARGETS_MET = "targets_met"
    OUT_OF_TURNS = "out_of_turns"
    OVERDRAWN = "overdrawn"
    FINISHED_EARLY = "finished_early"


@dataclass(frozen=True)
class GameSnapshot:
    """Everything the view needs to draw one frame.

    Attributes:
        phase: Current lifecycle phase.
        budget: Money left (may be negative down to the overdraft floor).
        turns_used: Successful placements so far.
        turns_left: Placements remaining before the turn cap.
        selected: Building id chosen in the palette, if any.
        terrain: Terrain kind per cell.
        occupants: Building id per cell, or None.
        metrics: Current derived city metrics.
        targets: Win thresholds.
        targets_met: Whether every target currently holds.
        message: Last advisory message for the player.
        end_reason: Why the game ended, once it has.
    """

    phase: Phase
    budget: int
    turns_used: int
    turns_left: int
    selected: str | None
    terrain: tuple[TerrainKind, ...]
    occupants: tuple[str | None, ...]
    metrics: Metrics
    targets: Targets
    targets_met: bool
    message: str
    end_reason: EndReason | None = None

    @property
    def won(self) -> bool:
        """True once the session ended with every target met."""
        return self.end_reason is EndReason.TARGETS_MET
