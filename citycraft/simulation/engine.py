"""GameEngine — the turn/budget economy and the win/loss state machine.

Owns the only mutable state of a session (ledger, budget, turns, phase)
and exposes it through a small set of commands.  Every command returns a
CommandResult holding either nothing or a typed Rejection, plus a fresh
GameSnapshot.  Commands never raise for player input: a rejected command
leaves the state untouched apart from the advisory message.

Control flow for each command:

1. Validate the command against phase, board and budget
2. Mutate the ledger / budget / turn counter
3. Recompute metrics from the ledger
4. Re-evaluate the phase (win, turn cap, overdraft)
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass, field
from enum import Enum

from citycraft.city.catalogue import get_building, is_known
from citycraft.city.ledger import Ledger
from citycraft.city.metrics import Metrics, Targets, compute_metrics
from citycraft.simulation.config import GameConfig
from citycraft.simulation.snapshot import EndReason, GameSnapshot, Phase
from citycraft.world.grid import Grid
from citycraft.world.terrain import Terrain

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Pick a building, then click the map."
START_MESSAGE = "Hint: HDB next to MRT boosts access."


class Rejection(Enum):
    """Why a command was refused."""

    WRONG_PHASE = "wrong_phase"
    OUT_OF_RANGE = "out_of_range"
    WATER_BLOCKED = "water_blocked"
    ALREADY_OCCUPIED = "already_occupied"
    EMPTY_CELL = "empty_cell"
    NO_SELECTION = "no_selection"
    UNKNOWN_BUILDING = "unknown_building"
    BUDGET_TOO_LOW = "budget_too_low"


_REJECTION_MESSAGES: dict[Rejection, str] = {
    Rejection.WRONG_PHASE: "That isn't possible right now.",
    Rejection.OUT_OF_RANGE: "That cell is not on the map.",
    Rejection.WATER_BLOCKED: "Cannot build on water!",
    Rejection.ALREADY_OCCUPIED: "Something is already built there.",
    Rejection.EMPTY_CELL: "Nothing to demolish there.",
    Rejection.NO_SELECTION: "Select a building first.",
    Rejection.UNKNOWN_BUILDING: "Unknown building type.",
    Rejection.BUDGET_TOO_LOW: "Budget too low.",
}


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command.

    Attributes:
        snapshot: Game state after the command.
        rejection: Reason the command was refused, or None on success.
    """

    snapshot: GameSnapshot
    rejection: Rejection | None = None

    @property
    def ok(self) -> bool:
        return self.rejection is None

    @property
    def message(self) -> str:
        return self.snapshot.message


@dataclass
class GameEngine:
    """A single play session on the fixed board.

    Attributes:
        config: Economy settings.
        targets: Win thresholds.
        grid: The board.
        terrain: Static buildability map, generated once.
        ledger: Current placements.
        phase: Lifecycle phase.
        budget: Money left.
        turns_used: Successful placements this session.
        selected: Building chosen in the palette.
        message: Last advisory message.
        end_reason: Why the session ended, once it has.
    """

    config: GameConfig = field(default_factory=GameConfig)
    targets: Targets = field(default_factory=Targets)
    grid: Grid = field(init=False)
    terrain: Terrain = field(init=False, repr=False)
    ledger: Ledger = field(init=False, repr=False)
    phase: Phase = field(init=False, default=Phase.MENU)
    budget: int = field(init=False)
    turns_used: int = field(init=False, default=0)
    selected: str | None = field(init=False, default=None)
    message: str = field(init=False, default=WELCOME_MESSAGE)
    end_reason: EndReason | None = field(init=False, default=None)
    _metrics_cache: tuple[int, Metrics] | None = field(
        init=False,
        default=None,
        repr=False,
    )

    def __post_init__(self) -> None:
        """Build the board, terrain and an empty ledger."""
        self.grid = Grid()
        self.terrain = Terrain.generate(self.grid)
        self.ledger = Ledger(grid=self.grid)
        self.budget = self.config.start_budget

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def turns_left(self) -> int:
        return self.config.max_turns - self.turns_used

    def metrics(self) -> Metrics:
        """Return the metrics for the current ledger.

        Cached against the ledger version; the result is identical to
        calling ``compute_metrics`` directly.
        """
        version = self.ledger.version
        if self._metrics_cache is None or self._metrics_cache[0] != version:
            self._metrics_cache = (version, compute_metrics(self.ledger, self.terrain))
        return self._metrics_cache[1]

    def targets_met(self) -> bool:
        return self.targets.met_by(self.metrics())

    def snapshot(self) -> GameSnapshot:
        """Return a read-only copy of everything the view renders."""
        metrics = self.metrics()
        return GameSnapshot(
            phase=self.phase,
            budget=self.budget,
            turns_used=self.turns_used,
            turns_left=self.turns_left,
            selected=self.selected,
            terrain=self.terrain.kinds,
            occupants=tuple(self.ledger.cells),
            metrics=metrics,
            targets=self.targets,
            targets_met=self.targets.met_by(metrics),
            message=self.message,
            end_reason=self.end_reason,
        )

    # ------------------------------------------------------------------
    # Lifecycle commands
    # ------------------------------------------------------------------

    def start_game(self) -> CommandResult:
        """Leave the menu and begin a fresh session."""
        if self.phase is not Phase.MENU:
            return self._reject(Rejection.WRONG_PHASE)
        self._reset()
        return self._accept(START_MESSAGE)

    def restart(self) -> CommandResult:
        """Begin a fresh session after the previous one ended."""
        if self.phase is not Phase.ENDED:
            return self._reject(Rejection.WRONG_PHASE)
        self._reset()
        return self._accept(START_MESSAGE)

    def finish_early(self) -> CommandResult:
        """End the current session on the player's request."""
        if self.phase is not Phase.PLAYING:
            return self._reject(Rejection.WRONG_PHASE)
        reason = EndReason.TARGETS_MET if self.targets_met() else EndReason.FINISHED_EARLY
        self._end(reason)
        return self._accept("Finished early.")

    # ------------------------------------------------------------------
    # Board commands
    # ------------------------------------------------------------------

    def select_building(self, building_id: str) -> CommandResult:
        """Choose the building that the next click on an empty cell places."""
        if not is_known(building_id):
            return self._reject(Rejection.UNKNOWN_BUILDING)
        self.selected = building_id
        return self._accept(get_building(building_id).tip)

    def place_or_demolish(self, index: int) -> CommandResult:
        """Handle a click on a cell.

        An occupied cell is demolished; an empty cell receives the
        selected building.
        """
        if self.phase is not Phase.PLAYING:
            return self._reject(Rejection.WRONG_PHASE)
        if not self.grid.contains(index):
            return self._reject(Rejection.OUT_OF_RANGE)
        index = operator.index(index)
        if self.ledger.is_empty(index):
            return self.place(index)
        return self.demolish(index)

    def place(self, index: int, building_id: str | None = None) -> CommandResult:
        """Build on an empty land cell.

        Args:
            index: Target cell.
            building_id: What to build; defaults to the current selection.
        """
        if self.phase is not Phase.PLAYING:
            return self._reject(Rejection.WRONG_PHASE)
        if not self.grid.contains(index):
            return self._reject(Rejection.OUT_OF_RANGE)
        index = operator.index(index)
        if not self.terrain.is_buildable(index):
            return self._reject(Rejection.WATER_BLOCKED)
        if not self.ledger.is_empty(index):
            return self._reject(Rejection.ALREADY_OCCUPIED)

        building_id = building_id if building_id is not None else self.selected
        if building_id is None:
            return self._reject(Rejection.NO_SELECTION)
        if not is_known(building_id):
            return self._reject(Rejection.UNKNOWN_BUILDING)

        building = get_building(building_id)
        if self.budget - building.cost < self.config.overdraft_floor:
            return self._reject(Rejection.BUDGET_TOO_LOW)

        self.ledger.put(index, building.id)
        self.budget -= building.cost
        self.turns_used += 1
        logger.info(
            "placed %s at cell %d (budget %d, turn %d/%d)",
            building.id,
            index,
            self.budget,
            self.turns_used,
            self.config.max_turns,
        )
        self.check_end_conditions()
        return self._accept(f"{building.name} built! -{building.cost}")

    def demolish(self, index: int) -> CommandResult:
        """Clear an occupied cell and refund half its cost, rounded up.

        Demolishing never uses a turn.
        """
        if self.phase is not Phase.PLAYING:
            return self._reject(Rejection.WRONG_PHASE)
        if not self.grid.contains(index):
            return self._reject(Rejection.OUT_OF_RANGE)
        index = operator.index(index)
        if self.ledger.is_empty(index):
            return self._reject(Rejection.EMPTY_CELL)

        building = get_building(self.ledger.remove(index))
        self.budget += building.refund
        logger.info(
            "demolished %s at cell %d (refund %d, budget %d)",
            building.id,
            index,
            building.refund,
            self.budget,
        )
        self.check_end_conditions()
        return self._accept(f"Demolished {building.name}. Refund: +{building.refund}")

    # ------------------------------------------------------------------
    # Phase evaluation
    # ------------------------------------------------------------------

    def check_end_conditions(self) -> Phase:
        """Move a running session to ENDED if it is won or cannot go on.

        Targets are checked before the turn cap and the overdraft, so a
        winning final placement counts as a win.

        Returns:
            The phase after evaluation.
        """
        if self.phase is not Phase.PLAYING:
            return self.phase
        if self.targets_met():
            self._end(EndReason.TARGETS_MET)
        elif self.turns_left <= 0:
            self._end(EndReason.OUT_OF_TURNS)
        elif self.budget < self.config.overdraft_floor:
            self._end(EndReason.OVERDRAWN)
        return self.phase

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self.ledger = Ledger(grid=self.grid)
        self._metrics_cache = None
        self.selected = None
        self.budget = self.config.start_budget
        self.turns_used = 0
        self.end_reason = None
        self.phase = Phase.PLAYING
        logger.info("session started (budget %d)", self.budget)

    def _end(self, reason: EndReason) -> None:
        self.phase = Phase.ENDED
        self.end_reason = reason
        logger.info(
            "session ended: %s (budget %d, turns %d)",
            reason.value,
            self.budget,
            self.turns_used,
        )

    def _accept(self, message: str) -> CommandResult:
        self.message = message
        return CommandResult(snapshot=self.snapshot())

    def _reject(self, reason: Rejection) -> CommandResult:
        logger.debug("rejected command in %s: %s", self.phase.value, reason.value)
        self.message = _REJECTION_MESSAGES[reason]
        return CommandResult(snapshot=self.snapshot(), rejection=reason)
