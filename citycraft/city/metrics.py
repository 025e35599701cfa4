"""Metric calculator — derive the five city scores from the ledger.

Metrics are never stored; they are recomputed from scratch on every
query so that ``metrics == f(ledger)`` always holds.  The calculation
runs on a NumPy code grid:

1. Sum the flat effect of every placed building.
2. Apply each adjacency rule once per trigger cell that has at least one
   qualifying 4-directional neighbour.
3. Clamp noise at zero.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from citycraft.city.catalogue import (
    CATALOGUE,
    HAWKER,
    HDB,
    METRIC_NAMES,
    MRT,
    PARK,
    SCHOOL,
)
from citycraft.city.ledger import Ledger
from citycraft.world.terrain import Terrain

EMPTY = -1

_CODES: dict[str, int] = {b.id: i for i, b in enumerate(CATALOGUE)}
_EFFECTS: NDArray[np.int64] = np.array(
    [b.effect.as_tuple() for b in CATALOGUE],
    dtype=np.int64,
)
_METRIC_INDEX: dict[str, int] = {name: i for i, name in enumerate(METRIC_NAMES)}


@dataclass(frozen=True)
class Metrics:
    """The five aggregate city scores."""

    access: int = 0
    green: int = 0
    noise: int = 0
    jobs: int = 0
    housing: int = 0


@dataclass(frozen=True)
class Targets:
    """Thresholds the city must satisfy simultaneously to win.

    Every metric is meet-or-exceed except noise, which is a ceiling.

    Attributes:
        access: Minimum accessibility.
        green: Minimum green space.
        noise_max: Maximum tolerated noise.
        jobs: Minimum jobs.
        housing: Minimum housing.
    """

    access: int = 85
    green: int = 60
    noise_max: int = 50
    jobs: int = 45
    housing: int = 55

    def threshold(self, metric: str) -> int:
        """Return the target value for a metric name."""
        if metric == "noise":
            return self.noise_max
        return getattr(self, metric)

    def is_met(self, metric: str, metrics: Metrics) -> bool:
        """Return True if a single metric satisfies its target."""
        value = getattr(metrics, metric)
        if metric == "noise":
            return value <= self.noise_max
        return value >= self.threshold(metric)

    def met_by(self, metrics: Metrics) -> bool:
        """Return True if all five targets hold at once."""
        return all(self.is_met(name, metrics) for name in METRIC_NAMES)


@dataclass(frozen=True)
class AdjacencyRule:
    """A bonus that fires when a trigger building touches a given neighbour.

    Attributes:
        triggers: Building ids that can receive the bonus.
        neighbour: Building id that must sit next to the trigger.
        metric: Which metric the bonus changes.
        amount: Change applied once per qualifying trigger cell.
    """

    triggers: frozenset[str]
    neighbour: str
    metric: str
    amount: int


ADJACENCY_RULES: tuple[AdjacencyRule, ...] = (
    # Homes next to a station
    AdjacencyRule(frozenset({HDB}), MRT, "access", 6),
    # Parks quiet the buildings people spend time in
    AdjacencyRule(frozenset({HDB, SCHOOL, HAWKER}), PARK, "noise", -1),
)


def code_grid(ledger: Ledger) -> NDArray[np.int64]:
    """Return the ledger as a 2D array of catalogue codes (``EMPTY`` = -1)."""
    size = ledger.grid.size
    codes = np.full(ledger.grid.cell_count, EMPTY, dtype=np.int64)
    for index, building_id in ledger.occupied():
        codes[index] = _CODES[building_id]
    return codes.reshape(size, size)


def neighbour_mask(present: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Mark cells that have at least one cardinal neighbour in ``present``.

    Shifts never wrap, so edge cells only see neighbours on the board.
    """
    out = np.zeros_like(present, dtype=bool)
    out[1:, :] |= present[:-1, :]  # neighbour above
    out[:-1, :] |= present[1:, :]  # neighbour below
    out[:, 1:] |= present[:, :-1]  # neighbour left
    out[:, :-1] |= present[:, 1:]  # neighbour right
    return out


def compute_metrics(
    ledger: Ledger,
    terrain: Terrain | None = None,
    rules: tuple[AdjacencyRule, ...] = ADJACENCY_RULES,
) -> Metrics:
    """Compute the city metrics for the current ledger.

    Pure: the ledger is only read, and the same ledger always yields
    the same Metrics.  Terrain does not enter the formula; it is only
    checked to belong to the same board.

    Args:
        ledger: Current placements.
        terrain: Board terrain (optional).
        rules: Adjacency rule table to apply.

    Returns:
        The derived Metrics.

    Raises:
        ValueError: If ``terrain`` was generated for a different board.
    """
    if terrain is not None and terrain.grid != ledger.grid:
        msg = f"terrain is {terrain.grid.size}x{terrain.grid.size}, ledger is {ledger.grid.size}x{ledger.grid.size}"
        raise ValueError(msg)

    codes = code_grid(ledger)
    totals = _EFFECTS[codes[codes != EMPTY]].sum(axis=0)

    for rule in rules:
        trigger_codes = [_CODES[t] for t in rule.triggers]
        triggered = np.isin(codes, trigger_codes)
        near = neighbour_mask(codes == _CODES[rule.neighbour])
        hits = int(np.count_nonzero(triggered & near))
        totals[_METRIC_INDEX[rule.metric]] += hits * rule.amount

    values = {name: int(totals[i]) for i, name in enumerate(METRIC_NAMES)}
    values["noise"] = max(0, values["noise"])
    return Metrics(**values)
