"""Hover preview — what a click on an empty cell would do.

Read-only: works from a GameSnapshot and the board geometry, so the view
can show the cost and any adjacency bonus before the player commits.
"""

from __future__ import annotations

from dataclasses import dataclass

from citycraft.city.catalogue import get_building
from citycraft.city.metrics import ADJACENCY_RULES, AdjacencyRule
from citycraft.simulation.snapshot import GameSnapshot, Phase
from citycraft.world.grid import Grid
from citycraft.world.terrain import TerrainKind


@dataclass(frozen=True)
class HoverHint:
    """Preview for one hovered cell.

    Attributes:
        buildable: False when the cell is water.
        text: Short label to draw on the cell.
        building_id: Building that would be placed, if buildable.
        bonuses: Adjacency change per metric the placement would unlock.
    """

    buildable: bool
    text: str
    building_id: str | None = None
    bonuses: tuple[tuple[str, int], ...] = ()


def adjacency_bonuses(
    snapshot: GameSnapshot,
    index: int,
    building_id: str,
    grid: Grid,
    rules: tuple[AdjacencyRule, ...] = ADJACENCY_RULES,
) -> dict[str, int]:
    """Return the adjacency change per metric from placing on ``index``.

    Counts both sides of each rule: the new building gaining a bonus from
    an existing neighbour, and existing trigger buildings that gain their
    first qualifying neighbour.
    """
    occupants = snapshot.occupants
    totals: dict[str, int] = {}
    for rule in rules:
        gained = 0
        if building_id in rule.triggers and any(
            occupants[n] == rule.neighbour for n in grid.neighbours(index)
        ):
            gained += 1
        if building_id == rule.neighbour:
            for n in grid.neighbours(index):
                if occupants[n] not in rule.triggers:
                    continue
                # Already has a qualifying neighbour: rule fires once per cell
                if any(occupants[m] == rule.neighbour for m in grid.neighbours(n)):
                    continue
                gained += 1
        if gained:
            totals[rule.metric] = totals.get(rule.metric, 0) + gained * rule.amount
    return totals


def hover_hint(snapshot: GameSnapshot, index: int, grid: Grid) -> HoverHint | None:
    """Describe a click on ``index`` with the current selection.

    Returns None when there is nothing to preview: not playing, nothing
    selected, or the cell is already built on (a click would demolish).
    """
    if snapshot.phase is not Phase.PLAYING or snapshot.selected is None:
        return None
    if not grid.contains(index) or snapshot.occupants[index] is not None:
        return None
    if snapshot.terrain[index] is TerrainKind.WATER:
        return HoverHint(buildable=False, text="Can't build on water!")

    building = get_building(snapshot.selected)
    bonuses = adjacency_bonuses(snapshot, index, building.id, grid)
    parts = [f"-${building.cost}"]
    parts += [f"{amount:+d} {metric}" for metric, amount in bonuses.items()]
    return HoverHint(
        buildable=True,
        text="  ".join(parts),
        building_id=building.id,
        bonuses=tuple(bonuses.items()),
    )
