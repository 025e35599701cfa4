"""Catalogue — the fixed set of building types a player can place.

Each entry carries its cost and the flat effect it adds to the five city
metrics.  The catalogue is static data; nothing mutates it at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

METRIC_NAMES: tuple[str, ...] = ("access", "green", "noise", "jobs", "housing")


@dataclass(frozen=True)
class Effect:
    """Per-building change to each city metric.

    Attributes:
        access: Accessibility points.
        green: Green-space points.
        noise: Noise points (negative values calm the area).
        jobs: Jobs created.
        housing: Homes provided.
    """

    access: int = 0
    green: int = 0
    noise: int = 0
    jobs: int = 0
    housing: int = 0

    def as_tuple(self) -> tuple[int, int, int, int, int]:
        """Return the deltas in ``METRIC_NAMES`` order."""
        return (self.access, self.green, self.noise, self.jobs, self.housing)


@dataclass(frozen=True)
class BuildingType:
    """A catalogue entry.

    Attributes:
        id: Short identifier stored in the ledger.
        name: Display name.
        cost: Price charged on placement.
        effect: Flat metric deltas applied per placed unit.
        tip: One-line hint shown in the palette.
    """

    id: str
    name: str
    cost: int
    effect: Effect
    tip: str

    @property
    def refund(self) -> int:
        """Money returned when this building is demolished (half, rounded up)."""
        return -(-self.cost // 2)


HDB = "hdb"
MRT = "mrt"
PARK = "park"
HAWKER = "hawker"
SCHOOL = "school"
FACTORY = "factory"
ROAD = "road"

CATALOGUE: tuple[BuildingType, ...] = (
    BuildingType(
        HDB, "HDB Block", 60,
        Effect(access=5, noise=4, housing=12),
        "Adds homes. Best near MRT.",
    ),
    BuildingType(
        MRT, "MRT Station", 150,
        Effect(access=25, noise=6, jobs=2),
        "Big access. Slightly noisy.",
    ),
    BuildingType(
        PARK, "Park", 45,
        Effect(green=12, noise=-3),
        "Calms noise and adds green.",
    ),
    BuildingType(
        HAWKER, "Hawker Centre", 70,
        Effect(access=8, noise=5, jobs=6),
        "Food & jobs. A bit noisy.",
    ),
    BuildingType(
        SCHOOL, "Primary School", 85,
        Effect(access=10, noise=2, jobs=3, housing=3),
        "Families like this nearby.",
    ),
    BuildingType(
        FACTORY, "Factory", 100,
        Effect(access=2, green=-6, noise=12, jobs=15),
        "Many jobs, hurts green & noise.",
    ),
    BuildingType(
        ROAD, "Road", 30,
        Effect(access=4, green=-2, noise=3),
        "Faster travel, more noise.",
    ),
)

_BY_ID: dict[str, BuildingType] = {b.id: b for b in CATALOGUE}


def get_building(building_id: str) -> BuildingType:
    """Look up a catalogue entry by id.

    Raises:
        KeyError: If no building has that id.
    """
    return _BY_ID[building_id]


def is_known(building_id: object) -> bool:
    """Return True if ``building_id`` names a catalogue entry."""
    return isinstance(building_id, str) and building_id in _BY_ID
