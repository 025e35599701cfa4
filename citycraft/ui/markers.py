"""Recently-placed markers — short-lived highlights for new buildings.

Purely cosmetic: the renderer marks a cell when something is built on it
and stops drawing the highlight once the marker expires.  Nothing here
feeds back into the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RecentPlacements:
    """Cells built on within the last ``lifetime`` seconds.

    Attributes:
        lifetime: Seconds a marker stays active.
        placed_at: Timestamp of the latest placement per cell.
    """

    lifetime: float = 0.6
    placed_at: dict[int, float] = field(default_factory=dict)

    def mark(self, index: int, now: float) -> None:
        """Start (or restart) the highlight on a cell."""
        self.placed_at[index] = now

    def discard(self, index: int) -> None:
        """Drop a cell's highlight, e.g. after it is demolished."""
        self.placed_at.pop(index, None)

    def clear(self) -> None:
        self.placed_at.clear()

    def age(self, index: int, now: float) -> float | None:
        """Seconds since the cell was marked, or None if it is not active."""
        started = self.placed_at.get(index)
        if started is None or now - started >= self.lifetime:
            return None
        return now - started

    def active(self, now: float) -> set[int]:
        """Return the cells still highlighted, forgetting expired ones."""
        expired = [i for i, t in self.placed_at.items() if now - t >= self.lifetime]
        for index in expired:
            del self.placed_at[index]
        return set(self.placed_at)
