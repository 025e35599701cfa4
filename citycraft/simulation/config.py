"""Config — load game parameters from YAML files.

The economy (starting budget, turn cap, overdraft floor) and the view
timings live in YAML and are parsed into a typed dataclass here.  The
file is edited by whoever maintains the game; players never see it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        start_budget: Money available at the start of a session.
        max_turns: Successful placements allowed before the game ends.
        overdraft_floor: Lowest budget a placement may leave behind.
        marker_seconds: Lifetime of the "recently placed" highlight.
        cell_size: Pixel size per board cell in the Pygame view.
        fps: Target frames per second for the Pygame view.
    """

    start_budget: int = 1000
    max_turns: int = 30
    overdraft_floor: int = -50

    # View
    marker_seconds: float = 0.6
    cell_size: int = 80
    fps: int = 30

    def __post_init__(self) -> None:
        """Reject values the game loop cannot work with."""
        if self.max_turns < 1:
            msg = f"max_turns must be positive, got {self.max_turns}"
            raise ValueError(msg)
        if self.overdraft_floor > self.start_budget:
            msg = (
                f"overdraft_floor ({self.overdraft_floor}) is above "
                f"start_budget ({self.start_budget})"
            )
            raise ValueError(msg)
        if self.marker_seconds < 0:
            msg = f"marker_seconds must not be negative, got {self.marker_seconds}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            start_budget=int(data.get("start_budget", cls.start_budget)),
            max_turns=int(data.get("max_turns", cls.max_turns)),
            overdraft_floor=int(data.get("overdraft_floor", cls.overdraft_floor)),
            marker_seconds=float(data.get("marker_seconds", cls.marker_seconds)),
            cell_size=int(data.get("cell_size", cls.cell_size)),
            fps=int(data.get("fps", cls.fps)),
        )
