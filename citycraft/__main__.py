"""Entry point for ``python -m citycraft``.

Loads the YAML config shipped inside the package, builds a game engine, and opens a Pygame
window to play in.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from citycraft.simulation.config import GameConfig
from citycraft.simulation.engine import GameEngine
from citycraft.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = pathlib.Path(__file__).resolve().parent / "config" / "default.yaml"


def load_config(path: pathlib.Path = _DEFAULT_CONFIG) -> GameConfig:
    """Return the config at ``path``, or the built-in defaults if it is absent."""
    if path.is_file():
        return GameConfig.from_yaml(path)
    logging.warning("No config at %s, using defaults.", path)
    return GameConfig()


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="citycraft",
        description="CityCraft - build a liveable town on a 7x7 map",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=None,
        help="Pixel size per board cell (default: from config)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Target frames per second (default: from config)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: %(default)s)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config()
    engine = GameEngine(config=config)

    renderer = PygameRenderer(
        engine=engine,
        cell_size=args.cell_size or config.cell_size,
        marker_seconds=config.marker_seconds,
    )
    renderer.run(fps=args.fps or config.fps)


if __name__ == "__main__":
    main()
