"""
project: Dark Station
module: __init__.py
License: MIT

Procedural space-station deck generator.

A deck is carved by binary space partitioning into named rooms joined by
corridors, then gated with locked doors whose keycards are always reachable
before the door that needs them. Further entities (generators, terminals,
hazards, furniture, puzzles) are placed without ever splitting a room.
"""

from dotenv import load_dotenv

# Load .env if present so STATION_* settings can be supplied without
# exporting shell variables during development.
load_dotenv()

from .config import StationConfig  # noqa: E402
from .errors import GenerationError, PlacementError  # noqa: E402
from .generation import generate  # noqa: E402
from .level import Level, build_level  # noqa: E402
from .placement import reachable, still_connected_if_blocked  # noqa: E402
from .placement.setup import LevelSetup, setup_level  # noqa: E402
from .session import Session  # noqa: E402
from .world import Grid, reveal_fov  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    "GenerationError",
    "Grid",
    "Level",
    "LevelSetup",
    "PlacementError",
    "Session",
    "StationConfig",
    "build_level",
    "generate",
    "reachable",
    "reveal_fov",
    "setup_level",
    "still_connected_if_blocked",
]
