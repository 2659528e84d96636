"""Grid/cell substrate shared by generation, placement and gameplay."""

from .cells import CORRIDOR, EMPTY, Cell, Coord, Direction, Occupant, OccupantKind
from .entities import (
    BATTERY,
    HAZARD_TYPES,
    CCTVTerminal,
    Door,
    Furniture,
    Hazard,
    HazardControl,
    HazardType,
    Item,
    MaintenanceTerminal,
    PowerGenerator,
    PuzzleReward,
    PuzzleTerminal,
    keycard_name,
)
from .fov import calculate_fov, has_line_of_sight, reveal_fov
from .grid import Grid

__all__ = [
    "BATTERY",
    "CORRIDOR",
    "EMPTY",
    "HAZARD_TYPES",
    "CCTVTerminal",
    "Cell",
    "Coord",
    "Direction",
    "Door",
    "Furniture",
    "Grid",
    "Hazard",
    "HazardControl",
    "HazardType",
    "Item",
    "MaintenanceTerminal",
    "Occupant",
    "OccupantKind",
    "PowerGenerator",
    "PuzzleReward",
    "PuzzleTerminal",
    "calculate_fov",
    "has_line_of_sight",
    "keycard_name",
    "reveal_fov",
]
