from __future__ import annotations

from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Set, Tuple

from ..errors import PlacementError

Coord = Tuple[int, int]

CORRIDOR = "Corridor"


class Direction(Enum):
    NORTH = (-1, 0)
    EAST = (0, 1)
    SOUTH = (1, 0)
    WEST = (0, -1)

    @property
    def delta(self) -> Coord:
        return self.value

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    @classmethod
    def parse(cls, text: str) -> "Direction":
        key = text.strip().lower()
        if key not in _ALIASES:
            raise ValueError(f"unknown direction: {text!r}")
        return _ALIASES[key]


_OPPOSITE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_ALIASES = {
    "n": Direction.NORTH, "north": Direction.NORTH, "up": Direction.NORTH,
    "e": Direction.EAST, "east": Direction.EAST, "right": Direction.EAST,
    "s": Direction.SOUTH, "south": Direction.SOUTH, "down": Direction.SOUTH,
    "w": Direction.WEST, "west": Direction.WEST, "left": Direction.WEST,
}


class OccupantKind(Enum):
    EMPTY = "empty"
    DOOR = "door"
    GENERATOR = "generator"
    TERMINAL = "terminal"
    PUZZLE = "puzzle"
    FURNITURE = "furniture"
    HAZARD = "hazard"
    HAZARD_CONTROL = "hazard_control"
    MAINTENANCE_TERMINAL = "maintenance_terminal"


class Occupant(NamedTuple):
    """The single entity standing on a cell, tagged by kind."""
    kind: OccupantKind
    entity: Any = None

    @property
    def is_empty(self) -> bool:
        return self.kind is OccupantKind.EMPTY


EMPTY = Occupant(OccupantKind.EMPTY)


class Cell:
    """One grid position.

    Neighbors are stored as coordinates in ``links`` and resolved through the
    owning Grid, so cells never hold references to each other.
    """
    __slots__ = (
        "row", "col", "name", "walkable", "discovered", "visited",
        "exit", "locked", "occupant", "items", "required_items", "links",
    )

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.name = ""
        self.walkable = False
        self.discovered = False
        self.visited = False
        self.exit = False
        self.locked = False
        self.occupant: Occupant = EMPTY
        self.items: Set[Any] = set()
        self.required_items: Set[str] = set()
        self.links: Dict[Direction, Coord] = {}

    def __repr__(self) -> str:
        return f"Cell({self.row}, {self.col}, {self.name!r})"

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def is_corridor(self) -> bool:
        return self.walkable and self.name == CORRIDOR

    @property
    def is_room(self) -> bool:
        """Walkable and part of a named room (not a corridor)."""
        return self.walkable and bool(self.name) and self.name != CORRIDOR

    @property
    def occupied(self) -> bool:
        return not self.occupant.is_empty

    def entity(self, kind: OccupantKind) -> Any:
        if self.occupant.kind is kind:
            return self.occupant.entity
        return None

    def place(self, kind: OccupantKind, entity: Any) -> None:
        if kind is OccupantKind.EMPTY:
            raise PlacementError("use clear_occupant() to empty a cell", self.coord)
        if not self.walkable:
            raise PlacementError(f"cannot place {kind.value} on a wall", self.coord)
        if self.occupied:
            raise PlacementError(
                f"cell already holds {self.occupant.kind.value}, cannot place {kind.value}",
                self.coord,
            )
        self.occupant = Occupant(kind, entity)

    def clear_occupant(self) -> None:
        self.occupant = EMPTY

    def is_exit_locked(self) -> bool:
        return self.exit and self.locked

    def item_named(self, name: str):
        for item in self.items:
            if item.name == name:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row": self.row,
            "col": self.col,
            "name": self.name,
            "walkable": self.walkable,
            "discovered": self.discovered,
            "visited": self.visited,
            "exit": self.exit,
            "locked": self.locked,
            "occupant": self.occupant.kind.value,
            "items": sorted(i.name for i in self.items),
        }


def direction_between(a: Coord, b: Coord) -> Optional[Direction]:
    delta = (b[0] - a[0], b[1] - a[1])
    for d in Direction:
        if d.value == delta:
            return d
    return None

