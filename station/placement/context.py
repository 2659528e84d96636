"""Shared mutable state for one placement pass over a freshly carved grid."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from ..logging_utils import get_logger
from ..world import Cell, Grid
from .connectivity import RoomEntries, doorway_map, find_room_entry_points

log = get_logger("station.placement")


@dataclass
class LevelSetup:
    grid: Grid
    level: int
    rng: random.Random
    avoid: Set[Cell] = field(default_factory=set)
    locked_doors: List[Cell] = field(default_factory=list)
    unlocked_doors: List[Cell] = field(default_factory=list)
    keys: Dict[str, Cell] = field(default_factory=dict)
    generators: List[Cell] = field(default_factory=list)
    batteries: List[Cell] = field(default_factory=list)
    terminals: List[Cell] = field(default_factory=list)
    hazard_cells: List[Cell] = field(default_factory=list)
    hazard_solutions: List[Cell] = field(default_factory=list)
    puzzles: List[Cell] = field(default_factory=list)
    furniture: List[Cell] = field(default_factory=list)
    maintenance_terminals: List[Cell] = field(default_factory=list)
    hints: List[str] = field(default_factory=list)
    skipped: Dict[str, int] = field(default_factory=dict)
    entries: Optional[RoomEntries] = None
    doorways: Dict[str, List[Cell]] = field(default_factory=dict)

    def __post_init__(self):
        if self.level < 1:
            raise ValueError(f"level must be >= 1, got {self.level}")
        for cell in (self.grid.start, self.grid.exit):
            if cell is not None:
                self.avoid.add(cell)
        if self.entries is None:
            self.entries = find_room_entry_points(self.grid)
        if not self.doorways:
            self.doorways = doorway_map(self.grid, self.entries)

    @property
    def start(self) -> Cell:
        return self.grid.start

    def blocked(self) -> Set[Cell]:
        """Cells a player cannot pass without solving something first."""
        return set(self.locked_doors) | set(self.hazard_cells)

    def is_doorway(self, cell: Cell) -> bool:
        return cell in self.doorways.get(cell.name, ())

    def skip(self, what: str, **fields) -> None:
        self.skipped[what] = self.skipped.get(what, 0) + 1
        log.debug(event="placement_skipped", what=what, level=self.level, **fields)

    def hint(self, text: str) -> None:
        self.hints.append(text)

    def counts(self) -> Dict[str, int]:
        return {
            "doors_placed": len(self.locked_doors),
            "door_slots_skipped": self.skipped.get("door", 0),
            "unlocked_doors": len(self.unlocked_doors),
            "keys_placed": len(self.keys),
            "generators": len(self.generators),
            "batteries": len(self.batteries),
            "terminals": len(self.terminals),
            "hazards": len({id(c.occupant.entity) for c in self.hazard_cells}),
            "puzzles": len(self.puzzles),
            "furniture": len(self.furniture),
            "maintenance_terminals": len(self.maintenance_terminals),
            "placements_skipped": sum(self.skipped.values()),
        }
