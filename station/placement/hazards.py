"""Environmental hazards sealing off whole rooms.

A hazard covers every corridor entry of a room with one to three entries. Its
fix (an item such as a Patch Kit, or a control panel) is placed in the region
still reachable with all doors and hazards in place, so hazards never depend
on each other in a cycle.
"""
from __future__ import annotations

import random
from typing import List, Optional, Set

from ..logging_utils import get_logger
from ..world import HAZARD_TYPES, Cell, Hazard, HazardControl, HazardType, Item, OccupantKind
from .context import LevelSetup
from .reachability import reachable
from .search import first_safe, is_interior_cell, region_cells, shuffled

log = get_logger("station.placement.hazards")

MAX_ENTRIES = 3


def hazard_count(level: int, rng: random.Random) -> int:
    if level < 2:
        return 0
    if level == 2:
        return 1
    if level == 3:
        return 1 + rng.randrange(2)
    return 2 + rng.randrange(2)


def hazard_types(level: int) -> List[HazardType]:
    types = [HazardType.COOLANT, HazardType.ELECTRICAL, HazardType.GAS]
    if level >= 3:
        types.append(HazardType.VACUUM)
    if level >= 5:
        types.append(HazardType.RADIATION)
    return types


def _solution_cell(setup: LevelSetup, hazard: Hazard, region: Set[Cell]) -> Optional[Cell]:
    if hazard.requires_item:
        cells = region_cells(setup, region)
        return cells[setup.rng.randrange(len(cells))] if cells else None
    rooms = [c for c in region_cells(setup, region) if is_interior_cell(setup, c)]
    return first_safe(setup, shuffled(setup, rooms), articulation_free=True)


def place_hazards(setup: LevelSetup) -> List[Hazard]:
    grid = setup.grid
    wanted = hazard_count(setup.level, setup.rng)
    types = hazard_types(setup.level)
    candidates = [(room, cells) for room, cells in setup.entries.items() if 1 <= len(cells) <= MAX_ENTRIES]
    setup.rng.shuffle(candidates)
    placed: List[Hazard] = []

    for room, entry_cells in candidates:
        if len(placed) >= wanted:
            break
        blocked = setup.blocked()
        current = reachable(grid, setup.start, blocked)
        if any(c in setup.avoid or c.occupied or c not in current for c in entry_cells):
            continue
        region = reachable(grid, setup.start, blocked | set(entry_cells))
        if all(c in region for c in grid.cells_named(room) if c in current):
            continue

        hazard = Hazard(types[setup.rng.randrange(len(types))])
        solution = _solution_cell(setup, hazard, region)
        if solution is None:
            setup.skip("hazard", room=room, reason="no_solution_cell")
            continue

        info = HAZARD_TYPES[hazard.hazard_type]
        if hazard.requires_item:
            solution.items.add(Item(info.item_name))
            setup.hint(f"A {info.item_name} is in {solution.name}")
        else:
            solution.place(OccupantKind.HAZARD_CONTROL, HazardControl(hazard))
            setup.hint(f"The {info.control_name} is in {solution.name}")
        setup.avoid.add(solution)
        setup.hazard_solutions.append(solution)

        for cell in entry_cells:
            cell.place(OccupantKind.HAZARD, hazard)
            setup.avoid.add(cell)
            setup.hazard_cells.append(cell)
        placed.append(hazard)
        setup.hint(f"A {info.name} blocks access to {room}")
        log.debug(event="hazard_placed", room=room, kind=hazard.hazard_type.value, entries=len(entry_cells))
    return placed
