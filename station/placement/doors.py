"""Door/key planner.

Each gating door goes on a corridor cell bordering a named room, and its
keycard goes somewhere still reachable once that door (and every earlier
one) is locked. Keys are therefore always collectable in reverse placement
order, so every level is solvable by construction.
"""
from __future__ import annotations

from typing import List, Optional, Set, Tuple

from ..config import MAX_DOORS
from ..logging_utils import get_logger
from ..world import Cell, Door, Item, OccupantKind
from .context import LevelSetup
from .reachability import reachable
from .search import region_cells

log = get_logger("station.placement.doors")


def door_target(level: int, max_doors: int = MAX_DOORS) -> int:
    if level <= 1:
        target = 1
    elif level == 2:
        target = 2
    else:
        target = 2 + (level - 2)
    return min(target, max_doors)


def boundary_cells(setup: LevelSetup) -> List[Tuple[str, Cell]]:
    """(room, corridor cell) pairs for every corridor cell touching a named room."""
    # A corridor cell touching two rooms is listed once per room; the first door placed there claims it.
    return [(room, cell) for room, cells in setup.entries.items() for cell in cells]


def _gates(setup: LevelSetup, cell: Cell, current: Set[Cell]) -> bool:
    hypothetical = reachable(setup.grid, setup.start, set(setup.locked_doors) | {cell})
    exit_cell = setup.grid.exit
    if exit_cell in current and exit_cell not in hypothetical:
        return True
    return len(hypothetical) < len(current)


def _key_cell(setup: LevelSetup, region: Set[Cell]) -> Optional[Cell]:
    candidates = region_cells(setup, region)
    if not candidates:
        candidates = [c for c in setup.grid.iter_cells() if c in region]
    if not candidates:
        return None
    return candidates[setup.rng.randrange(len(candidates))]


def place_locked_doors(setup: LevelSetup, target: int) -> int:
    """Place up to ``target`` gating doors with matching keys; returns doors placed.

    A slot with no gating candidate is skipped rather than filled with a door
    that gates nothing.
    """
    grid = setup.grid
    candidates = boundary_cells(setup)
    setup.rng.shuffle(candidates)
    rooms_with_doors: Set[str] = set()
    placed = 0

    for slot in range(target):
        current = reachable(grid, setup.start, setup.locked_doors)
        chosen = None
        for room, cell in candidates:
            if room in rooms_with_doors or cell in setup.avoid or cell.occupied:
                continue
            if cell in setup.locked_doors or cell not in current:
                continue
            if _gates(setup, cell, current):
                chosen = (room, cell)
                break
        if chosen is None:
            setup.skip("door", slot=slot)
            continue

        room, door_cell = chosen
        region = reachable(grid, setup.start, set(setup.locked_doors) | {door_cell})
        key_cell = _key_cell(setup, region)
        if key_cell is None:
            setup.skip("door", slot=slot, room=room, reason="no_key_cell")
            continue

        door = Door(room)
        door_cell.place(OccupantKind.DOOR, door)
        door_cell.locked = True
        key_cell.items.add(Item(door.keycard_name))
        setup.locked_doors.append(door_cell)
        setup.keys[door.keycard_name] = key_cell
        setup.avoid.update((door_cell, key_cell))
        rooms_with_doors.add(room)
        placed += 1
        setup.hint(f"The {door.keycard_name} is in {key_cell.name}")
        log.debug(event="door_placed", room=room, door=door_cell.coord, key=key_cell.coord, slot=slot)
    return placed


def ensure_every_room_has_door(setup: LevelSetup) -> int:
    """Give each named room without a door an unlocked door on its first free entry."""
    has_door = {c.occupant.entity.room_name for c in setup.locked_doors}
    placed = 0
    for room, cells in setup.entries.items():
        if room in has_door:
            continue
        for cell in cells:
            if cell in setup.avoid or cell.occupied:
                continue
            cell.place(OccupantKind.DOOR, Door(room, locked=False))
            setup.unlocked_doors.append(cell)
            setup.avoid.add(cell)
            has_door.add(room)
            placed += 1
            break
    return placed
