"""Candidate search shared by the placement planners.

``find_room`` is the distance heuristic used for generators, batteries and
terminals: prefer cells at least ``1 + level`` steps (Manhattan) from the
start, else the further half of what is reachable.
"""
from __future__ import annotations

from collections import deque
from typing import Iterable, List, Optional, Set

from ..world import Cell, Grid, Item
from .connectivity import keeps_occupants_accessible, leaves_room_whole, still_connected_if_blocked
from .context import LevelSetup
from .reachability import is_articulation_point, manhattan


def collect_reachable_cells(grid: Grid, start: Cell, avoid: Set[Cell]) -> List[Cell]:
    """Walkable cells reachable from ``start`` in BFS order, minus ``avoid``.

    Avoided cells are still walked through; locks are ignored.
    """
    seen = {start}
    q = deque([start])
    out = []
    while q:
        cur = q.popleft()
        if cur not in avoid:
            out.append(cur)
        for n in grid.neighbors(cur):
            if n not in seen:
                seen.add(n)
                q.append(n)
    return out


def find_room(setup: LevelSetup, *, named_only: bool = False) -> Optional[Cell]:
    start = setup.start
    cells = collect_reachable_cells(setup.grid, start, setup.avoid)
    if named_only:
        cells = [c for c in cells if c.is_room]
    if not cells:
        return None
    min_distance = 1 + setup.level
    far = [c for c in cells if manhattan(start, c) >= min_distance]
    if not far:
        far = cells
        if len(cells) > 2:
            threshold = max(manhattan(start, c) for c in cells) // 2
            far = [c for c in cells if manhattan(start, c) >= threshold] or cells
    return far[setup.rng.randrange(len(far))]


def region_cells(setup: LevelSetup, region: Set[Cell]) -> List[Cell]:
    """Non-avoided cells of ``region`` in grid order, rooms preferred over corridors."""
    free = [c for c in setup.grid.iter_cells() if c in region and c not in setup.avoid]
    rooms = [c for c in free if not c.is_corridor]
    return rooms or free


def place_item(setup: LevelSetup, name: str, cell: Optional[Cell] = None) -> Optional[Cell]:
    if cell is None:
        cell = find_room(setup)
    if cell is None:
        setup.skip("item", item=name)
        return None
    cell.items.add(Item(name))
    setup.avoid.add(cell)
    return cell


def is_interior_cell(setup: LevelSetup, cell: Cell) -> bool:
    """Free room cell away from every corridor and neighboring room."""
    return (
        cell.is_room
        and not cell.occupied
        and not cell.exit
        and not cell.items
        and cell not in setup.avoid
        and not setup.is_doorway(cell)
        and all(n.name == cell.name for n in setup.grid.neighbors(cell))
    )


def interior_candidates(setup: LevelSetup, room_name: str) -> List[Cell]:
    """Room cells that could take a blocking entity, before the connectivity guard."""
    return [c for c in setup.grid.cells_named(room_name) if is_interior_cell(setup, c)]


def is_safe_blocking_cell(setup: LevelSetup, cell: Cell) -> bool:
    room = cell.name
    return (
        still_connected_if_blocked(setup.grid, room, setup.doorways.get(room, ()), cell)
        and leaves_room_whole(setup.grid, room, cell)
        and keeps_occupants_accessible(setup.grid, room, cell)
    )


def first_safe(setup: LevelSetup, cells: Iterable[Cell], *, articulation_free: bool = False) -> Optional[Cell]:
    """First cell in ``cells`` that passes the guard (and the articulation test if asked)."""
    excluded = setup.blocked() if articulation_free else None
    for cell in cells:
        if not is_safe_blocking_cell(setup, cell):
            continue
        if articulation_free and is_articulation_point(setup.grid, setup.start, cell, excluded):
            continue
        return cell
    return None


def shuffled(setup: LevelSetup, cells: Iterable[Cell]) -> List[Cell]:
    out = list(cells)
    setup.rng.shuffle(out)
    return out
