"""Room-interior connectivity guard and room adjacency queries.

A room's *entry cells* are the corridor cells touching it; its *doorway
cells* are its own cells touching an entry. Blocking entities placed inside
a room must leave every doorway mutually reachable through the room.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from ..world import CORRIDOR, Cell, Grid

RoomEntries = Dict[str, List[Cell]]


def find_room_entry_points(grid: Grid) -> RoomEntries:
    """Corridor cells adjacent to each named room, in grid order."""
    entries: RoomEntries = {}
    for cell in grid.iter_cells():
        if not cell.is_corridor:
            continue
        for n in grid.neighbors(cell):
            if not n.is_room:
                continue
            bucket = entries.setdefault(n.name, [])
            if cell not in bucket:
                bucket.append(cell)
    return entries


def room_cells(grid: Grid, room_name: str) -> List[Cell]:
    return grid.cells_named(room_name)


def doorway_cells(grid: Grid, room_name: str, entry_cells: Iterable[Cell]) -> List[Cell]:
    entry_set = set(entry_cells)
    return [
        c for c in room_cells(grid, room_name)
        if any(n in entry_set for n in grid.neighbors(c))
    ]


def doorway_map(grid: Grid, entries: Optional[RoomEntries] = None) -> Dict[str, List[Cell]]:
    """Doorway cells for every named room, computed once per grid."""
    if entries is None:
        entries = find_room_entry_points(grid)
    return {name: doorway_cells(grid, name, cells) for name, cells in entries.items()}


def _room_blocked(grid: Grid, room_name: str, candidate: Optional[Cell]) -> Set[Cell]:
    blocked = {c for c in room_cells(grid, room_name) if c.occupied}
    if candidate is not None:
        blocked.add(candidate)
    return blocked


def _flood_room(grid: Grid, room_name: str, origin: Cell, blocked: Set[Cell]) -> Set[Cell]:
    seen = {origin}
    q = deque([origin])
    while q:
        cur = q.popleft()
        for n in grid.neighbors(cur):
            if n in seen or n in blocked or n.name != room_name:
                continue
            seen.add(n)
            q.append(n)
    return seen


def still_connected_if_blocked(grid: Grid, room_name: str, doorway_cells: Iterable[Cell], candidate: Optional[Cell] = None) -> bool:
    """True iff every doorway stays reachable from the others with ``candidate`` blocked.

    Cells already holding an occupant count as blocked too; with no candidate
    the room is checked as it stands. Vacuously true for a room without
    doorways.
    """
    doorways = list(doorway_cells)
    if not doorways:
        return True
    blocked = _room_blocked(grid, room_name, candidate)
    first = doorways[0]
    if first in blocked:
        return False
    seen = _flood_room(grid, room_name, first, blocked)
    return all(d in seen for d in doorways)


def leaves_room_whole(grid: Grid, room_name: str, candidate: Cell) -> bool:
    """True iff the room's unblocked cells stay one component with ``candidate`` blocked.

    The exit counts as blocked: it stays locked until the deck is powered.
    """
    blocked = _room_blocked(grid, room_name, candidate)
    if grid.exit is not None:
        blocked.add(grid.exit)
    free = [c for c in room_cells(grid, room_name) if c not in blocked]
    if not free:
        return True
    return len(_flood_room(grid, room_name, free[0], blocked)) == len(free)


def _has_free_side(grid: Grid, room_name: str, cell: Cell, blocked: Set[Cell]) -> bool:
    return any(n.name == room_name and n not in blocked for n in grid.neighbors(cell))


def keeps_occupants_accessible(grid: Grid, room_name: str, candidate: Cell) -> bool:
    """True iff ``candidate`` and every occupant of the room keep a free side to stand on.

    A free side is an unoccupied cell of the same room other than the exit;
    with ``candidate`` blocked, each occupied room cell must still touch one.
    An exit inside the room must keep a free room cell or an outside cell
    next to it.
    """
    blocked = _room_blocked(grid, room_name, candidate)
    if grid.exit is not None:
        blocked.add(grid.exit)
    occupied = [c for c in room_cells(grid, room_name) if c.occupied]
    if not all(_has_free_side(grid, room_name, c, blocked) for c in [candidate, *occupied]):
        return False
    exit_cell = grid.exit
    if exit_cell is not None and exit_cell.name == room_name:
        return any(n.name != room_name or n not in blocked for n in grid.neighbors(exit_cell))
    return True


def adjacent_room_names(grid: Grid, room_name: str) -> List[str]:
    """Rooms touching ``room_name`` directly or through connected corridor cells.

    Sorted and including ``room_name`` itself; empty when the room is unknown.
    """
    if not room_name:
        return []
    cells = grid.cells_named(room_name)
    if not cells:
        return []
    adjacent = {room_name}
    frontier: List[Cell] = []
    for cell in cells:
        for n in grid.neighbors(cell):
            if n.name == CORRIDOR:
                frontier.append(n)
            elif n.name and n.name != room_name:
                adjacent.add(n.name)
    seen = set(frontier)
    q = deque(frontier)
    while q:
        cur = q.popleft()
        for n in grid.neighbors(cur):
            if n.name == CORRIDOR:
                if n not in seen:
                    seen.add(n)
                    q.append(n)
            elif n.name and n.name != room_name:
                adjacent.add(n.name)
    return sorted(adjacent)


__all__ = [
    "RoomEntries",
    "adjacent_room_names",
    "doorway_cells",
    "doorway_map",
    "find_room_entry_points",
    "keeps_occupants_accessible",
    "leaves_room_whole",
    "room_cells",
    "still_connected_if_blocked",
]
