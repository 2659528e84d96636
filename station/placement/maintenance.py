from __future__ import annotations

from typing import List

from ..world import MaintenanceTerminal, OccupantKind
from .context import LevelSetup
from .search import interior_candidates, is_safe_blocking_cell

WALL_SIDES = 4


def place_maintenance_terminals(setup: LevelSetup) -> List[MaintenanceTerminal]:
    """One maintenance terminal per room, against a wall when possible.

    A room where no cell passes the connectivity guard gets none.
    """
    grid = setup.grid
    placed: List[MaintenanceTerminal] = []
    for room in grid.room_names():
        valid = interior_candidates(setup, room)
        against_wall = [c for c in valid if len(c.links) < WALL_SIDES]
        edge = [c for c in valid if sum(1 for n in grid.neighbors(c) if n.name == room) <= 2]
        safe = []
        for pool in (against_wall, edge, valid):
            safe = [c for c in pool if is_safe_blocking_cell(setup, c)]
            if safe:
                break
        if not safe:
            setup.skip("maintenance_terminal", room=room)
            continue
        cell = safe[setup.rng.randrange(len(safe))]
        terminal = MaintenanceTerminal(f"Maintenance Terminal - {room}", room)
        cell.place(OccupantKind.MAINTENANCE_TERMINAL, terminal)
        setup.avoid.add(cell)
        setup.maintenance_terminals.append(cell)
        placed.append(terminal)
    return placed
