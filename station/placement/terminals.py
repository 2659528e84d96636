from __future__ import annotations

from typing import List

from ..world import CCTVTerminal, OccupantKind
from .context import LevelSetup
from .search import find_room, first_safe, interior_candidates, shuffled

MAX_TERMINALS = 3


def terminal_count(level: int) -> int:
    if level < 2:
        return 0
    return min(MAX_TERMINALS, 1 + (level - 1) // 3)


def place_cctv_terminals(setup: LevelSetup) -> List[CCTVTerminal]:
    """CCTV terminals, each watching a different room."""
    targets = setup.grid.room_names()
    placed: List[CCTVTerminal] = []
    for i in range(terminal_count(setup.level)):
        anchor = find_room(setup, named_only=True)
        if anchor is None or not targets:
            setup.skip("terminal", index=i)
            continue
        target = targets.pop(setup.rng.randrange(len(targets)))
        cell = first_safe(setup, shuffled(setup, interior_candidates(setup, anchor.name)))
        if cell is None:
            setup.skip("terminal", index=i, room=anchor.name)
            continue
        terminal = CCTVTerminal(f"CCTV Terminal #{i + 1}", target)
        cell.place(OccupantKind.TERMINAL, terminal)
        setup.avoid.add(cell)
        setup.terminals.append(cell)
        placed.append(terminal)
    return placed
