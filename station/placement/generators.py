"""Power generators and the batteries that feed them (levels 3 and up)."""
from __future__ import annotations

import random
from typing import List, Optional

from ..logging_utils import get_logger
from ..world import BATTERY, Cell, OccupantKind, PowerGenerator
from .context import LevelSetup
from .reachability import is_chokepoint
from .search import find_room, interior_candidates, is_safe_blocking_cell, place_item, shuffled

log = get_logger("station.placement.generators")

FIRST_GENERATOR_LEVEL = 3
MAX_GENERATORS = 5
MAX_BATTERIES_PER_GENERATOR = 5
ROOM_ATTEMPTS = 6


def generator_count(level: int) -> int:
    if level < FIRST_GENERATOR_LEVEL:
        return 0
    return min(level - FIRST_GENERATOR_LEVEL + 1, MAX_GENERATORS)


def batteries_for_generator(level: int, rng: random.Random) -> int:
    lo = min(MAX_BATTERIES_PER_GENERATOR, 1 + (level - 3) // 3)
    hi = max(lo, min(MAX_BATTERIES_PER_GENERATOR, 2 + (level - 3) // 2))
    return rng.randint(lo, hi)


def _generator_cell(setup: LevelSetup, room: str) -> Optional[Cell]:
    safe = [c for c in shuffled(setup, interior_candidates(setup, room)) if is_safe_blocking_cell(setup, c)]
    if not safe:
        return None
    blocked = setup.blocked()
    for cell in safe:
        if not is_chokepoint(setup.grid, setup.start, cell, blocked):
            return cell
    return safe[0]


def place_generators(setup: LevelSetup) -> List[PowerGenerator]:
    """Lock the exit and scatter generators from level 3 on; below that the exit stays open."""
    exit_cell = setup.grid.exit
    count = generator_count(setup.level)
    exit_cell.locked = count > 0
    placed: List[PowerGenerator] = []
    for i in range(count):
        cell = None
        for _ in range(ROOM_ATTEMPTS):
            anchor = find_room(setup, named_only=True)
            if anchor is None:
                break
            cell = _generator_cell(setup, anchor.name)
            if cell is not None:
                break
        if cell is None:
            setup.skip("generator", index=i)
            continue
        gen = PowerGenerator(f"Generator #{i + 1}", batteries_for_generator(setup.level, setup.rng))
        cell.place(OccupantKind.GENERATOR, gen)
        setup.avoid.add(cell)
        setup.generators.append(cell)
        placed.append(gen)
        setup.hint(f"{gen.name} in {cell.name} needs {gen.batteries_required} batteries")
        log.debug(event="generator_placed", cell=cell.coord, room=cell.name, batteries=gen.batteries_required)
    return placed


def place_batteries(setup: LevelSetup, generators: List[PowerGenerator]) -> int:
    """Enough batteries for every generator plus one or two spares."""
    if not generators:
        return 0
    required = sum(g.batteries_needed for g in generators)
    total = required + 1 + setup.rng.randrange(2)
    for _ in range(total):
        cell = place_item(setup, BATTERY)
        if cell is not None:
            setup.batteries.append(cell)
    return len(setup.batteries)
