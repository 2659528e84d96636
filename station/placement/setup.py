"""Run every placement planner over a carved grid, in dependency order.

Doors and keys go first because everything after them must respect the
locked regions. Hazards follow and claim whole rooms before the remaining
rooms receive unlocked doors. Hidden items are moved into furniture last.
"""
from __future__ import annotations

import random
from typing import Any, Callable, Optional

from ..config import MAX_DOORS
from ..logging_utils import get_logger
from ..world import Grid
from .context import LevelSetup
from .doors import door_target, ensure_every_room_has_door, place_locked_doors
from .furniture import hide_items_in_furniture, place_furniture
from .generators import place_batteries, place_generators
from .hazards import place_hazards
from .maintenance import place_maintenance_terminals
from .puzzles import place_puzzles
from .terminals import place_cctv_terminals

log = get_logger("station.placement")

PhaseRunner = Callable[..., Any]


def _direct(label: str, fn, *a, **k):
    return fn(*a, **k)


def setup_level(
    grid: Grid,
    level: int,
    rng: Optional[random.Random] = None,
    *,
    max_doors: int = MAX_DOORS,
    phase: Optional[PhaseRunner] = None,
) -> LevelSetup:
    """Place doors, keys and every other entity on ``grid`` in place.

    ``phase(label, fn, *args)`` wraps each planner call; the level pipeline
    passes a timing wrapper here.
    """
    if rng is None:
        rng = random.Random()
    run = phase or _direct
    setup = LevelSetup(grid, level, rng)

    run("doors", place_locked_doors, setup, door_target(level, max_doors))
    run("hazards", place_hazards, setup)
    run("unlocked_doors", ensure_every_room_has_door, setup)
    generators = run("generators", place_generators, setup)
    run("batteries", place_batteries, setup, generators)
    run("cctv_terminals", place_cctv_terminals, setup)
    run("furniture", place_furniture, setup)
    run("puzzles", place_puzzles, setup)
    run("maintenance_terminals", place_maintenance_terminals, setup)
    run("hide_items", hide_items_in_furniture, setup)

    log.info(event="level_setup", level=level, **setup.counts())
    return setup


__all__ = ["LevelSetup", "setup_level"]
