from __future__ import annotations

from typing import List

from ..world import OccupantKind, PuzzleReward, PuzzleTerminal
from .context import LevelSetup
from .search import find_room, first_safe, interior_candidates, shuffled

SOLUTIONS = [
    "1-2-3-4",
    "2-4-6-8",
    "up-down-left-right",
    "north-south-east-west",
    "alpha-beta-gamma-delta",
]


def puzzle_count(level: int) -> int:
    if level < 2:
        return 0
    return 1 if level == 2 else 2


def puzzle_reward(level: int, index: int) -> PuzzleReward:
    if index == 0 and level >= 6:
        return PuzzleReward.MAP
    if index == 0 and level >= 3:
        return PuzzleReward.KEYCARD
    return PuzzleReward.BATTERY


def place_puzzles(setup: LevelSetup) -> List[PuzzleTerminal]:
    """Security terminals whose codes are written on furniture in another room.

    Puzzles only need to avoid global articulation cells; they also pass the
    room guard like every other blocking entity.
    """
    placed: List[PuzzleTerminal] = []
    for i, solution in enumerate(SOLUTIONS[:puzzle_count(setup.level)]):
        anchor = find_room(setup, named_only=True)
        if anchor is None:
            setup.skip("puzzle", index=i)
            continue
        cell = first_safe(setup, shuffled(setup, interior_candidates(setup, anchor.name)), articulation_free=True)
        if cell is None:
            setup.skip("puzzle", index=i, room=anchor.name)
            continue
        puzzle = PuzzleTerminal(
            f"Security Terminal #{i + 1}",
            solution,
            hint=f"Find the code in logs or furniture descriptions. Look for: Code: {solution}",
            reward=puzzle_reward(setup.level, i),
        )
        cell.place(OccupantKind.PUZZLE, puzzle)
        setup.avoid.add(cell)
        setup.puzzles.append(cell)
        placed.append(puzzle)
        setup.hint(f"A puzzle terminal is in {cell.name}")

        holders = [c for c in setup.furniture if c.name != cell.name]
        if holders:
            holder = holders[setup.rng.randrange(len(holders))]
            holder.occupant.entity.description += f" Code: {solution}"
    return placed
