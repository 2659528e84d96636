import random

import pytest

from station import Level
from station.placement import (
    adjacent_room_names,
    doorway_cells,
    find_room_entry_points,
    still_connected_if_blocked,
)
from station.placement.connectivity import keeps_occupants_accessible, leaves_room_whole
from station.placement.context import LevelSetup
from station.placement.search import interior_candidates, is_safe_blocking_cell
from station.world import Furniture, Hazard, HazardControl, HazardType, OccupantKind, PowerGenerator

from station_test_utils import build_grid

# One-row room: the middle cell is the only path between the two doorways.
CORRIDOR_ROOM = [
    "#####",
    ",MMM,",
    "#####",
]

# Two-row room: the lower row is off the doorway-to-doorway path.
WIDE_ROOM = [
    "#####",
    ",MMM,",
    "#MMM#",
    "#####",
]

NAMES = {"M": "Med Bay"}


def _doorways(grid, room="Med Bay"):
    entries = find_room_entry_points(grid)
    return doorway_cells(grid, room, entries[room])


def test_entry_points_are_corridor_cells_in_grid_order():
    grid = build_grid(CORRIDOR_ROOM, NAMES)
    entries = find_room_entry_points(grid)
    assert [c.coord for c in entries["Med Bay"]] == [(1, 0), (1, 4)]


def test_doorways_are_room_cells_touching_entries():
    grid = build_grid(WIDE_ROOM, NAMES)
    assert [c.coord for c in _doorways(grid)] == [(1, 1), (1, 3)]


def test_blocking_the_only_connecting_cell_splits_the_room():
    grid = build_grid(CORRIDOR_ROOM, NAMES)
    doorways = _doorways(grid)
    assert still_connected_if_blocked(grid, "Med Bay", doorways, grid.cell(1, 2)) is False


def test_blocking_an_off_path_cell_is_allowed():
    grid = build_grid(WIDE_ROOM, NAMES)
    doorways = _doorways(grid)
    assert still_connected_if_blocked(grid, "Med Bay", doorways, grid.cell(2, 2)) is True


def test_path_around_a_blocked_cell_keeps_doorways_connected():
    grid = build_grid(WIDE_ROOM, NAMES)
    doorways = _doorways(grid)
    assert still_connected_if_blocked(grid, "Med Bay", doorways, grid.cell(1, 2)) is True


def test_existing_occupants_count_as_blocked():
    grid = build_grid(WIDE_ROOM, NAMES)
    doorways = _doorways(grid)
    grid.cell(2, 2).place(OccupantKind.FURNITURE, Furniture("Cot", "A folding cot."))
    # Now the top middle cell is the last link between the two doorways.
    assert still_connected_if_blocked(grid, "Med Bay", doorways, grid.cell(1, 2)) is False


def test_blocking_a_doorway_fails():
    grid = build_grid(WIDE_ROOM, NAMES)
    doorways = _doorways(grid)
    assert still_connected_if_blocked(grid, "Med Bay", doorways, doorways[0]) is False


def test_room_without_doorways_is_vacuously_connected():
    grid = build_grid(["####", "#MM#", "####"], NAMES)
    assert still_connected_if_blocked(grid, "Med Bay", [], grid.cell(1, 1)) is True


def test_leaves_room_whole_detects_stranded_cells():
    grid = build_grid(["#####", "#MMM#", "#M#M#", "#####"], NAMES)
    # Blocking the top middle cell leaves two separate halves.
    assert leaves_room_whole(grid, "Med Bay", grid.cell(1, 2)) is False
    assert leaves_room_whole(grid, "Med Bay", grid.cell(2, 1)) is True


def test_adjacent_room_names_via_corridor_and_direct_contact():
    grid = build_grid(
        [
            "##########",
            "#AA,,BB#CC",
            "#AA##BBDD#",
            "##########",
        ]
    )
    assert adjacent_room_names(grid, "A") == ["A", "B"]
    assert adjacent_room_names(grid, "B") == ["A", "B", "D"]
    assert adjacent_room_names(grid, "C") == ["C", "D"]
    assert adjacent_room_names(grid, "") == []
    assert adjacent_room_names(grid, "Nowhere") == []


@pytest.mark.placement
@pytest.mark.parametrize("level", [2, 3, 5, 8])
def test_no_room_is_split_after_full_setup(level):
    for seed in (11, 22, 33):
        lv = Level(level, seed)
        for room, doorways in lv.setup.doorways.items():
            assert still_connected_if_blocked(lv.grid, room, doorways), (
                f"level={level} seed={seed} room={room!r} split by placed entities"
            )


@pytest.mark.placement
def test_no_blocking_entity_on_a_doorway():
    lv = Level(6, 606)
    for room, doorways in lv.setup.doorways.items():
        for cell in doorways:
            assert not cell.occupied, f"{cell.occupant.kind} on doorway {cell.coord} of {room}"


@pytest.mark.slow
@pytest.mark.placement
def test_rooms_stay_whole_after_full_setup():
    rng = random.Random(5)
    for _ in range(3):
        lv = Level(rng.randint(3, 9), rng.randint(1, 1_000_000))
        for room in lv.grid.room_names():
            free = [c for c in lv.grid.cells_named(room) if not c.occupied and not c.exit]
            if not free:
                continue
            seen = {free[0]}
            stack = [free[0]]
            while stack:
                cur = stack.pop()
                for n in lv.grid.neighbors(cur):
                    if n.name == room and not n.occupied and not n.exit and n not in seen:
                        seen.add(n)
                        stack.append(n)
            assert len(seen) == len(free), f"seed={lv.seed} room {room!r} has stranded cells"


# Closed 3x5 room: the guard has no doorways to protect, so only the
# occupant-access check can reject a cell here.
STOREROOM = [
    "#######",
    "#MMMMM#",
    "#MMMMM#",
    "#MMMMM#",
    "#######",
]


def _furnish(grid, *coords):
    for coord in coords:
        grid.at(coord).place(OccupantKind.FURNITURE, Furniture("Crate", "A sealed crate."))


def test_last_free_side_of_a_control_is_kept():
    grid = build_grid(STOREROOM, NAMES)
    grid.cell(2, 2).place(OccupantKind.HAZARD_CONTROL, HazardControl(Hazard(HazardType.GAS)))
    _furnish(grid, (1, 2), (3, 2), (2, 1))
    assert keeps_occupants_accessible(grid, "Med Bay", grid.cell(2, 3)) is False
    assert keeps_occupants_accessible(grid, "Med Bay", grid.cell(1, 4)) is True


def test_candidate_itself_needs_a_free_side():
    grid = build_grid(STOREROOM, NAMES)
    _furnish(grid, (1, 2), (2, 1))
    assert keeps_occupants_accessible(grid, "Med Bay", grid.cell(1, 1)) is False


def test_exit_is_not_a_free_side_and_keeps_one_itself():
    grid = build_grid(STOREROOM, NAMES, start=(3, 5), exit=(1, 1))
    grid.cell(1, 3).place(OccupantKind.GENERATOR, PowerGenerator("Generator #1", 1))
    _furnish(grid, (1, 4), (2, 3))
    # (1, 2) would leave the generator facing only the locked exit side
    assert keeps_occupants_accessible(grid, "Med Bay", grid.cell(1, 2)) is False
    _furnish(grid, (2, 1))
    assert keeps_occupants_accessible(grid, "Med Bay", grid.cell(3, 3)) is True
    # exit at (1, 1) now only touches (1, 2)
    grid.cell(1, 3).clear_occupant()
    assert keeps_occupants_accessible(grid, "Med Bay", grid.cell(1, 2)) is False


def test_safe_blocking_cell_rejects_walling_in_a_generator():
    grid = build_grid(STOREROOM, NAMES, start=(3, 5), exit=(3, 4))
    setup = LevelSetup(grid, 3, random.Random(0))
    grid.cell(1, 2).place(OccupantKind.GENERATOR, PowerGenerator("Generator #1", 1))
    _furnish(grid, (1, 1), (2, 2))
    assert grid.cell(1, 3) in interior_candidates(setup, "Med Bay")
    assert leaves_room_whole(grid, "Med Bay", grid.cell(1, 3))
    assert not is_safe_blocking_cell(setup, grid.cell(1, 3))
    assert is_safe_blocking_cell(setup, grid.cell(2, 4))
