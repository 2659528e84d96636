import random

import pytest

from station import Level
from station.placement import reachable
from station.placement.context import LevelSetup
from station.placement.doors import door_target, ensure_every_room_has_door, place_locked_doors
from station.world import Door, OccupantKind


def test_door_target_schedule_and_cap():
    assert door_target(1) == 1
    assert door_target(2) == 2
    assert door_target(3) == 3
    assert door_target(6) == 6
    assert door_target(50) == 10
    assert door_target(50, max_doors=4) == 4


def test_single_corridor_door_gates_the_exit(two_rooms):
    setup = LevelSetup(two_rooms, 1, random.Random(3))
    assert place_locked_doors(setup, 1) == 1
    door_cell = setup.locked_doors[0]
    assert door_cell.coord == (1, 4)
    assert door_cell.locked
    door = door_cell.entity(OccupantKind.DOOR)
    assert isinstance(door, Door) and door.locked

    key_cell = setup.keys[door.keycard_name]
    before_door = reachable(two_rooms, two_rooms.start, [door_cell])
    assert key_cell in before_door
    assert key_cell.name == "A"
    assert key_cell is not two_rooms.start
    assert two_rooms.exit not in before_door
    assert key_cell.item_named(door.keycard_name) is not None


def test_slot_without_candidate_is_skipped(two_rooms):
    setup = LevelSetup(two_rooms, 2, random.Random(3))
    assert place_locked_doors(setup, 2) == 1
    assert setup.skipped["door"] == 1
    assert setup.counts()["door_slots_skipped"] == 1


def test_at_most_one_locked_door_per_room(three_rooms):
    setup = LevelSetup(three_rooms, 3, random.Random(8))
    place_locked_doors(setup, 3)
    rooms = [c.occupant.entity.room_name for c in setup.locked_doors]
    assert len(rooms) == len(set(rooms))


def test_rooms_without_locked_door_get_an_unlocked_one(three_rooms):
    setup = LevelSetup(three_rooms, 1, random.Random(2))
    place_locked_doors(setup, 1)
    ensure_every_room_has_door(setup)
    doors = [c.entity(OccupantKind.DOOR) for c in three_rooms.iter_cells() if c.entity(OccupantKind.DOOR)]
    assert {d.room_name for d in doors} <= {"A", "B", "C"}
    for cell in setup.unlocked_doors:
        assert not cell.entity(OccupantKind.DOOR).locked
        assert not cell.locked


@pytest.mark.placement
def test_level_one_has_exactly_one_door_and_open_exit():
    for seed in (1, 2, 3, 4, 5):
        lv = Level(1, seed)
        assert len(lv.setup.locked_doors) + lv.setup.skipped.get("door", 0) == 1
        assert len(lv.setup.locked_doors) == 1, f"seed={seed} placed no door"
        door_cell = lv.setup.locked_doors[0]
        name = door_cell.occupant.entity.keycard_name
        region = reachable(lv.grid, lv.start, [door_cell])
        assert lv.setup.keys[name] in region
        assert not lv.exit.locked


@pytest.mark.slow
@pytest.mark.placement
@pytest.mark.parametrize("level", [2, 4, 7, 10])
def test_keys_collectable_in_placement_order(level):
    for seed in (10, 20, 30):
        lv = Level(level, seed)
        doors = lv.setup.locked_doors
        assert len(doors) <= min(door_target(level), 10)
        for i, door_cell in enumerate(doors):
            name = door_cell.occupant.entity.keycard_name
            key_cell = lv.setup.keys[name]
            region = reachable(lv.grid, lv.start, doors[: i + 1])
            assert key_cell in region, f"level={level} seed={seed} key {name} behind its own door"


@pytest.mark.placement
def test_doors_sit_on_corridor_entries():
    lv = Level(5, 555)
    for cell in lv.setup.locked_doors + lv.setup.unlocked_doors:
        assert cell.is_corridor
        room = cell.occupant.entity.room_name
        assert cell in lv.setup.entries[room]


@pytest.mark.placement
def test_door_cap_respected_from_config():
    from station import StationConfig

    lv = Level(9, 99, config=StationConfig(seed=99, max_doors=2))
    assert len(lv.setup.locked_doors) <= 2
