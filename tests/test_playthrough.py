import pytest

from station import Level
from station.world import OccupantKind

from station_test_utils import play_through


def _free_reachable_side(lv, cell, seen):
    return any(n in seen and not n.occupied for n in lv.grid.adjacent(cell))


@pytest.mark.slow
@pytest.mark.placement
@pytest.mark.parametrize("level", [4, 6, 8, 10])
@pytest.mark.parametrize("seed", [1, 12, 27, 404])
def test_deck_can_be_finished(level, seed):
    lv = Level(level, seed)
    controls = [c for c in lv.setup.hazard_solutions if c.entity(OccupantKind.HAZARD_CONTROL)]
    session, seen = play_through(lv)

    assert lv.exit in seen, f"level={level} seed={seed}: exit never reached"
    assert session.all_generators_powered()
    assert session.hazards_cleared()
    for cell in lv.setup.generators + controls:
        assert _free_reachable_side(lv, cell, seen), (
            f"level={level} seed={seed}: {cell.occupant.kind.value} at {cell.coord} is walled in"
        )


@pytest.mark.placement
def test_level_six_hazard_controls_keep_a_free_side():
    lv = Level(6, 1)
    for cell in lv.setup.hazard_solutions:
        if cell.entity(OccupantKind.HAZARD_CONTROL) is None:
            continue
        assert any(not n.occupied for n in lv.grid.neighbors(cell)), f"control at {cell.coord} walled in"


@pytest.mark.placement
def test_every_room_occupant_keeps_a_free_side():
    for level, seed in ((5, 5), (7, 70), (9, 12)):
        lv = Level(level, seed)
        for cell in lv.grid.iter_cells():
            if not cell.is_room or not cell.occupied:
                continue
            assert any(
                n.name == cell.name and not n.occupied and not n.exit for n in lv.grid.neighbors(cell)
            ), f"level={level} seed={seed}: {cell.occupant.kind.value} at {cell.coord} has no free side"
