import pytest

from station.errors import GenerationError
from station.world import CORRIDOR, Direction, Grid

from station_test_utils import build_grid


def test_dimensions_must_be_positive():
    with pytest.raises(ValueError):
        Grid(0, 4)
    with pytest.raises(ValueError):
        Grid(3, -1)


def test_out_of_bounds_lookup():
    grid = Grid(3, 4)
    assert grid.cell(3, 0) is None
    assert grid.cell(-1, 0) is None
    with pytest.raises(KeyError):
        grid.at((0, 4))
    assert grid.cell(2, 3).coord == (2, 3)


def test_links_are_reciprocal(two_rooms):
    for cell in two_rooms.walkable_cells():
        for direction, coord in cell.links.items():
            assert two_rooms.at(coord).links[direction.opposite] == cell.coord


def test_walls_have_no_links(two_rooms):
    assert all(not c.links for c in two_rooms.iter_cells() if not c.walkable)


def test_cells_named_tracks_recarving():
    grid = build_grid(["#####", "#AA,#", "#####"])
    assert len(grid.cells_named("A")) == 2
    grid.mark_walkable(1, 3, "A")
    assert len(grid.cells_named("A")) == 3
    assert grid.cells_named(CORRIDOR) == []


def test_set_exit_moves_the_flag(two_rooms):
    assert two_rooms.set_exit(2, 7)
    assert not two_rooms.cell(1, 7).exit
    assert two_rooms.exit.coord == (2, 7)
    assert not two_rooms.set_exit(0, 0)
    assert not two_rooms.set_start(9, 9)


def test_for_each_cell_visits_row_major():
    grid = Grid(2, 3)
    seen = []
    grid.for_each_cell(lambda r, c, cell: seen.append((r, c)))
    assert seen == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]


def test_relative_and_adjacent(two_rooms):
    start = two_rooms.start
    assert two_rooms.relative(start, Direction.EAST).coord == (1, 2)
    assert len(list(two_rooms.adjacent(start))) == 4
    assert {n.coord for n in two_rooms.neighbors(start)} == {(1, 2), (2, 1)}


def test_perimeter_helpers():
    grid = Grid(5, 6)
    assert grid.is_on_perimeter(0, 3)
    assert grid.is_on_perimeter(4, 5)
    assert not grid.is_on_perimeter(2, 2)
    assert grid.is_playable_position(1, 1)
    assert not grid.is_playable_position(5, 1)
    assert grid.center_position() == (2, 3)


@pytest.mark.parametrize(
    "mutate, code",
    [
        (lambda g: setattr(g, "_start", None), "missing_start"),
        (lambda g: setattr(g, "_exit", None), "missing_exit"),
        (lambda g: setattr(g.start, "walkable", False), "start_not_walkable"),
        (lambda g: g.cell(0, 0).links.update({Direction.SOUTH: (1, 0)}), "wall_linked"),
        (lambda g: g.start.links.update({Direction.NORTH: (1, 3)}), "bad_link"),
    ],
)
def test_validate_error_codes(two_rooms, mutate, code):
    two_rooms.validate()
    mutate(two_rooms)
    with pytest.raises(GenerationError) as exc:
        two_rooms.validate()
    assert exc.value.code == code


def test_unlinked_walkable_neighbors_fail_validation(two_rooms):
    two_rooms.mark_walkable(0, 4, CORRIDOR)
    with pytest.raises(GenerationError) as exc:
        two_rooms.validate()
    assert exc.value.code == "missing_link"
