import random

from station.generation import generate
from station.placement import is_articulation_point, is_chokepoint, reachable, reachable_count
from station.placement.reachability import bfs_distances, manhattan
from station.placement.search import collect_reachable_cells

from station_test_utils import bfs_coords, build_grid


def test_reachable_matches_independent_bfs():
    grid = generate(3, random.Random(31))
    assert {c.coord for c in reachable(grid, grid.start)} == bfs_coords(grid, grid.start)


def test_excluded_cells_cut_the_search(two_rooms):
    door = two_rooms.cell(1, 4)
    region = reachable(two_rooms, two_rooms.start, [door])
    assert {c.name for c in region} == {"A"}
    assert door not in region
    assert reachable_count(two_rooms, two_rooms.start, {door}) == 6


def test_excluded_start_yields_nothing(two_rooms):
    assert reachable(two_rooms, two_rooms.start, [two_rooms.start]) == set()
    assert reachable(two_rooms, None) == set()


def test_reachable_does_not_mutate_grid(two_rooms):
    before = [(c.walkable, dict(c.links), c.locked) for c in two_rooms.iter_cells()]
    reachable(two_rooms, two_rooms.start, [two_rooms.cell(1, 4)])
    assert before == [(c.walkable, dict(c.links), c.locked) for c in two_rooms.iter_cells()]


def test_articulation_and_chokepoint(two_rooms):
    corridor = two_rooms.cell(1, 4)
    corner = two_rooms.cell(2, 1)
    assert is_articulation_point(two_rooms, two_rooms.start, corridor)
    assert not is_articulation_point(two_rooms, two_rooms.start, corner)
    assert is_chokepoint(two_rooms, two_rooms.start, corridor)
    assert not is_chokepoint(two_rooms, two_rooms.start, corner)


def test_distances_in_bfs_order():
    grid = build_grid(["######", "#AAAA#", "######"], start=(1, 1))
    dist = bfs_distances(grid, grid.start)
    assert [d for d in dist.values()] == [0, 1, 2, 3]
    assert manhattan(grid.start, grid.cell(1, 4)) == 3


def test_collect_reachable_skips_but_walks_through_avoided(two_rooms):
    door = two_rooms.cell(1, 4)
    cells = collect_reachable_cells(two_rooms, two_rooms.start, {door})
    assert door not in cells
    assert two_rooms.exit in cells
    assert cells[0] is two_rooms.start
