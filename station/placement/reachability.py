"""Reachability oracle: breadth-first search over walkable cells.

Every function here is a pure query. Nothing mutates the grid, so callers may
test a hypothetical exclusion per candidate and simply discard the answer.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, Optional, Set

from ..world import Cell, Grid

CHOKEPOINT_TOLERANCE = 0.10


def reachable(grid: Grid, start: Optional[Cell], excluded: Iterable[Cell] = ()) -> Set[Cell]:
    """Cells reachable from ``start`` without entering any ``excluded`` cell.

    An excluded, missing or non-walkable start yields the empty set.
    """
    blocked = excluded if isinstance(excluded, (set, frozenset)) else set(excluded)
    if start is None or not start.walkable or start in blocked:
        return set()
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in grid.neighbors(cur):
            if nxt in seen or nxt in blocked:
                continue
            seen.add(nxt)
            q.append(nxt)
    return seen


def reachable_count(grid: Grid, start: Optional[Cell], excluded: Iterable[Cell] = ()) -> int:
    return len(reachable(grid, start, excluded))


def bfs_distances(grid: Grid, start: Cell) -> Dict[Cell, int]:
    """Path length from ``start`` to every reachable cell, in BFS order."""
    dist = {start: 0}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in grid.neighbors(cur):
            if nxt not in dist:
                dist[nxt] = dist[cur] + 1
                q.append(nxt)
    return dist


def is_articulation_point(grid: Grid, start: Cell, cell: Cell, excluded: Iterable[Cell] = ()) -> bool:
    """True when blocking ``cell`` cuts off more than the cell itself."""
    excluded = set(excluded)
    full = reachable(grid, start, excluded)
    if cell not in full:
        return False
    without = reachable_count(grid, start, excluded | {cell})
    return without < len(full) - 1


def is_chokepoint(grid: Grid, start: Cell, cell: Cell, excluded: Iterable[Cell] = ()) -> bool:
    """Count-only test: blocking ``cell`` loses more than a tenth of the walkable area."""
    total = len(grid.walkable_cells())
    excluded = set(excluded) | {cell}
    return reachable_count(grid, start, excluded) < total - int(total * CHOKEPOINT_TOLERANCE)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


__all__ = [
    "bfs_distances",
    "is_articulation_point",
    "is_chokepoint",
    "manhattan",
    "reachable",
    "reachable_count",
]
