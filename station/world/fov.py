"""Field of view: Chebyshev radius with Bresenham line of sight.

Walls (non-walkable cells) stop sight, so a wall is never itself revealed and
nothing strictly behind one along the sightline is either.
"""
from __future__ import annotations

from typing import Set

from ..config import FOV_RADIUS
from .cells import Cell
from .grid import Grid


def has_line_of_sight(grid: Grid, origin: Cell, target: Cell) -> bool:
    r, c = origin.row, origin.col
    r1, c1 = target.row, target.col
    dr, dc = r1 - r, c1 - c
    if dr == 0 and dc == 0:
        return True
    abs_dr, abs_dc = abs(dr), abs(dc)
    step_r = (dr > 0) - (dr < 0)
    step_c = (dc > 0) - (dc < 0)

    if abs_dr >= abs_dc:
        err = 2 * abs_dc - abs_dr
        while r != r1:
            r += step_r
            if err > 0:
                c += step_c
                err -= 2 * abs_dr
            err += 2 * abs_dc
            cell = grid.cell(r, c)
            if cell is None or not cell.walkable:
                return False
    else:
        err = 2 * abs_dr - abs_dc
        while c != c1:
            c += step_c
            if err > 0:
                r += step_r
                err -= 2 * abs_dc
            err += 2 * abs_dr
            cell = grid.cell(r, c)
            if cell is None or not cell.walkable:
                return False
    return True


def calculate_fov(grid: Grid, origin: Cell, radius: int = FOV_RADIUS) -> Set[Cell]:
    """Cells visible from ``origin``; always contains ``origin`` itself."""
    visible = {origin}
    for dr in range(-radius, radius + 1):
        for dc in range(-radius, radius + 1):
            cell = grid.cell(origin.row + dr, origin.col + dc)
            if cell is None or not cell.walkable or cell is origin:
                continue
            if has_line_of_sight(grid, origin, cell):
                visible.add(cell)
    return visible


def reveal_fov(grid: Grid, origin: Cell, radius: int = FOV_RADIUS, *, player: bool = True) -> Set[Cell]:
    """Mark the visible cells discovered, and visited when ``origin`` is the player.

    Only ever sets flags, so repeating a reveal from the same origin is a no-op.
    """
    visible = calculate_fov(grid, origin, radius)
    for cell in visible:
        cell.discovered = True
        if player:
            cell.visited = True
    return visible


__all__ = ["FOV_RADIUS", "calculate_fov", "has_line_of_sight", "reveal_fov"]
