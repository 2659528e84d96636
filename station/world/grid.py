"""Flat row-major cell arena.

The Grid owns every Cell for the lifetime of a level. Cells reference their
neighbors by coordinate (``Cell.links``) and the grid resolves those
coordinates back to cells, so there are no cell-to-cell object references.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

from ..errors import GenerationError
from .cells import CORRIDOR, Cell, Coord, Direction, direction_between


class Grid:
    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells: List[Cell] = [Cell(r, c) for r in range(rows) for c in range(cols)]
        self._start: Optional[Coord] = None
        self._exit: Optional[Coord] = None
        self._by_name: Optional[Dict[str, List[Cell]]] = None

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, start={self._start}, exit={self._exit})"

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Optional[Cell]:
        if not self.in_bounds(row, col):
            return None
        return self._cells[row * self.cols + col]

    def at(self, coord: Coord) -> Cell:
        cell = self.cell(*coord)
        if cell is None:
            raise KeyError(coord)
        return cell

    def relative(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        dr, dc = direction.delta
        return self.cell(cell.row + dr, cell.col + dc)

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        """Linked (walkable) neighbors of ``cell``."""
        for coord in cell.links.values():
            yield self._cells[coord[0] * self.cols + coord[1]]

    def adjacent(self, cell: Cell) -> Iterator[Cell]:
        """In-bounds 4-neighborhood, walkable or not."""
        for direction in Direction:
            other = self.relative(cell, direction)
            if other is not None:
                yield other

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def iter_cells(self) -> Iterator[Cell]:
        return iter(self._cells)

    def for_each_cell(self, fn: Callable[[int, int, Cell], None]) -> None:
        for cell in self._cells:
            fn(cell.row, cell.col, cell)

    def walkable_cells(self) -> List[Cell]:
        return [c for c in self._cells if c.walkable]

    def cells_named(self, name: str) -> List[Cell]:
        if self._by_name is None:
            index: Dict[str, List[Cell]] = {}
            for c in self._cells:
                if c.walkable:
                    index.setdefault(c.name, []).append(c)
            self._by_name = index
        return list(self._by_name.get(name, ()))

    def room_names(self) -> List[str]:
        return sorted({c.name for c in self._cells if c.is_room})

    # ------------------------------------------------------------------
    # Carving
    # ------------------------------------------------------------------
    def mark_walkable(self, row: int, col: int, name: str = CORRIDOR) -> bool:
        cell = self.cell(row, col)
        if cell is None:
            return False
        cell.walkable = True
        cell.name = name
        self._by_name = None
        return True

    def link_neighbors(self) -> None:
        """Wire every pair of grid-adjacent walkable cells both ways."""
        for cell in self._cells:
            cell.links = {}
            if not cell.walkable:
                continue
            for direction in Direction:
                other = self.relative(cell, direction)
                if other is not None and other.walkable:
                    cell.links[direction] = other.coord

    # ------------------------------------------------------------------
    # Start / exit
    # ------------------------------------------------------------------
    @property
    def start(self) -> Optional[Cell]:
        return self.at(self._start) if self._start is not None else None

    @property
    def exit(self) -> Optional[Cell]:
        return self.at(self._exit) if self._exit is not None else None

    def set_start(self, row: int, col: int) -> bool:
        cell = self.cell(row, col)
        if cell is None or not cell.walkable:
            return False
        self._start = cell.coord
        return True

    def set_exit(self, row: int, col: int) -> bool:
        cell = self.cell(row, col)
        if cell is None or not cell.walkable:
            return False
        if self._exit is not None:
            self.at(self._exit).exit = False
        cell.exit = True
        self._exit = cell.coord
        return True

    def center_position(self) -> Coord:
        return self.rows // 2, self.cols // 2

    def is_on_perimeter(self, row: int, col: int) -> bool:
        return row == 0 or col == 0 or row == self.rows - 1 or col == self.cols - 1

    def is_playable_position(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and not self.is_on_perimeter(row, col)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """Raise GenerationError if the grid breaks a structural invariant."""
        start, exit_cell = self.start, self.exit
        if start is None:
            raise GenerationError("grid has no start cell", "missing_start")
        if exit_cell is None:
            raise GenerationError("grid has no exit cell", "missing_exit")
        if not start.walkable:
            raise GenerationError("start cell is not walkable", "start_not_walkable", start.coord)
        if not exit_cell.walkable:
            raise GenerationError("exit cell is not walkable", "exit_not_walkable", exit_cell.coord)
        for cell in self._cells:
            if cell.links and not cell.walkable:
                raise GenerationError("wall cell has neighbor links", "wall_linked", cell.coord)
            for direction, coord in cell.links.items():
                if direction_between(cell.coord, coord) is not direction:
                    raise GenerationError(
                        f"link {direction.name} points at non-adjacent {coord}", "bad_link", cell.coord
                    )
                other = self.at(coord)
                if not other.walkable or other.links.get(direction.opposite) != cell.coord:
                    raise GenerationError(f"link to {coord} is not reciprocal", "one_way_link", cell.coord)
            if cell.walkable:
                for direction in Direction:
                    other = self.relative(cell, direction)
                    if other is not None and other.walkable and direction not in cell.links:
                        raise GenerationError(
                            f"walkable neighbor {other.coord} is not linked", "missing_link", cell.coord
                        )


__all__ = ["Grid"]
