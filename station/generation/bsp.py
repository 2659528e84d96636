"""Binary space partitioning: split, carve one room per leaf, join siblings.

Rooms are carved first and corridors second; a corridor never renames a cell
that already belongs to a room, so corridors that cross a room simply merge
into it.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Set, Tuple

from ..logging_utils import get_logger
from ..placement.reachability import bfs_distances
from ..world import CORRIDOR, Cell, Grid
from .names import room_name

log = get_logger("station.generation")

MIN_NODE_SIZE = 8
MIN_NODE_FLOOR = 6
MIN_ROOM_SIZE = 4
ROOM_PADDING = 2
BASE_ROWS = 14
BASE_COLS = 26
MAX_ROWS = 60
MAX_COLS = 100


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    @property
    def center(self) -> Tuple[int, int]:
        """(row, col) of the middle cell."""
        return (self.y + self.h // 2, self.x + self.w // 2)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for row in range(self.y, self.y + self.h):
            for col in range(self.x, self.x + self.w):
                yield row, col


@dataclass
class Room:
    name: str
    rect: Rect

    @property
    def center(self) -> Tuple[int, int]:
        return self.rect.center


@dataclass
class BSPNode:
    rect: Rect
    left: Optional["BSPNode"] = None
    right: Optional["BSPNode"] = None
    room: Optional[Room] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class StructuralOutputs(NamedTuple):
    grid: Grid
    rooms: List[Room]
    corridor_cells: int


def grid_dimensions(level: int) -> Tuple[int, int]:
    rows = min(BASE_ROWS + level * 4, MAX_ROWS)
    cols = min(BASE_COLS + level * 6, MAX_COLS)
    return rows, cols


def min_node_size(level: int) -> int:
    return max(MIN_NODE_FLOOR, MIN_NODE_SIZE - level // 3)


def find_furthest_cell(grid: Grid, start: Cell) -> Cell:
    """Walkable cell with the longest BFS path from ``start``.

    Among equally distant cells a named-room cell beats a corridor cell.
    """
    furthest, best = start, -1
    for cell, dist in bfs_distances(grid, start).items():
        if dist > best or (dist == best and not cell.is_corridor and furthest.is_corridor):
            furthest, best = cell, dist
    return furthest


class Partitioner:
    def __init__(self, level: int, rng: random.Random, size: Optional[Tuple[int, int]] = None):
        if level < 1:
            raise ValueError(f"level must be >= 1, got {level}")
        self.level = level
        self.rng = rng
        self.rows, self.cols = size if size is not None else grid_dimensions(level)
        self._taken: Set[str] = set()

    # ------------------------------------------------------------------
    # Tree
    # ------------------------------------------------------------------
    def split(self, node: BSPNode, min_size: int) -> None:
        r = node.rect
        can_w = r.w >= min_size * 2
        can_h = r.h >= min_size * 2
        if not can_w and not can_h:
            return
        if r.w > r.h and can_w:
            horizontal = False
        elif r.h > r.w and can_h:
            horizontal = True
        elif can_w and can_h:
            horizontal = self.rng.randrange(2) == 0
        else:
            horizontal = can_h
        if horizontal:
            cut = min_size + self.rng.randrange(r.h - min_size * 2 + 1)
            node.left = BSPNode(Rect(r.x, r.y, r.w, cut))
            node.right = BSPNode(Rect(r.x, r.y + cut, r.w, r.h - cut))
        else:
            cut = min_size + self.rng.randrange(r.w - min_size * 2 + 1)
            node.left = BSPNode(Rect(r.x, r.y, cut, r.h))
            node.right = BSPNode(Rect(r.x + cut, r.y, r.w - cut, r.h))
        self.split(node.left, min_size)
        self.split(node.right, min_size)

    def create_rooms(self, node: BSPNode) -> None:
        if not node.is_leaf:
            for child in (node.left, node.right):
                if child is not None:
                    self.create_rooms(child)
            return
        r = node.rect
        if r.w < MIN_ROOM_SIZE + ROOM_PADDING or r.h < MIN_ROOM_SIZE + ROOM_PADDING:
            return
        w = min(MIN_ROOM_SIZE + self.rng.randrange(r.w - MIN_ROOM_SIZE - ROOM_PADDING + 1), r.w - ROOM_PADDING)
        h = min(MIN_ROOM_SIZE + self.rng.randrange(r.h - MIN_ROOM_SIZE - ROOM_PADDING + 1), r.h - ROOM_PADDING)
        x = r.x + self.rng.randrange(r.w - w)
        y = r.y + self.rng.randrange(r.h - h)
        node.room = Room(room_name(self.rng, self._taken), Rect(x, y, w, h))

    def pick_room(self, node: BSPNode) -> Optional[Room]:
        """A random leaf room from the subtree rooted at ``node``."""
        if node.room is not None:
            return node.room
        left = self.pick_room(node.left) if node.left is not None else None
        right = self.pick_room(node.right) if node.right is not None else None
        if left is not None and right is not None:
            return left if self.rng.randrange(2) == 0 else right
        return left if left is not None else right

    @staticmethod
    def collect_rooms(node: BSPNode) -> List[Room]:
        rooms = [node.room] if node.room is not None else []
        for child in (node.left, node.right):
            if child is not None:
                rooms.extend(Partitioner.collect_rooms(child))
        return rooms

    # ------------------------------------------------------------------
    # Carving
    # ------------------------------------------------------------------
    def carve_rooms(self, grid: Grid, rooms: List[Room]) -> None:
        for room in rooms:
            for row, col in room.rect.cells():
                grid.mark_walkable(row, col, room.name)

    def _carve_corridor_cell(self, grid: Grid, row: int, col: int) -> int:
        cell = grid.cell(row, col)
        if cell is None or cell.walkable:
            return 0
        grid.mark_walkable(row, col, CORRIDOR)
        return 1

    def carve_horizontal(self, grid: Grid, row: int, c0: int, c1: int) -> int:
        if c0 > c1:
            c0, c1 = c1, c0
        return sum(self._carve_corridor_cell(grid, row, col) for col in range(c0, c1 + 1))

    def carve_vertical(self, grid: Grid, col: int, r0: int, r1: int) -> int:
        if r0 > r1:
            r0, r1 = r1, r0
        return sum(self._carve_corridor_cell(grid, row, col) for row in range(r0, r1 + 1))

    def connect(self, grid: Grid, node: BSPNode) -> int:
        """Join the two subtrees of every internal node with an L-shaped corridor."""
        if node.left is None or node.right is None:
            return 0
        carved = 0
        a, b = self.pick_room(node.left), self.pick_room(node.right)
        if a is not None and b is not None:
            (ar, ac), (br, bc) = a.center, b.center
            if self.rng.randrange(2) == 0:
                carved += self.carve_horizontal(grid, ar, ac, bc)
                carved += self.carve_vertical(grid, bc, ar, br)
            else:
                carved += self.carve_vertical(grid, ac, ar, br)
                carved += self.carve_horizontal(grid, br, ac, bc)
        carved += self.connect(grid, node.left)
        carved += self.connect(grid, node.right)
        return carved

    # ------------------------------------------------------------------
    def run(self) -> StructuralOutputs:
        grid = Grid(self.rows, self.cols)
        root = BSPNode(Rect(1, 1, self.cols - 2, self.rows - 2))
        self.split(root, min_node_size(self.level))
        self.create_rooms(root)
        rooms = self.collect_rooms(root)
        self.carve_rooms(grid, rooms)
        corridor_cells = self.connect(grid, root)
        grid.link_neighbors()

        if rooms:
            start_room = rooms[self.rng.randrange(len(rooms))]
            grid.set_start(*start_room.center)
            exit_cell = find_furthest_cell(grid, grid.start)
            grid.set_exit(exit_cell.row, exit_cell.col)
        else:
            log.warn(event="bsp_degenerate", level=self.level, rows=self.rows, cols=self.cols)
            row, col = grid.center_position()
            name = room_name(self.rng, self._taken)
            grid.mark_walkable(row, col, name)
            grid.link_neighbors()
            grid.set_start(row, col)
            grid.set_exit(row, col)
            rooms = [Room(name, Rect(col, row, 1, 1))]

        grid.validate()
        log.debug(
            event="bsp_generated", level=self.level, rows=self.rows, cols=self.cols,
            rooms=len(rooms), corridor_cells=corridor_cells,
        )
        return StructuralOutputs(grid, rooms, corridor_cells)


def generate(level: int, rng: Optional[random.Random] = None) -> Grid:
    """Carve, connect and validate a level grid.

    Raises GenerationError if the result breaks a structural invariant.
    """
    if rng is None:
        rng = random.Random()
    return Partitioner(level, rng).run().grid


__all__ = [
    "BSPNode",
    "Partitioner",
    "Rect",
    "Room",
    "StructuralOutputs",
    "find_furthest_cell",
    "generate",
    "grid_dimensions",
    "min_node_size",
]
