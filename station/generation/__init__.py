"""Level layout generation (BSP rooms and corridors)."""

from .bsp import BSPNode, Partitioner, Rect, Room, StructuralOutputs, find_furthest_cell, generate, grid_dimensions
from .metrics import init_metrics
from .names import ROOM_ADJECTIVES, ROOM_TYPES, room_name, room_type

__all__ = [
    "BSPNode",
    "Partitioner",
    "ROOM_ADJECTIVES",
    "ROOM_TYPES",
    "Rect",
    "Room",
    "StructuralOutputs",
    "find_furthest_cell",
    "generate",
    "grid_dimensions",
    "init_metrics",
    "room_name",
    "room_type",
]
