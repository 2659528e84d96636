"""Entity placement on a carved grid.

The reachability oracle and the room-connectivity guard are re-exported here;
the individual planners live in their own modules and are driven by
``station.placement.setup.setup_level``.
"""

from .connectivity import (
    adjacent_room_names,
    doorway_cells,
    find_room_entry_points,
    still_connected_if_blocked,
)
from .reachability import is_articulation_point, is_chokepoint, reachable, reachable_count

__all__ = [
    "adjacent_room_names",
    "doorway_cells",
    "find_room_entry_points",
    "is_articulation_point",
    "is_chokepoint",
    "reachable",
    "reachable_count",
    "still_connected_if_blocked",
]
