from __future__ import annotations

from typing import Dict


def init_metrics() -> Dict[str, int | float | bool | dict]:
    return {
        'rooms': 0,
        'corridor_cells': 0,
        'walkable_cells': 0,
        'doors_placed': 0,
        'door_slots_skipped': 0,
        'unlocked_doors': 0,
        'keys_placed': 0,
        'generators': 0,
        'batteries': 0,
        'terminals': 0,
        'hazards': 0,
        'puzzles': 0,
        'furniture': 0,
        'maintenance_terminals': 0,
        'placements_skipped': 0,
        'phase_ms': {},
        'runtime_ms': 0.0,
    }
