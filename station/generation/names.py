"""Room naming: "<Adjective> <Base>" with a numeric suffix on collision."""
from __future__ import annotations

import random
from typing import Optional, Set

ROOM_TYPES = [
    "Bridge", "Cargo Bay", "Engineering", "Med Bay", "Crew Quarters",
    "Airlock", "Server Room", "Reactor Core", "Armory", "Lab",
    "Hangar", "Command Center", "Life Support", "Mess Hall", "Storage",
    "Observatory", "Communications", "Maintenance Bay", "Hydroponics", "Security",
]

ROOM_ADJECTIVES = [
    "Abandoned", "Damaged", "Dark", "Derelict", "Emergency",
    "Flickering", "Isolated", "Sealed", "Depressurized", "Overgrown",
]


def room_name(rng: random.Random, taken: Set[str]) -> str:
    """Draw a room name not yet in ``taken`` and record it there."""
    name = f"{rng.choice(ROOM_ADJECTIVES)} {rng.choice(ROOM_TYPES)}"
    if name in taken:
        base, n = name, 2
        while f"{base} {n}" in taken:
            n += 1
        name = f"{base} {n}"
    taken.add(name)
    return name


def room_type(name: str) -> Optional[str]:
    """Base room type of a generated name ("Dark Med Bay 2" -> "Med Bay")."""
    best = None
    for base in ROOM_TYPES:
        if base in name and (best is None or len(base) > len(best)):
            best = base
    return best
