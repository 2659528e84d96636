"""Entities that occupy cells or lie on their floors.

Doors and keycards are paired purely through names derived from the guarded
room, so no identifier space is shared between them.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, NamedTuple, Optional


class Item:
    """A named token. Two items match when their names are equal."""

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description

    def __repr__(self) -> str:
        return f"Item({self.name!r})"

    def matches(self, name: str) -> bool:
        return self.name == name


BATTERY = "Battery"


def keycard_name(room_name: str) -> str:
    return f"{room_name} Keycard"


class Door:
    def __init__(self, room_name: str, locked: bool = True):
        self.room_name = room_name
        self.locked = locked

    def __repr__(self) -> str:
        state = "locked" if self.locked else "open"
        return f"Door({self.room_name!r}, {state})"

    @property
    def keycard_name(self) -> str:
        return keycard_name(self.room_name)

    @property
    def door_name(self) -> str:
        return f"{self.room_name} Door"

    def matches(self, item: Item) -> bool:
        return item.name == self.keycard_name

    def unlock(self) -> None:
        self.locked = False


class PowerGenerator:
    def __init__(self, name: str, batteries_required: int):
        self.name = name
        self.batteries_required = batteries_required
        self.batteries_inserted = 0

    def __repr__(self) -> str:
        return f"PowerGenerator({self.name!r}, {self.batteries_inserted}/{self.batteries_required})"

    @property
    def is_powered(self) -> bool:
        return self.batteries_inserted >= self.batteries_required

    @property
    def batteries_needed(self) -> int:
        return max(0, self.batteries_required - self.batteries_inserted)

    def insert_batteries(self, count: int) -> int:
        """Insert up to ``count`` batteries; returns how many were used."""
        used = min(max(count, 0), self.batteries_needed)
        self.batteries_inserted += used
        return used


class CCTVTerminal:
    def __init__(self, name: str, target_room: Optional[str] = None):
        self.name = name
        self.target_room = target_room
        self.used = False

    def activate(self) -> Optional[str]:
        self.used = True
        return self.target_room


class PuzzleKind(Enum):
    SEQUENCE = "sequence"
    PATTERN = "pattern"


class PuzzleReward(Enum):
    NONE = "none"
    KEYCARD = "keycard"
    BATTERY = "battery"
    MAP = "map"


class PuzzleTerminal:
    def __init__(self, name: str, solution: str, hint: str = "", reward: PuzzleReward = PuzzleReward.BATTERY):
        self.name = name
        self.solution = solution
        self.hint = hint
        self.reward = reward
        self.solved = False
        has_digit = any(ch.isdigit() for ch in solution)
        self.kind = PuzzleKind.PATTERN if "-" in solution and not has_digit else PuzzleKind.SEQUENCE

    def check_solution(self, answer: str) -> bool:
        answer = answer.strip()
        if self.kind is PuzzleKind.PATTERN:
            answer = answer.lower()
        return answer == self.solution

    def try_solve(self, answer: str) -> bool:
        if self.solved:
            return True
        if self.check_solution(answer):
            self.solved = True
        return self.solved


class Furniture:
    def __init__(self, name: str, description: str, icon: str = "#", contained_item: Optional[Item] = None):
        self.name = name
        self.description = description
        self.icon = icon
        self.contained_item = contained_item
        self.checked = False

    def check(self) -> Optional[Item]:
        """Examine the furniture; the hidden item is handed out only once."""
        self.checked = True
        item, self.contained_item = self.contained_item, None
        return item


class HazardType(Enum):
    VACUUM = "vacuum"
    COOLANT = "coolant"
    ELECTRICAL = "electrical"
    GAS = "gas"
    RADIATION = "radiation"


class HazardInfo(NamedTuple):
    name: str
    blocked_message: str
    fixed_message: str
    control_name: str = ""
    item_name: str = ""

    @property
    def requires_item(self) -> bool:
        return bool(self.item_name)


HAZARD_TYPES: Dict[HazardType, HazardInfo] = {
    HazardType.VACUUM: HazardInfo(
        "Vacuum",
        "This section is depressurized. You need a Patch Kit to seal the breach.",
        "You seal the breach with the Patch Kit. Atmosphere restored.",
        item_name="Patch Kit",
    ),
    HazardType.COOLANT: HazardInfo(
        "Coolant Leak",
        "Supercooled coolant sprays across the passage. Find the Coolant Shutoff.",
        "The coolant flow stops. Passage is clear.",
        control_name="Coolant Shutoff",
    ),
    HazardType.ELECTRICAL: HazardInfo(
        "Electrical Fault",
        "Sparks arc across the corridor. Find the Circuit Breaker.",
        "Power rerouted. The sparking stops.",
        control_name="Circuit Breaker",
    ),
    HazardType.GAS: HazardInfo(
        "Gas Leak",
        "Toxic gas fills the area. Find the Vent Control.",
        "Vents engage. The gas dissipates.",
        control_name="Vent Control",
    ),
    HazardType.RADIATION: HazardInfo(
        "Radiation Leak",
        "Dangerous radiation levels detected. Find the Containment Control.",
        "Containment field activated. Radiation contained.",
        control_name="Containment Control",
    ),
}


class Hazard:
    def __init__(self, hazard_type: HazardType):
        self.hazard_type = hazard_type
        self.fixed = False
        self.control: Optional["HazardControl"] = None

    def __repr__(self) -> str:
        return f"Hazard({self.hazard_type.value}, fixed={self.fixed})"

    @property
    def info(self) -> HazardInfo:
        return HAZARD_TYPES[self.hazard_type]

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def requires_item(self) -> bool:
        return self.info.requires_item

    @property
    def is_blocking(self) -> bool:
        return not self.fixed

    def fix(self) -> None:
        self.fixed = True


class HazardControl:
    def __init__(self, hazard: Hazard):
        self.hazard = hazard
        self.activated = False
        hazard.control = self

    @property
    def name(self) -> str:
        return self.hazard.info.control_name

    def activate(self) -> None:
        if self.activated:
            return
        self.activated = True
        self.hazard.fix()


class MaintenanceTerminal:
    def __init__(self, name: str, room_name: str):
        self.name = name
        self.room_name = room_name
        self.used = False

    def activate(self) -> None:
        self.used = True


__all__ = [
    "BATTERY",
    "CCTVTerminal",
    "Door",
    "Furniture",
    "HAZARD_TYPES",
    "Hazard",
    "HazardControl",
    "HazardInfo",
    "HazardType",
    "Item",
    "MaintenanceTerminal",
    "PowerGenerator",
    "PuzzleKind",
    "PuzzleReward",
    "PuzzleTerminal",
    "keycard_name",
]
