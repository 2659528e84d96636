"""Gameplay predicates over a generated level.

The session owns the player position and inventory. ``can_enter`` is a pure
check; ``move`` applies the consequences (unlocking, consuming items, FOV).
"""
from __future__ import annotations

from typing import List, Optional

from .config import FOV_RADIUS
from .logging_utils import get_logger
from .world import (
    BATTERY,
    Cell,
    Direction,
    Grid,
    Item,
    OccupantKind,
    PuzzleReward,
    keycard_name,
    reveal_fov,
)

log = get_logger("station.session")

ALWAYS_BLOCKING = {
    OccupantKind.GENERATOR,
    OccupantKind.TERMINAL,
    OccupantKind.PUZZLE,
    OccupantKind.FURNITURE,
    OccupantKind.HAZARD_CONTROL,
    OccupantKind.MAINTENANCE_TERMINAL,
}


class Session:
    def __init__(self, grid: Grid, fov_radius: int = FOV_RADIUS):
        self.grid = grid
        self.fov_radius = fov_radius
        self.position: Cell = grid.start
        self.inventory: List[Item] = []
        self.messages: List[str] = []
        self.moves = 0
        self.position.visited = True
        reveal_fov(grid, self.position, fov_radius)
        self.pickup()

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------
    def has_item(self, name: str) -> bool:
        return any(i.matches(name) for i in self.inventory)

    def count(self, name: str) -> int:
        return sum(1 for i in self.inventory if i.name == name)

    def _consume(self, name: str, n: int = 1) -> int:
        taken = 0
        for item in list(self.inventory):
            if taken >= n:
                break
            if item.name == name:
                self.inventory.remove(item)
                taken += 1
        return taken

    def pickup(self) -> List[Item]:
        """Move everything on the current cell's floor into the inventory."""
        items = sorted(self.position.items, key=lambda i: i.name)
        self.position.items.clear()
        self.inventory.extend(items)
        for item in items:
            self.messages.append(f"Picked up {item.name}")
        return items

    # ------------------------------------------------------------------
    # Level state
    # ------------------------------------------------------------------
    def generators(self):
        return [c.occupant.entity for c in self.grid.iter_cells() if c.occupant.kind is OccupantKind.GENERATOR]

    def all_generators_powered(self) -> bool:
        return all(g.is_powered for g in self.generators())

    def hazards_cleared(self) -> bool:
        return not any(
            c.occupant.kind is OccupantKind.HAZARD and c.occupant.entity.is_blocking
            for c in self.grid.iter_cells()
        )

    @property
    def at_exit(self) -> bool:
        return self.position.exit

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------
    def can_enter(self, cell: Optional[Cell]) -> bool:
        if cell is None or not cell.walkable:
            return False
        kind, entity = cell.occupant
        if kind in ALWAYS_BLOCKING:
            return False
        if kind is OccupantKind.DOOR and entity.locked and not self.has_item(entity.keycard_name):
            return False
        if kind is OccupantKind.HAZARD and entity.is_blocking:
            if not (entity.requires_item and self.has_item(entity.info.item_name)):
                return False
        if cell.is_exit_locked() and not (self.all_generators_powered() and self.hazards_cleared()):
            return False
        return all(self.has_item(name) for name in cell.required_items)

    def _unlock_room_doors(self, room_name: str) -> None:
        for c in self.grid.iter_cells():
            door = c.entity(OccupantKind.DOOR)
            if door is not None and door.room_name == room_name and door.locked:
                door.unlock()
                c.locked = False

    def _open_way(self, cell: Cell) -> None:
        kind, entity = cell.occupant
        if kind is OccupantKind.DOOR and entity.locked:
            self._unlock_room_doors(entity.room_name)
            self._consume(entity.keycard_name)
            self.messages.append(f"Unlocked {entity.door_name}")
        elif kind is OccupantKind.HAZARD and entity.is_blocking:
            self._consume(entity.info.item_name)
            entity.fix()
            self.messages.append(entity.info.fixed_message)
        if cell.is_exit_locked():
            cell.locked = False
            self.messages.append("The exit unlocks.")

    def move(self, direction: Direction) -> bool:
        coord = self.position.links.get(direction)
        target = self.grid.at(coord) if coord is not None else None
        if not self.can_enter(target):
            log.debug(event="move_blocked", at=self.position.coord, direction=direction.name)
            return False
        self._open_way(target)
        self.position = target
        self.moves += 1
        target.visited = True
        reveal_fov(self.grid, target, self.fov_radius)
        self.pickup()
        return True

    # ------------------------------------------------------------------
    # Interactions with adjacent entities
    # ------------------------------------------------------------------
    def adjacent(self, direction: Direction) -> Optional[Cell]:
        return self.grid.relative(self.position, direction)

    def interact(self, direction: Direction) -> Optional[str]:
        """Use whatever stands next to the player; returns a message or None."""
        cell = self.adjacent(direction)
        if cell is None or not cell.occupied:
            return None
        kind, entity = cell.occupant
        if kind is OccupantKind.GENERATOR:
            used = entity.insert_batteries(self.count(BATTERY))
            self._consume(BATTERY, used)
            msg = f"Inserted {used} batteries into {entity.name}"
        elif kind is OccupantKind.FURNITURE:
            item = entity.check()
            if item is not None:
                self.inventory.append(item)
                msg = f"Found {item.name} in the {entity.name}"
            else:
                msg = entity.description
        elif kind is OccupantKind.HAZARD_CONTROL:
            entity.activate()
            msg = entity.hazard.info.fixed_message
        elif kind is OccupantKind.TERMINAL:
            target = entity.activate()
            for c in self.grid.cells_named(target or ""):
                c.discovered = True
            msg = f"{entity.name} shows {target}"
        elif kind is OccupantKind.MAINTENANCE_TERMINAL:
            entity.activate()
            msg = entity.name
        elif kind is OccupantKind.PUZZLE:
            msg = entity.hint
        else:
            return None
        self.messages.append(msg)
        return msg

    def solve_puzzle(self, direction: Direction, answer: str) -> bool:
        cell = self.adjacent(direction)
        puzzle = cell.entity(OccupantKind.PUZZLE) if cell is not None else None
        if puzzle is None or puzzle.solved:
            return False
        if not puzzle.try_solve(answer):
            return False
        self._grant(puzzle.reward)
        return True

    def _grant(self, reward: PuzzleReward) -> None:
        if reward is PuzzleReward.MAP:
            for c in self.grid.walkable_cells():
                c.discovered = True
            self.messages.append("Downloaded the deck map")
            return
        if reward is PuzzleReward.KEYCARD:
            for c in self.grid.iter_cells():
                door = c.entity(OccupantKind.DOOR)
                if door is not None and door.locked and not self.has_item(door.keycard_name):
                    self.inventory.append(Item(keycard_name(door.room_name)))
                    self.messages.append(f"Received {door.keycard_name}")
                    return
        self.inventory.append(Item(BATTERY))
        self.messages.append("Received a Battery")
