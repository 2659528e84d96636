"""Room furniture, plus hiding loose keycards and patch kits inside it."""
from __future__ import annotations

from typing import Dict, List, Tuple

from ..generation.names import room_type
from ..world import Cell, Furniture, OccupantKind
from .context import LevelSetup
from .search import first_safe, interior_candidates, shuffled

LARGE_ROOM_CELLS = 6
HIDE_CHANCE = 0.5

FURNITURE: Dict[str, List[Tuple[str, str]]] = {
    "Bridge": [
        ("Captain's Chair", "A worn command chair faces the main viewscreen."),
        ("Navigation Console", "Star charts flicker on a dusty display."),
    ],
    "Command Center": [
        ("Tactical Display", "A holographic map table, now dark."),
        ("Status Board", "Crew assignments, most names crossed out."),
    ],
    "Communications": [
        ("Radio Equipment", "Long-range transmitters, all frequencies silent."),
        ("Signal Decoder", "Encrypted message logs scroll endlessly."),
    ],
    "Security": [
        ("Weapons Locker", "Reinforced cabinet, lock has been forced."),
        ("Monitoring Station", "Camera feeds cycle through empty corridors."),
    ],
    "Engineering": [
        ("Tool Rack", "Wrenches and plasma cutters, some missing."),
        ("Schematic Display", "Station blueprints, several sections highlighted red."),
    ],
    "Reactor Core": [
        ("Control Rods", "Emergency dampeners, partially deployed."),
        ("Radiation Monitor", "Geiger counter clicks occasionally."),
    ],
    "Server Room": [
        ("Server Rack", "Blinking lights indicate partial functionality."),
        ("Cooling Unit", "Industrial fans spin slowly."),
    ],
    "Maintenance Bay": [
        ("Workbench", "Scattered parts and half-finished repairs."),
        ("Parts Bin", "Salvaged components, poorly organized."),
    ],
    "Life Support": [
        ("Air Recycler", "Filters wheeze with each cycle."),
        ("Oxygen Tanks", "Emergency reserves, gauges show half-full."),
    ],
    "Cargo Bay": [
        ("Shipping Container", "Dented metal crate, manifest unreadable."),
        ("Loading Dolly", "Wheeled cart, one wheel broken."),
    ],
    "Storage": [
        ("Supply Shelf", "Canned goods and emergency rations."),
        ("Crate Stack", "Boxes piled haphazardly."),
    ],
    "Hangar": [
        ("Fuel Pump", "Emergency shutoff engaged."),
        ("Tool Cart", "Maintenance equipment for spacecraft."),
    ],
    "Armory": [
        ("Weapon Rack", "Empty slots where rifles once hung."),
        ("Ammo Crate", "Heavy box, lid pried open."),
    ],
    "Med Bay": [
        ("Medical Bed", "Sterile sheets, hastily stripped."),
        ("Medicine Cabinet", "Pharmaceutical supplies, mostly depleted."),
    ],
    "Lab": [
        ("Microscope Station", "Slides still loaded, samples dried."),
        ("Specimen Jars", "Preserved samples float in murky liquid."),
    ],
    "Hydroponics": [
        ("Growth Bed", "Wilted plants in nutrient solution."),
        ("Seed Storage", "Labeled drawers of genetic samples."),
    ],
    "Observatory": [
        ("Telescope Mount", "Lens pointed at infinite darkness."),
        ("Star Chart", "Constellations marked with navigation routes."),
    ],
    "Crew Quarters": [
        ("Bunk Bed", "Personal effects scattered on unmade sheets."),
        ("Footlocker", "Lock broken, contents rifled through."),
    ],
    "Mess Hall": [
        ("Dining Table", "Trays of food, long since spoiled."),
        ("Coffee Machine", "The pot is cold and empty."),
    ],
    "Airlock": [
        ("EVA Suit Rack", "Emergency spacesuits, some missing."),
        ("Decompression Controls", "Warning lights flash intermittently."),
    ],
}


def templates_for(room_name: str) -> List[Tuple[str, str]]:
    base = room_type(room_name)
    return list(FURNITURE.get(base, ())) if base else []


def place_furniture(setup: LevelSetup) -> int:
    """One piece per room, two in rooms larger than six cells."""
    placed = 0
    for room in setup.grid.room_names():
        templates = templates_for(room)
        if not templates:
            continue
        setup.rng.shuffle(templates)
        wanted = 2 if len(setup.grid.cells_named(room)) > LARGE_ROOM_CELLS else 1
        candidates = shuffled(setup, interior_candidates(setup, room))
        for name, description in templates[:wanted]:
            cell = first_safe(setup, [c for c in candidates if not c.occupied])
            if cell is None:
                setup.skip("furniture", room=room)
                break
            cell.place(OccupantKind.FURNITURE, Furniture(name, description))
            setup.avoid.add(cell)
            setup.furniture.append(cell)
            placed += 1
    return placed


def _hideable(name: str) -> bool:
    return name.endswith("Keycard") or name == "Patch Kit"


def _reachable_side(setup: LevelSetup, cell: Cell) -> bool:
    return any(not n.occupied for n in setup.grid.neighbors(cell))


def hide_items_in_furniture(setup: LevelSetup) -> int:
    """Move some floor keycards/patch kits into furniture of the same room.

    Runs after every other placement so the furniture keeps a free side to be
    searched from.
    """
    by_room: Dict[str, List[Cell]] = {}
    for cell in setup.furniture:
        if _reachable_side(setup, cell):
            by_room.setdefault(cell.name, []).append(cell)
    hidden = 0
    for cell in setup.grid.iter_cells():
        if not cell.items or cell.name not in by_room:
            continue
        for item in sorted(cell.items, key=lambda i: i.name):
            if not _hideable(item.name) or setup.rng.random() >= HIDE_CHANCE:
                continue
            for holder in by_room[cell.name]:
                furniture = holder.occupant.entity
                if furniture.contained_item is None:
                    cell.items.discard(item)
                    furniture.contained_item = item
                    if item.name in setup.keys:
                        setup.keys[item.name] = holder
                    setup.hint(f"The {item.name} is hidden in the {furniture.name} in {cell.name}")
                    hidden += 1
                    break
    return hidden
