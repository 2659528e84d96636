"""
project: Dark Station
module: level.py
License: MIT

Level pipeline: carve a station deck, run the placement planners and keep
generation metrics. All randomness flows from one ``random.Random`` seeded
from ``Level.seed``, so a (seed, level) pair always reproduces the same deck.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config import StationConfig
from .generation import Partitioner, Room, init_metrics
from .logging_utils import get_logger
from .placement.setup import setup_level
from .world import Cell, OccupantKind

log = get_logger("station.level")

_GLYPHS = {
    OccupantKind.DOOR: "D",
    OccupantKind.GENERATOR: "G",
    OccupantKind.TERMINAL: "T",
    OccupantKind.PUZZLE: "P",
    OccupantKind.FURNITURE: "&",
    OccupantKind.HAZARD: "~",
    OccupantKind.HAZARD_CONTROL: "C",
    OccupantKind.MAINTENANCE_TERMINAL: "M",
}


@dataclass
class Level:
    number: int = 1
    seed: Optional[int] = None
    config: Optional[StationConfig] = None

    def __post_init__(self):
        if self.number < 1:
            raise ValueError(f"level must be >= 1, got {self.number}")
        if self.config is None:
            self.config = StationConfig.from_env(seed=self.seed)
        if self.seed is None:
            self.seed = self.config.seed
        # 0 is a valid deterministic seed; None means pick one
        if self.seed is None:
            self.seed = random.randint(1, 1_000_000)
        self.rng = random.Random(self.seed)
        self.metrics: Dict[str, Any] = init_metrics() if self.config.enable_metrics else {}
        self.rooms: List[Room] = []
        self._run_pipeline()

    def _run_pipeline(self):
        """Generate the layout, place entities, re-validate.

        With metrics enabled each phase is timed into ``metrics['phase_ms']``.
        """
        if self.config.enable_metrics:
            started = time.perf_counter()
            phase_times = self.metrics['phase_ms']

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        outputs = _phase('generate', Partitioner(self.number, self.rng).run)
        self.grid = outputs.grid
        self.rooms = outputs.rooms
        self.setup = setup_level(
            self.grid, self.number, self.rng, max_doors=self.config.max_doors, phase=_phase
        )
        _phase('validate', self.grid.validate)

        if self.config.enable_metrics:
            self.metrics['rooms'] = len(self.rooms)
            self.metrics['corridor_cells'] = outputs.corridor_cells
            self.metrics['walkable_cells'] = len(self.grid.walkable_cells())
            self.metrics.update(self.setup.counts())
            self.metrics['runtime_ms'] = round((time.perf_counter() - started) * 1000, 2)
        log.info(event="level_generated", level=self.number, seed=self.seed,
                 rows=self.grid.rows, cols=self.grid.cols, rooms=len(self.rooms))

    # ------------------------------------------------------------------
    @property
    def start(self) -> Cell:
        return self.grid.start

    @property
    def exit(self) -> Cell:
        return self.grid.exit

    def _glyph(self, cell: Cell) -> str:
        if not cell.walkable:
            return "#"
        if cell is self.grid.start:
            return "S"
        if cell.exit:
            return "X" if cell.locked else "E"
        if cell.occupied:
            glyph = _GLYPHS[cell.occupant.kind]
            if cell.occupant.kind is OccupantKind.DOOR and not cell.occupant.entity.locked:
                glyph = "d"
            return glyph
        if cell.items:
            return "*"
        return "," if cell.is_corridor else "."

    def to_ascii(self) -> str:
        """Debug map, one character per cell."""
        rows = []
        for r in range(self.grid.rows):
            rows.append("".join(self._glyph(self.grid.cell(r, c)) for c in range(self.grid.cols)))
        return "\n".join(rows)


def build_level(level: int, seed: Optional[int] = None) -> Level:
    return Level(level, seed)


if __name__ == "__main__":  # simple manual smoke test
    lv = Level(3, seed=42)
    print(lv.to_ascii())
    print(lv.metrics)
