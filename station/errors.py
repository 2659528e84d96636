"""Exception types raised by station generation and placement.

Placement starvation (no candidate cell for a door, key or entity) is not an
error: routines skip the slot and record it in metrics instead.
"""
from __future__ import annotations

from typing import Optional, Tuple


class GenerationError(RuntimeError):
    """A generated grid violates a structural invariant.

    Signals a generator bug rather than a recoverable condition, so nothing
    inside the package catches it.
    """

    def __init__(self, message: str, code: str, cell: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.cell = cell


class PlacementError(ValueError):
    def __init__(self, message: str, cell: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.message = message
        self.cell = cell


__all__ = ["GenerationError", "PlacementError"]
