"""Global status check for a Subsets grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .state import GridState


class Status(str, Enum):
    """Tri-state outcome of validation and solving."""

    COMPLETE = "complete"
    UNFINISHED = "unfinished"
    INVALID = "invalid"


@dataclass(frozen=True)
class Validation:
    """Status plus the optional diagnostics the caller asked for.

    ``flags[i]`` holds one direction bit per violated edge leaving cell
    ``i``; ``counts[v]`` is the number of assigned cells holding value ``v``.
    Both are fresh lists owned by the caller.
    """

    status: Status
    flags: Optional[List[int]] = None
    counts: Optional[List[int]] = None


def validate(state: GridState, *, want_flags: bool = False, want_counts: bool = False) -> Validation:
    """Compute the grid status.

    Without diagnostics the scan stops at the first Unfinished or Invalid
    finding.  With diagnostics every cell and edge is checked so the
    returned flags and counts are complete.
    """

    diagnostics = want_flags or want_counts
    s = state.size
    status = Status.COMPLETE

    for i in range(s):
        if state.is_contradictory(i):
            if not diagnostics:
                return Validation(Status.INVALID)
            status = Status.INVALID

    for i in range(s):
        if not state.is_assigned(i) and status is Status.COMPLETE:
            if not diagnostics:
                return Validation(Status.UNFINISHED)
            status = Status.UNFINISHED

    flags = [0] * s if want_flags else None
    counts = [0] * state.n2

    for i in range(s):
        if not state.is_assigned(i):
            continue
        value = state.known[i]
        counts[value] += 1
        if counts[value] > 1:
            status = Status.INVALID
            if not diagnostics:
                return Validation(status)

    for i in range(s):
        if not state.is_assigned(i):
            continue
        for direction, i2 in state.neighbours(i):
            if not state.is_assigned(i2):
                continue

            clued = bool(state.clues[i] & direction.flag)
            # Unclued pairs are checked once, from the upper/left cell.
            if not clued and (direction.dx < 0 or direction.dy < 0):
                continue

            overlap = state.known[i] & state.known[i2]
            if clued:
                ok = overlap == state.known[i2]
            elif not state.clues[i2] & direction.opposite:
                ok = overlap != state.known[i2] and overlap != state.known[i]
            else:
                # Reverse clue: validated from the clue-bearing side.
                continue

            if not ok:
                status = Status.INVALID
                if not diagnostics:
                    return Validation(status)
                if flags is not None:
                    flags[i] |= direction.flag

    return Validation(status, flags=flags, counts=counts if want_counts else None)


__all__ = ["Status", "Validation", "validate"]
