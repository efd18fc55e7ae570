"""Per-cell candidate table over every possible subset value."""

from __future__ import annotations

from typing import Iterator, List

from ..state import GridState


class DomainCube:
    """Candidate bit-set per cell.

    Bit ``v`` of ``cells[i]`` is set while cell ``i`` may still resolve to
    value ``v``.  Entries are only ever cleared.
    """

    __slots__ = ("n2", "cells")

    def __init__(self, size: int, n2: int) -> None:
        self.n2 = n2
        self.cells: List[int] = [(1 << n2) - 1] * size

    @classmethod
    def for_state(cls, state: GridState) -> "DomainCube":
        return cls(state.size, state.n2)

    def has(self, i: int, value: int) -> bool:
        return bool(self.cells[i] >> value & 1)

    def remove(self, i: int, value: int) -> bool:
        """Clear candidate ``value`` at cell ``i``; True when it was present."""

        bit = 1 << value
        if not self.cells[i] & bit:
            return False
        self.cells[i] &= ~bit
        return True

    def candidates(self, i: int) -> Iterator[int]:
        """Yield the remaining candidate values of cell ``i`` in ascending order."""

        bits = self.cells[i]
        value = 0
        while bits:
            if bits & 1:
                yield value
            bits >>= 1
            value += 1

    def count(self, i: int) -> int:
        return bin(self.cells[i]).count("1")

    def sync(self, state: GridState) -> int:
        """Drop candidates that disagree with the cells' bounds.

        A value survives only when it fits inside ``mask[i]`` and contains
        every bit of ``known[i]``.  Returns the number of removed entries.
        """

        removed = 0
        for i in range(state.size):
            known, mask = state.known[i], state.mask[i]
            for value in list(self.candidates(i)):
                if (mask & value) != value or (known & value) != known:
                    self.cells[i] &= ~(1 << value)
                    removed += 1
        return removed

    def snapshot(self) -> List[int]:
        return list(self.cells)


__all__ = ["DomainCube"]
