"""Mutable per-cell bound data for a Subsets grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .params import DIRECTIONS, Direction, GameParams, all_bits


@dataclass
class GridState:
    """Bounds, clues and given flags of every cell.

    ``known[i]`` holds the bits certainly present in cell ``i`` and
    ``mask[i]`` the bits still allowed.  A cell is assigned when both are
    equal.  A cell with a known bit outside its mask is contradictory; the
    state keeps it as-is so the Validator can report it.
    """

    w: int
    h: int
    n: int
    clues: List[int]
    given: List[bool]
    known: List[int]
    mask: List[int]
    completed: bool = False
    _neighbours: List[Tuple[Optional[int], ...]] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self._neighbours = [
            tuple(self._neighbour_of(i, d) for d in DIRECTIONS) for i in range(self.size)
        ]

    @classmethod
    def blank(cls, w: int, h: int, n: int) -> "GridState":
        """Create a grid with every cell unknown and no clues."""

        s = w * h
        return cls(
            w=w,
            h=h,
            n=n,
            clues=[0] * s,
            given=[False] * s,
            known=[0] * s,
            mask=[all_bits(n)] * s,
        )

    @classmethod
    def from_params(cls, params: GameParams) -> "GridState":
        return cls.blank(params.w, params.h, params.n)

    @property
    def size(self) -> int:
        return self.w * self.h

    @property
    def n2(self) -> int:
        return 1 << self.n

    @property
    def all_bits(self) -> int:
        return all_bits(self.n)

    def copy(self) -> "GridState":
        """Return an independent deep copy."""

        return GridState(
            w=self.w,
            h=self.h,
            n=self.n,
            clues=list(self.clues),
            given=list(self.given),
            known=list(self.known),
            mask=list(self.mask),
            completed=self.completed,
        )

    # Cell queries -------------------------------------------------------

    def is_assigned(self, i: int) -> bool:
        return self.known[i] == self.mask[i]

    def is_contradictory(self, i: int) -> bool:
        return bool(self.known[i] & ~self.mask[i])

    def value(self, i: int) -> Optional[int]:
        """Return the cell's value when assigned, otherwise ``None``."""

        if self.known[i] == self.mask[i]:
            return self.known[i]
        return None

    def coords(self, i: int) -> Tuple[int, int]:
        return i % self.w, i // self.w

    def _neighbour_of(self, i: int, direction: Direction) -> Optional[int]:
        x, y = self.coords(i)
        x2, y2 = x + direction.dx, y + direction.dy
        if x2 < 0 or y2 < 0 or x2 >= self.w or y2 >= self.h:
            return None
        return y2 * self.w + x2

    def neighbour(self, i: int, direction: Direction) -> Optional[int]:
        """Index of the adjacent cell in ``direction`` or ``None`` off the grid."""

        return self._neighbours[i][DIRECTIONS.index(direction)]

    def neighbours(self, i: int) -> Iterator[Tuple[Direction, int]]:
        """Yield ``(direction, index)`` for every in-grid neighbour of ``i``."""

        for direction, j in zip(DIRECTIONS, self._neighbours[i]):
            if j is not None:
                yield direction, j

    def clue_edges(self) -> Iterator[Tuple[int, int]]:
        """Yield every directed clue edge ``(superset, subset)``."""

        for i in range(self.size):
            for direction, j in self.neighbours(i):
                if self.clues[i] & direction.flag:
                    yield i, j

    def has_clue_between(self, i: int, j: int, direction: Direction) -> bool:
        """True when either cell declares a clue across the ``i``/``j`` edge."""

        return bool(self.clues[i] & direction.flag or self.clues[j] & direction.opposite)

    # Narrowing ----------------------------------------------------------

    def tighten(self, i: int, known: int = 0, mask: int = -1) -> int:
        """OR ``known`` into the forced bits and AND ``mask`` into the allowed bits.

        Returns the number of bounds that changed (0, 1 or 2).  Bounds are
        never loosened; a tightening that forces an excluded bit leaves the
        cell contradictory.
        """

        changes = 0
        new_known = self.known[i] | known
        if new_known != self.known[i]:
            self.known[i] = new_known
            changes += 1
        new_mask = self.mask[i] & mask
        if new_mask != self.mask[i]:
            self.mask[i] = new_mask
            changes += 1
        return changes

    def assign(self, i: int, value: int) -> None:
        self.known[i] = value
        self.mask[i] = value

    def reset_unknowns(self) -> None:
        """Forget every deduction on cells that are not given."""

        full = self.all_bits
        for i in range(self.size):
            if self.given[i]:
                continue
            self.known[i] = 0
            self.mask[i] = full


__all__ = ["GridState"]
