"""Puzzle generation: random full grid, every true clue, greedy hiding.

The solver is the oracle: a given cell is hidden only when the grid with
that cell (and every cell hidden before it) open still solves to Complete
by pure deduction.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from contracts.errors import ParamsError

from .descriptor import encode_desc
from .params import GameParams, encode_params
from .solver import Rule, build_pipeline, solve
from .state import GridState
from .validator import Status

_LOGGER = logging.getLogger(__name__)

Seed = int | str | None


@dataclass(frozen=True)
class GeneratedPuzzle:
    """Outcome of one generation run."""

    params: GameParams
    descriptor: str
    values: Tuple[int, ...]
    hidden: Tuple[int, ...]
    state: GridState

    @property
    def game_id(self) -> str:
        return f"{encode_params(self.params)}:{self.descriptor}"


def fill_grid(params: GameParams, rng: random.Random) -> GridState:
    """Place every possible value exactly once, in random order, as givens."""

    if params.size != params.n2:
        raise ParamsError(
            f"A {params.w}x{params.h} grid cannot hold all {params.n2} subsets of {params.n} elements"
        )
    state = GridState.from_params(params)
    values = list(range(params.n2))
    rng.shuffle(values)
    for i, value in enumerate(values):
        state.assign(i, value)
        state.given[i] = True
    return state


def derive_clues(state: GridState) -> None:
    """Declare every true superset relation between adjacent cells."""

    for i in range(state.size):
        for direction, j in state.neighbours(i):
            if (state.known[i] & state.known[j]) == state.known[j]:
                state.clues[i] |= direction.flag


def hide_givens(
    state: GridState,
    order: Sequence[int],
    *,
    rules: Sequence[Rule] | None = None,
) -> List[int]:
    """Open cells in ``order`` while the puzzle stays deducible.

    Each attempt solves a disposable copy; a cell whose removal leaves the
    puzzle short of Complete is made given again.  Returns the hidden
    cells in the order they were opened.
    """

    pipeline = tuple(rules) if rules is not None else build_pipeline()
    hidden: List[int] = []
    for i in order:
        state.given[i] = False
        outcome = solve(state, rules=pipeline)
        if outcome.status is Status.COMPLETE:
            hidden.append(i)
            _LOGGER.debug("Hiding cell %d (%d hidden)", i, len(hidden))
        else:
            state.given[i] = True
            _LOGGER.debug("Cell %d must stay given (%s)", i, outcome.status.value)
    return hidden


def new_game_desc(
    params: GameParams,
    seed: Seed = None,
    *,
    rng: Optional[random.Random] = None,
    rules: Sequence[Rule] | None = None,
) -> GeneratedPuzzle:
    """Generate a uniquely deducible puzzle.

    ``rng`` takes precedence over ``seed``; the same seed always yields the
    same puzzle because the value permutation and the hiding order are
    drawn from one generator in a fixed sequence.
    """

    rng = rng or random.Random(seed)
    state = fill_grid(params, rng)
    derive_clues(state)
    values = tuple(state.known)

    order = list(range(state.size))
    rng.shuffle(order)
    hidden = hide_givens(state, order, rules=rules)

    descriptor = encode_desc(state)
    _LOGGER.info(
        "Generated %s puzzle with %d of %d cells hidden",
        encode_params(params),
        len(hidden),
        state.size,
    )
    return GeneratedPuzzle(
        params=params,
        descriptor=descriptor,
        values=values,
        hidden=tuple(hidden),
        state=state,
    )


__all__ = [
    "GeneratedPuzzle",
    "derive_clues",
    "fill_grid",
    "hide_givens",
    "new_game_desc",
]
