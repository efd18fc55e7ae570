"""Narrowing rules applied by the solver loop.

Every rule either clears candidates from the cube or tightens the cells'
``known``/``mask`` bounds, and returns how many changes it made.  Rules
are registered by name so the loop can be assembled from a pipeline of
names and individual rules can be swapped without touching the loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from ..state import GridState
from .cube import DomainCube

_LOGGER = logging.getLogger(__name__)


@dataclass
class SolveContext:
    """Working storage shared by the rules during one solve.

    ``counts`` is refreshed from the Validator at the start of every step
    and counts assigned cells per value.
    """

    state: GridState
    cube: DomainCube
    counts: List[int]


RuleHandler = Callable[[SolveContext], int]


@dataclass(frozen=True)
class Rule:
    name: str
    handler: RuleHandler

    def __call__(self, ctx: SolveContext) -> int:
        return self.handler(ctx)


_RULE_REGISTRY: Dict[str, Rule] = {}


def register_rule(name: str, handler: RuleHandler) -> Rule:
    """Register ``handler`` under ``name`` and return the wrapped rule.

    Registering an existing name replaces the previous handler, which is
    how an alternative strategy is plugged into an existing pipeline.
    """

    if not name:
        raise ValueError("Rule name must be a non-empty string")
    rule = Rule(name=name, handler=handler)
    _RULE_REGISTRY[name] = rule
    return rule


def get_rule(name: str) -> Rule:
    try:
        return _RULE_REGISTRY[name]
    except KeyError as exc:
        raise KeyError(f"Unknown solver rule: {name!r}") from exc


def registered_rules() -> Tuple[str, ...]:
    return tuple(_RULE_REGISTRY)


# Rules ----------------------------------------------------------------


def single_count_elimination(ctx: SolveContext) -> int:
    """Remove values already placed once from every unassigned cell."""

    state, cube = ctx.state, ctx.cube
    ret = 0
    for value, used in enumerate(ctx.counts):
        if used != 1:
            continue
        for j in range(state.size):
            if state.is_assigned(j):
                continue
            if cube.remove(j, value):
                _LOGGER.debug("Removing possibility %d from space %d due to being located elsewhere", value, j)
                ret += 1
    return ret


def arrow_bound_propagation(ctx: SolveContext) -> int:
    """Push known bits up and allowed bits down every clue edge."""

    state = ctx.state
    ret = 0
    for i1, i2 in state.clue_edges():
        if state.tighten(i1, known=state.known[i2]):
            _LOGGER.debug("Arrow pointing to %d confirms bits at %d", i2, i1)
            ret += 1
        if state.tighten(i2, mask=state.mask[i1]):
            _LOGGER.debug("Arrow pointing from %d removes bits at %d", i1, i2)
            ret += 1
    return ret


def bits_from_cube(ctx: SolveContext) -> int:
    """Tighten bounds to the AND/OR of the remaining candidates.

    A cell without candidates ends up with every bit known and none
    allowed, which the Validator reports as a contradiction.
    """

    state, cube = ctx.state, ctx.cube
    full = state.all_bits
    ret = 0
    for i in range(state.size):
        new_known = full
        new_mask = 0
        for value in cube.candidates(i):
            new_known &= value
            new_mask |= value

        prev_known, prev_mask = state.known[i], state.mask[i]
        state.tighten(i, known=new_known, mask=new_mask)
        if state.known[i] != prev_known:
            _LOGGER.debug("Possibilities at %d confirms bits", i)
            ret += 1
        if state.mask[i] != prev_mask:
            _LOGGER.debug("Possibilities at %d removes bits", i)
            ret += 1
    return ret


def single_position(ctx: SolveContext) -> int:
    """Place an unused value whose only remaining home is a single cell."""

    state, cube = ctx.state, ctx.cube
    ret = 0
    for value, used in enumerate(ctx.counts):
        if used != 0:
            continue
        homes = [
            i for i in range(state.size) if not state.is_assigned(i) and cube.has(i, value)
        ]
        if len(homes) != 1:
            continue
        cell = homes[0]
        _LOGGER.debug("Space %d must be %d", cell, value)
        state.assign(cell, value)
        ret += 1
    return ret


def _prune_supersets(ctx: SolveContext, i1: int, i2: int) -> int:
    cube = ctx.cube
    ret = 0
    subs = list(cube.candidates(i2))
    for sup in list(cube.candidates(i1)):
        if any(sub < sup and (sup & sub) == sub for sub in subs):
            continue
        _LOGGER.debug(
            "Removing possibility %d from space %d due to not fitting subset at %d", sup, i1, i2
        )
        cube.remove(i1, sup)
        ret += 1
    return ret


def _prune_subsets(ctx: SolveContext, i1: int, i2: int) -> int:
    cube = ctx.cube
    ret = 0
    sups = list(cube.candidates(i1))
    for sub in list(cube.candidates(i2)):
        if any(sup > sub and (sup & sub) == sub for sup in sups):
            continue
        _LOGGER.debug(
            "Removing possibility %d from space %d due to not fitting superset at %d", sub, i2, i1
        )
        cube.remove(i2, sub)
        ret += 1
    return ret


def arrow_arc_superset_only(ctx: SolveContext) -> int:
    """Keep a superset-side candidate only if some proper subset remains below it."""

    ret = 0
    for i1, i2 in ctx.state.clue_edges():
        ret += _prune_supersets(ctx, i1, i2)
    return ret


def arrow_arc_bidirectional(ctx: SolveContext) -> int:
    """Arc consistency in both directions of every clue edge."""

    ret = 0
    for i1, i2 in ctx.state.clue_edges():
        ret += _prune_supersets(ctx, i1, i2)
        ret += _prune_subsets(ctx, i1, i2)
    return ret


def disjoint_pruning(ctx: SolveContext) -> int:
    """Enforce incomparability across edges that carry no clue."""

    state, cube = ctx.state, ctx.cube
    top = state.n2 - 1
    ret = 0
    for i1 in range(state.size):
        for direction, i2 in state.neighbours(i1):
            if state.has_clue_between(i1, i2, direction):
                continue

            if not state.is_assigned(i1):
                # The empty and the full set are comparable to everything.
                removed = cube.remove(i1, 0)
                removed = cube.remove(i1, top) or removed
                if removed:
                    _LOGGER.debug(
                        "%d is disjoint from %d, removing possibilities 0 and %d", i1, i2, top
                    )
                    ret += 1
            elif not state.is_assigned(i2):
                k = state.known[i1]
                for opt in list(cube.candidates(i2)):
                    if (k & opt) != opt and (k & opt) != k:
                        continue
                    _LOGGER.debug(
                        "Removing possibility %d from %d because it overlaps the set at %d", opt, i2, i1
                    )
                    cube.remove(i2, opt)
                    ret += 1
    return ret


register_rule("count.single", single_count_elimination)
register_rule("arrows.bounds", arrow_bound_propagation)
register_rule("cube.bits", bits_from_cube)
register_rule("position.single", single_position)
register_rule("arcs.superset_only", arrow_arc_superset_only)
register_rule("arcs.bidirectional", arrow_arc_bidirectional)
register_rule("pairs.disjoint", disjoint_pruning)

ARC_STRATEGIES = ("arcs.superset_only", "arcs.bidirectional")

DEFAULT_PIPELINE: Tuple[str, ...] = (
    "count.single",
    "arrows.bounds",
    "cube.bits",
    "position.single",
    "arcs.superset_only",
    "pairs.disjoint",
)


def build_pipeline(
    *, bidirectional_arcs: bool = False, names: Sequence[str] | None = None
) -> Tuple[Rule, ...]:
    """Resolve rule names into the ordered pipeline used by the solver loop.

    ``bidirectional_arcs`` substitutes the arc-consistency strategy that
    also prunes the subset side of every clue edge.
    """

    selected = list(names if names is not None else DEFAULT_PIPELINE)
    if bidirectional_arcs:
        selected = [
            "arcs.bidirectional" if name in ARC_STRATEGIES else name for name in selected
        ]
    return tuple(get_rule(name) for name in selected)


__all__ = [
    "ARC_STRATEGIES",
    "DEFAULT_PIPELINE",
    "Rule",
    "RuleHandler",
    "SolveContext",
    "arrow_arc_bidirectional",
    "arrow_arc_superset_only",
    "arrow_bound_propagation",
    "bits_from_cube",
    "build_pipeline",
    "disjoint_pruning",
    "get_rule",
    "register_rule",
    "registered_rules",
    "single_count_elimination",
    "single_position",
]
