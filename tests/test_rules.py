from __future__ import annotations

import pytest

from puzzles.subsets.params import F_ADJ_RIGHT
from puzzles.subsets.solver.cube import DomainCube
from puzzles.subsets.solver.rules import (
    ARC_STRATEGIES,
    DEFAULT_PIPELINE,
    SolveContext,
    arrow_arc_bidirectional,
    arrow_arc_superset_only,
    arrow_bound_propagation,
    bits_from_cube,
    build_pipeline,
    disjoint_pruning,
    get_rule,
    register_rule,
    registered_rules,
    single_count_elimination,
    single_position,
)
from puzzles.subsets.state import GridState
from puzzles.subsets.validator import validate


def _pair(left=None, right=None, clue=False, n=2):
    state = GridState.blank(2, 1, n)
    for i, value in enumerate((left, right)):
        if value is not None:
            state.assign(i, value)
    if clue:
        state.clues[0] = F_ADJ_RIGHT
    return state


def _ctx(state):
    cube = DomainCube.for_state(state)
    cube.sync(state)
    return SolveContext(state=state, cube=cube, counts=list(validate(state, want_counts=True).counts))


def test_single_count_elimination_skips_assigned_cells() -> None:
    ctx = _ctx(_pair(right=1))
    assert single_count_elimination(ctx) == 1
    assert list(ctx.cube.candidates(0)) == [0, 2, 3]
    assert list(ctx.cube.candidates(1)) == [1]
    assert single_count_elimination(ctx) == 0


def test_arrow_bounds_push_known_bits_up_the_clue() -> None:
    ctx = _ctx(_pair(right=1, clue=True))
    assert arrow_bound_propagation(ctx) == 1
    assert ctx.state.known[0] == 1
    assert ctx.state.mask[1] == 1
    assert arrow_bound_propagation(ctx) == 0


def test_arrow_bounds_push_allowed_bits_down_the_clue() -> None:
    state = _pair(clue=True)
    state.mask[0] = 2
    ctx = _ctx(state)
    assert arrow_bound_propagation(ctx) == 1
    assert ctx.state.mask[1] == 2


def test_bits_from_cube_uses_and_or_of_candidates() -> None:
    ctx = _ctx(_pair())
    ctx.cube.remove(0, 0)
    ctx.cube.remove(0, 2)
    assert bits_from_cube(ctx) == 1
    assert (ctx.state.known[0], ctx.state.mask[0]) == (1, 3)
    assert (ctx.state.known[1], ctx.state.mask[1]) == (0, 3)


def test_bits_from_cube_turns_an_empty_cell_into_a_contradiction() -> None:
    ctx = _ctx(_pair())
    ctx.cube.cells[0] = 0
    assert bits_from_cube(ctx) == 2
    assert ctx.state.is_contradictory(0)


def test_single_position_places_a_value_with_one_home() -> None:
    ctx = _ctx(_pair(n=1))
    ctx.cube.remove(1, 1)
    assert single_position(ctx) == 1
    assert ctx.state.value(0) == 1
    assert ctx.state.value(1) is None


def test_superset_arc_keeps_values_with_a_proper_subset_below() -> None:
    ctx = _ctx(_pair(right=1, clue=True))
    assert arrow_arc_superset_only(ctx) == 3
    assert list(ctx.cube.candidates(0)) == [3]
    assert list(ctx.cube.candidates(1)) == [1]


def test_bidirectional_arc_also_prunes_the_subset_side() -> None:
    state = _pair(left=2, clue=True)
    assert arrow_arc_superset_only(_ctx(state.copy())) == 0

    ctx = _ctx(state)
    assert arrow_arc_bidirectional(ctx) == 3
    assert list(ctx.cube.candidates(1)) == [0]


def test_disjoint_pruning_drops_extremes_from_open_cells() -> None:
    ctx = _ctx(_pair())
    assert disjoint_pruning(ctx) == 2
    assert list(ctx.cube.candidates(0)) == [1, 2]
    assert list(ctx.cube.candidates(1)) == [1, 2]


def test_disjoint_pruning_removes_comparable_values_next_to_an_assigned_cell() -> None:
    ctx = _ctx(_pair(left=1))
    assert disjoint_pruning(ctx) == 3
    assert list(ctx.cube.candidates(1)) == [2]


def test_disjoint_pruning_ignores_clued_edges() -> None:
    assert disjoint_pruning(_ctx(_pair(clue=True))) == 0


def test_registry_exposes_every_rule() -> None:
    for name in DEFAULT_PIPELINE + ARC_STRATEGIES:
        assert name in registered_rules()
    assert [rule.name for rule in build_pipeline()] == list(DEFAULT_PIPELINE)


def test_bidirectional_pipeline_swaps_the_arc_strategy() -> None:
    names = [rule.name for rule in build_pipeline(bidirectional_arcs=True)]
    assert "arcs.bidirectional" in names
    assert "arcs.superset_only" not in names
    assert names.index("arcs.bidirectional") == DEFAULT_PIPELINE.index("arcs.superset_only")


def test_unknown_rule_names_raise() -> None:
    with pytest.raises(KeyError):
        get_rule("no.such.rule")
    with pytest.raises(ValueError):
        register_rule("", single_position)


def test_register_rule_replaces_existing_handler() -> None:
    original = get_rule("count.single")
    try:
        register_rule("count.single", lambda ctx: 0)
        assert get_rule("count.single").handler is not single_count_elimination
    finally:
        register_rule("count.single", original.handler)
    assert get_rule("count.single").handler is single_count_elimination
