from __future__ import annotations

import pytest

from puzzles.subsets.descriptor import load_game
from puzzles.subsets.generator import new_game_desc
from puzzles.subsets.params import F_ADJ_RIGHT, GameParams
from puzzles.subsets.solver import SolverLoop, StepTraceRecorder, build_pipeline, solve
from puzzles.subsets.solver.trace import TraceValidationError, StepTraceEntry
from puzzles.subsets.state import GridState
from puzzles.subsets.validator import Status


def _clued_pair(given_value):
    state = GridState.blank(2, 1, 2)
    state.clues[0] = F_ADJ_RIGHT
    state.assign(1, given_value)
    state.given[1] = True
    return state


@pytest.fixture(scope="module")
def generated():
    return new_game_desc(GameParams(), "solver-loop")


def test_worked_example_resolves_the_superset() -> None:
    recorder = StepTraceRecorder(trace_level="steps")
    outcome = solve(_clued_pair(1), recorder=recorder)
    assert outcome.status is Status.COMPLETE
    assert outcome.complete
    assert outcome.state.value(0) == 3
    assert outcome.steps == 4
    assert [entry.rule for entry in outcome.trace] == ["count.single", "arrows.bounds", "cube.bits"]
    assert [entry.step for entry in outcome.trace] == [1, 2, 3]


def test_empty_subset_below_a_clue_is_never_invalid() -> None:
    outcome = solve(_clued_pair(0))
    assert outcome.status is Status.COMPLETE
    assert outcome.state.value(1) == 0
    assert outcome.state.value(0) != 0


def test_solve_leaves_its_input_untouched() -> None:
    state = _clued_pair(1)
    state.known[0] = 2
    before = state.copy()
    outcome = solve(state)
    assert state == before
    assert outcome.state is not state
    assert outcome.state.value(0) == 3


def test_puzzle_without_givens_stops_unfinished() -> None:
    state = load_game(GameParams(), ",".join(["_"] * 16))
    outcome = solve(state)
    assert outcome.status is Status.UNFINISHED
    assert outcome.steps == 2


def test_generated_puzzle_solves_to_its_values(generated) -> None:
    outcome = solve(load_game(generated.params, generated.descriptor))
    assert outcome.status is Status.COMPLETE
    assert tuple(outcome.state.known) == generated.values


def test_steps_only_narrow_bounds_and_candidates(generated) -> None:
    state = load_game(generated.params, generated.descriptor)
    loop = SolverLoop(state)
    previous = (list(state.known), list(state.mask), loop.cube.snapshot())
    while loop.step():
        known, mask, cells = list(state.known), list(state.mask), loop.cube.snapshot()
        for i in range(state.size):
            assert known[i] & previous[0][i] == previous[0][i]
            assert mask[i] & previous[1][i] == mask[i]
            assert cells[i] & previous[2][i] == cells[i]
        previous = (known, mask, cells)
    assert loop.done
    assert loop.status is Status.COMPLETE
    assert not loop.step()


def test_bidirectional_arcs_agree_with_the_default_solution(generated) -> None:
    state = load_game(generated.params, generated.descriptor)
    bidirectional = solve(state, rules=build_pipeline(bidirectional_arcs=True))
    assert bidirectional.status is not Status.INVALID
    for i, value in enumerate(generated.values):
        assert bidirectional.state.known[i] & value == bidirectional.state.known[i]
        assert bidirectional.state.mask[i] & value == value


def test_conflicting_givens_are_invalid() -> None:
    state = _clued_pair(3)
    state.assign(0, 1)
    state.given[0] = True
    assert solve(state).status is Status.INVALID


def test_recorder_without_tracing_keeps_nothing() -> None:
    recorder = StepTraceRecorder()
    outcome = solve(_clued_pair(1), recorder=recorder)
    assert outcome.trace == ()
    assert recorder.to_json() == "[]"


def test_trace_validation() -> None:
    with pytest.raises(ValueError):
        StepTraceRecorder(trace_level="verbose")
    with pytest.raises(TraceValidationError):
        StepTraceEntry(step=1, rule="count.single", changes=0)
    entry = StepTraceEntry(step=2, rule="cube.bits", changes=3)
    assert entry.to_payload() == {"step": 2, "rule": "cube.bits", "changes": 3}


def _step_bound(state):
    return state.size * (state.n + state.n2)


@pytest.mark.parametrize("seed", [f"round-trip-{index}" for index in range(6)])
def test_generated_puzzles_solve_within_the_step_bound(seed) -> None:
    puzzle = new_game_desc(GameParams(), seed)
    state = load_game(puzzle.params, puzzle.descriptor)
    loop = SolverLoop(state)
    while loop.step():
        for i in range(state.size):
            assert state.known[i] & ~state.mask[i] == 0
        assert loop.steps <= _step_bound(state)
    assert loop.status is Status.COMPLETE
    assert loop.steps <= _step_bound(state)
    assert tuple(state.known) == puzzle.values
    assert sorted(state.known) == list(range(state.n2))


def test_open_grid_stops_within_the_step_bound() -> None:
    state = load_game(GameParams(), ",".join(["_"] * 16))
    loop = SolverLoop(state)
    assert loop.run() is Status.UNFINISHED
    assert loop.steps <= _step_bound(state)
    for i in range(state.size):
        assert state.known[i] & ~state.mask[i] == 0
