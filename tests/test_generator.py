from __future__ import annotations

import random

import pytest

from contracts.errors import ParamsError
from puzzles.subsets.descriptor import load_game
from puzzles.subsets.generator import derive_clues, fill_grid, hide_givens, new_game_desc
from puzzles.subsets.params import GameParams
from puzzles.subsets.solver import solve
from puzzles.subsets.validator import Status, validate

PARAMS = GameParams()


@pytest.fixture(scope="module")
def puzzle():
    return new_game_desc(PARAMS, "generator-tests")


def test_same_seed_same_puzzle(puzzle) -> None:
    again = new_game_desc(PARAMS, "generator-tests")
    assert again.descriptor == puzzle.descriptor
    assert again.values == puzzle.values
    assert again.hidden == puzzle.hidden


def test_explicit_rng_matches_seed() -> None:
    assert new_game_desc(PARAMS, rng=random.Random(7)).descriptor == new_game_desc(PARAMS, 7).descriptor


def test_different_seed_different_grid(puzzle) -> None:
    assert new_game_desc(PARAMS, "another-seed").values != puzzle.values


def test_values_use_every_subset_once(puzzle) -> None:
    assert sorted(puzzle.values) == list(range(16))
    assert puzzle.game_id == f"4x4n4:{puzzle.descriptor}"


def test_clues_describe_the_hidden_grid(puzzle) -> None:
    state = load_game(PARAMS, puzzle.descriptor)
    values = puzzle.values
    for i in range(state.size):
        for direction, j in state.neighbours(i):
            subset = values[i] & values[j] == values[j]
            assert bool(state.clues[i] & direction.flag) == subset


def test_descriptor_solves_back_to_the_values(puzzle) -> None:
    outcome = solve(load_game(PARAMS, puzzle.descriptor))
    assert outcome.status is Status.COMPLETE
    assert tuple(outcome.state.known) == puzzle.values


def test_hidden_cells_are_open_in_the_descriptor(puzzle) -> None:
    fields = puzzle.descriptor.split(",")
    assert len(puzzle.hidden) > 0
    assert sorted(i for i, field in enumerate(fields) if field.startswith("_")) == sorted(puzzle.hidden)
    for i in puzzle.hidden:
        assert not puzzle.state.given[i]


def test_full_grid_with_clues_is_complete() -> None:
    state = fill_grid(PARAMS, random.Random(1))
    derive_clues(state)
    assert all(state.given)
    assert validate(state).status is Status.COMPLETE


def test_hide_givens_with_no_candidates_hides_nothing() -> None:
    state = fill_grid(PARAMS, random.Random(2))
    derive_clues(state)
    assert hide_givens(state, []) == []
    assert all(state.given)


def test_fill_grid_needs_room_for_every_subset() -> None:
    with pytest.raises(ParamsError):
        fill_grid(GameParams(3, 3, 4), random.Random(0))
