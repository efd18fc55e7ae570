from __future__ import annotations

from puzzles.subsets.solver.cube import DomainCube
from puzzles.subsets.state import GridState


def test_new_cube_allows_every_value() -> None:
    cube = DomainCube(2, 4)
    assert list(cube.candidates(0)) == [0, 1, 2, 3]
    assert cube.count(1) == 4


def test_remove_reports_whether_anything_changed() -> None:
    cube = DomainCube(1, 4)
    assert cube.remove(0, 2) is True
    assert cube.remove(0, 2) is False
    assert not cube.has(0, 2)
    assert list(cube.candidates(0)) == [0, 1, 3]


def test_sync_keeps_values_between_bounds() -> None:
    state = GridState.blank(2, 1, 2)
    state.known[0] = 1
    state.assign(1, 2)
    cube = DomainCube.for_state(state)
    assert cube.sync(state) == 2 + 3
    assert list(cube.candidates(0)) == [1, 3]
    assert list(cube.candidates(1)) == [2]
    assert cube.sync(state) == 0


def test_snapshot_is_a_copy() -> None:
    cube = DomainCube(1, 4)
    snap = cube.snapshot()
    cube.remove(0, 0)
    assert snap == [0b1111]
