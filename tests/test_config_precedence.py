from __future__ import annotations

import pytest

from project_config import get_config, get_section, project_root, resolve_path


def test_config_declares_default_params() -> None:
    assert get_section("PUZZLE.params") == "4x4n4"
    assert get_section("solver.trace_level") == "none"
    assert "generator" in get_config()


def test_missing_paths_use_default_or_raise() -> None:
    assert get_section("PUZZLE.nope", "fallback") == "fallback"
    with pytest.raises(KeyError):
        get_section("PUZZLE.nope")


def test_relative_paths_resolve_under_the_project_root(tmp_path) -> None:
    assert resolve_path("artifacts") == project_root() / "artifacts"
    assert resolve_path(tmp_path) == tmp_path
