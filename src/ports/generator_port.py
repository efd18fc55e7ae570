"""Facade for puzzle generation."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from contracts.errors import ParamsError
from puzzles.subsets import decode_params, encode_params, encode_solution, new_game_desc, validate_params
from puzzles.subsets.solver import pipeline_from_features

from ._utils import build_env


def generate(
    params_text: str,
    *,
    seed: str,
    profile: Optional[str] = None,
    env: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Generate a puzzle and return its JSON-ready description.

    Identical ``params_text`` and ``seed`` inputs yield the same payload.
    """

    params = decode_params(params_text)
    reason = validate_params(params)
    if reason is not None:
        raise ParamsError(reason)

    rules = pipeline_from_features(build_env(env), profile=profile)
    puzzle = new_game_desc(params, seed, rules=rules)
    return {
        "params": encode_params(params),
        "seed": seed,
        "descriptor": puzzle.descriptor,
        "game_id": puzzle.game_id,
        "hidden": len(puzzle.hidden),
        "values": list(puzzle.values),
        "solution": encode_solution(puzzle.state),
    }


__all__ = ["generate"]
