"""Facade turning a game id into a JSON-ready solver verdict."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from contracts.errors import ParamsError
from puzzles.subsets import (
    Status,
    encode_solution,
    game_text_format,
    load_game,
    solve,
    split_game_id,
    validate_params,
)
from puzzles.subsets.solver import StepTraceRecorder, pipeline_from_features

from ._utils import build_env

INVALID_MESSAGE = "Puzzle is invalid."


def solve_game_id(
    game_id: str,
    *,
    profile: Optional[str] = None,
    env: Mapping[str, str] | None = None,
    trace_level: str = "none",
) -> Dict[str, Any]:
    """Load ``game_id`` (``"<params>:<desc>"``), solve it and describe the result.

    Raises :class:`ParamsError` or :class:`DescriptorError` when the id
    cannot be loaded.  Solver outcomes are always reported in the payload.
    """

    params, desc = split_game_id(game_id)
    reason = validate_params(params)
    if reason is not None:
        raise ParamsError(reason)
    if desc is None:
        raise ParamsError("Game id has no description")

    state = load_game(params, desc)
    recorder = StepTraceRecorder(trace_level=trace_level)
    outcome = solve(state, rules=pipeline_from_features(build_env(env), profile=profile), recorder=recorder)

    payload: Dict[str, Any] = {
        "status": outcome.status.value,
        "steps": outcome.steps,
        "text": game_text_format(outcome.state),
        "solution": None,
        "error": None,
    }
    if outcome.status is Status.INVALID:
        payload["error"] = INVALID_MESSAGE
    else:
        payload["solution"] = encode_solution(outcome.state)
    if trace_level != "none":
        payload["trace"] = [entry.to_payload() for entry in outcome.trace]
    return payload


__all__ = ["INVALID_MESSAGE", "solve_game_id"]
