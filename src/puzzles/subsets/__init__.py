"""Subsets: place every subset of a small universe once, obeying superset clues."""

from __future__ import annotations

from .descriptor import encode_desc, load_game, validate_desc
from .generator import GeneratedPuzzle, new_game_desc
from .moves import encode_edit, encode_solution, execute_move, next_edit
from .params import (
    DIRECTIONS,
    GameParams,
    decode_params,
    default_params,
    encode_params,
    split_game_id,
    validate_params,
)
from .solver import SolveOutcome, SolverLoop, StepTraceRecorder, build_pipeline, solve
from .state import GridState
from .text_format import game_text_format
from .validator import Status, Validation, validate

DESCRIPTOR = {
    "module_id": "subsets:engine@1.0.0",
    "puzzle_kind": "subsets",
    "module_version": "1.0.0",
    "capabilities": {"parallelizable": False, "idempotent": True, "stateless": True},
}

__all__ = [
    "DESCRIPTOR",
    "DIRECTIONS",
    "GameParams",
    "GeneratedPuzzle",
    "GridState",
    "SolveOutcome",
    "SolverLoop",
    "Status",
    "StepTraceRecorder",
    "Validation",
    "build_pipeline",
    "decode_params",
    "default_params",
    "encode_desc",
    "encode_edit",
    "encode_params",
    "encode_solution",
    "execute_move",
    "game_text_format",
    "load_game",
    "new_game_desc",
    "next_edit",
    "solve",
    "split_game_id",
    "validate",
    "validate_desc",
    "validate_params",
]
