"""Puzzle-first port facades."""

from __future__ import annotations

from .generator_port import generate
from .solver_port import solve_game_id

__all__ = [
    "generate",
    "solve_game_id",
]
