"""Constraint-propagation solver for Subsets grids."""

from __future__ import annotations

from typing import Mapping, Optional, Tuple

from feature_flags import is_bidirectional_arcs_enabled

from .cube import DomainCube
from .loop import SolveOutcome, SolverLoop, solve
from .rules import (
    ARC_STRATEGIES,
    DEFAULT_PIPELINE,
    Rule,
    SolveContext,
    build_pipeline,
    get_rule,
    register_rule,
    registered_rules,
)
from .trace import StepTraceEntry, StepTraceRecorder


def pipeline_from_features(
    env: Mapping[str, str] | None = None, *, profile: Optional[str] = None
) -> Tuple[Rule, ...]:
    """Build the rule pipeline selected by the ``arc_consistency`` feature flag."""

    return build_pipeline(bidirectional_arcs=is_bidirectional_arcs_enabled(env, profile=profile))


__all__ = [
    "ARC_STRATEGIES",
    "DEFAULT_PIPELINE",
    "DomainCube",
    "Rule",
    "SolveContext",
    "SolveOutcome",
    "SolverLoop",
    "StepTraceEntry",
    "StepTraceRecorder",
    "build_pipeline",
    "get_rule",
    "pipeline_from_features",
    "register_rule",
    "registered_rules",
    "solve",
]
