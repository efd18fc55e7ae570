"""Step trace recording for the solver loop."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Tuple

TRACE_LEVELS = ("none", "steps")


class TraceValidationError(ValueError):
    """Raised when a trace entry is malformed."""


@dataclass(frozen=True, slots=True)
class StepTraceEntry:
    """Single rule application that made progress."""

    step: int
    rule: str
    changes: int

    def __post_init__(self) -> None:
        if self.step < 1:
            raise TraceValidationError("step must be >= 1")
        if not self.rule:
            raise TraceValidationError("rule must be a non-empty string")
        if self.changes < 1:
            raise TraceValidationError("only productive steps are recorded")

    def to_payload(self) -> dict:
        return {"step": int(self.step), "rule": str(self.rule), "changes": int(self.changes)}


@dataclass
class StepTraceRecorder:
    """In-memory trace accumulator respecting ``trace_level`` semantics."""

    trace_level: str = "none"
    entries: List[StepTraceEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.trace_level not in TRACE_LEVELS:
            raise ValueError(f"Unsupported trace level: {self.trace_level!r}")

    def record(self, rule: str, changes: int) -> None:
        if self.trace_level == "none":
            return
        self.entries.append(StepTraceEntry(step=len(self.entries) + 1, rule=rule, changes=changes))

    def snapshot(self) -> Tuple[StepTraceEntry, ...]:
        return tuple(self.entries)

    def to_json(self, *, indent: int | None = None) -> str:
        payload = [entry.to_payload() for entry in self.entries]
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), indent=indent)


__all__ = ["StepTraceEntry", "StepTraceRecorder", "TRACE_LEVELS", "TraceValidationError"]
