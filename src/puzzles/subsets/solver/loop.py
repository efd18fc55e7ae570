"""Fixed-point driver for the narrowing rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..state import GridState
from ..validator import Status, validate
from .cube import DomainCube
from .rules import Rule, SolveContext, build_pipeline
from .trace import StepTraceEntry, StepTraceRecorder

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveOutcome:
    """Terminal status, the narrowed grid and the number of loop steps."""

    status: Status
    state: GridState
    steps: int
    trace: Tuple[StepTraceEntry, ...] = ()

    @property
    def complete(self) -> bool:
        return self.status is Status.COMPLETE


class SolverLoop:
    """Apply rules until a terminal status or a fixed point is reached.

    The loop owns ``state`` and a fresh candidate cube.  Each :meth:`step`
    validates the grid, re-syncs the cube with the bounds and runs the
    rules in pipeline order, stopping at the first rule that makes
    progress.  Earlier rules are cheaper, so they get another chance before
    any later rule runs.
    """

    def __init__(
        self,
        state: GridState,
        *,
        rules: Sequence[Rule] | None = None,
        recorder: Optional[StepTraceRecorder] = None,
    ) -> None:
        self.state = state
        self.cube = DomainCube.for_state(state)
        self.rules: Tuple[Rule, ...] = tuple(rules) if rules is not None else build_pipeline()
        self.recorder = recorder
        self.steps = 0
        self.status: Optional[Status] = None

    @property
    def done(self) -> bool:
        return self.status is not None

    def step(self) -> bool:
        """Run one step; return True while the loop is still running."""

        if self.done:
            return False
        self.steps += 1

        verdict = validate(self.state, want_counts=True)
        if verdict.status is not Status.UNFINISHED:
            self.status = verdict.status
            return False

        ctx = SolveContext(state=self.state, cube=self.cube, counts=list(verdict.counts or ()))
        self.cube.sync(self.state)

        for rule in self.rules:
            changes = rule(ctx)
            if changes:
                if self.recorder is not None:
                    self.recorder.record(rule.name, changes)
                return True

        _LOGGER.debug("No rule made progress after %d steps", self.steps)
        self.status = Status.UNFINISHED
        return False

    def run(self) -> Status:
        while self.step():
            pass
        assert self.status is not None
        return self.status


def solve(
    state: GridState,
    *,
    rules: Sequence[Rule] | None = None,
    recorder: Optional[StepTraceRecorder] = None,
) -> SolveOutcome:
    """Solve a private copy of ``state`` from its given cells only.

    Every non-given cell is reset to unknown first, so earlier player marks
    or deductions never influence the result.  The input is not modified.
    """

    work = state.copy()
    work.reset_unknowns()
    loop = SolverLoop(work, rules=rules, recorder=recorder)
    status = loop.run()
    _LOGGER.debug("Solver finished with status %s after %d steps", status.value, loop.steps)
    trace = recorder.snapshot() if recorder is not None else ()
    return SolveOutcome(status=status, state=work, steps=loop.steps, trace=trace)


__all__ = ["SolveOutcome", "SolverLoop", "solve"]
