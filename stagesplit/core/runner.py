"""Sequential execution of a phase."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from stagesplit.errors import StagedInitError, StepExecutionError

from .timer import StepTimer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PhaseReport:
    """Timings of every step of a successfully completed phase."""

    timings: List[Tuple[str, float]] = field(default_factory=list)

    @property
    def steps(self) -> List[str]:
        return [step for step, _ in self.timings]

    @property
    def total_seconds(self) -> float:
        return sum(seconds for _, seconds in self.timings)


class PhaseRunner:
    """Execute the steps of a phase one after another.

    Steps run in list order on the calling thread. The first failure stops
    the phase; remaining steps are never dispatched.
    """

    def __init__(self, timer: Optional[StepTimer] = None) -> None:
        self.timer = timer or StepTimer()

    def run_phase(self, target: Any, steps: Sequence[str]) -> PhaseReport:
        """Run every step in *steps* against *target*."""

        report = PhaseReport()
        for position, step in enumerate(steps):
            try:
                seconds = self.timer.run(target, step)
            except StagedInitError:
                logger.error("Step '%s' could not be run", step)
                raise
            except Exception as exc:
                logger.exception("Step '%s' failed", step)
                raise StepExecutionError(step, position) from exc
            report.timings.append((step, seconds))
        if steps:
            logger.info("Completed %d steps in %.2fs", len(report.timings), report.total_seconds)
        return report


__all__ = ["PhaseReport", "PhaseRunner"]
