"""Per-step wall-clock timing."""
from __future__ import annotations

import logging
import sys
import time
from typing import Any, Optional, TextIO

from .dispatch import AttributeDispatcher, Dispatcher

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_NAME = "StageSplit"
DEFAULT_WIDTH = 40


def format_timing(system_name: str, step: str, seconds: float, width: int = DEFAULT_WIDTH) -> str:
    """Return the report line for *step*, e.g. ``[StageSplit] load_gems      0.120s``."""

    return f"[{system_name}] {step}" + f"{seconds:0.3f}s".rjust(width - len(step))


class StepTimer:
    """Run one step on a target and report how long it took.

    A failing step propagates its exception untouched and produces no
    report line.
    """

    def __init__(
        self,
        dispatcher: Optional[Dispatcher] = None,
        *,
        stream: Optional[TextIO] = None,
        system_name: str = DEFAULT_SYSTEM_NAME,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        self.dispatcher = dispatcher or AttributeDispatcher()
        self.system_name = system_name
        self.width = width
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output.
        return self._stream if self._stream is not None else sys.stdout

    def run(self, target: Any, step: str) -> float:
        """Dispatch *step* on *target* and return the elapsed seconds."""

        started = time.perf_counter()
        self.dispatcher(target, step)
        elapsed = time.perf_counter() - started
        stream = self.stream
        stream.write(format_timing(self.system_name, step, elapsed, self.width) + "\n")
        stream.flush()
        logger.debug("Step '%s' completed in %.3fs", step, elapsed)
        return elapsed


__all__ = ["DEFAULT_SYSTEM_NAME", "DEFAULT_WIDTH", "StepTimer", "format_timing"]
