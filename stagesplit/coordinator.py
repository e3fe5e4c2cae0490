"""Coordinate the early and late initialization phases."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from stagesplit.core.dispatch import Dispatcher
from stagesplit.core.runner import PhaseReport, PhaseRunner
from stagesplit.core.splitter import PhaseSplit, PhaseSplitter
from stagesplit.core.steps import DEFAULT_STEPS, RESOURCE_STEP, StepList
from stagesplit.core.timer import StepTimer
from stagesplit.errors import SequenceError, UnknownStepError
from stagesplit.hooks import HookName, HookRegistry

logger = logging.getLogger(__name__)

TargetFactory = Callable[[Any], Any]

# Resolves to RESOURCE_STEP when the master list contains it, else None.
_DEFAULT_RESOURCE_STEP = object()


class State(str, Enum):
    IDLE = "idle"
    CONFIGURED = "configured"
    PREPARED = "prepared"
    EARLY_DONE = "early_done"
    LATE_DONE = "late_done"


def _configuration_attribute(target: Any) -> Any:
    return getattr(target, "configuration", None)


class Coordinator:
    """Run a master step list as two phases around a process fork.

    The early phase runs once in the parent process. The configuration it
    leaves on the target is captured and handed to a freshly built target
    on which only the late phase runs, typically in each forked child.
    """

    def __init__(
        self,
        steps: Iterable[str] = DEFAULT_STEPS,
        *,
        cut_point: Optional[str] = None,
        resource_step: Any = _DEFAULT_RESOURCE_STEP,
        runner: Optional[PhaseRunner] = None,
        dispatcher: Optional[Dispatcher] = None,
        configuration_of: Callable[[Any], Any] = _configuration_attribute,
    ) -> None:
        self.splitter = PhaseSplitter(steps)
        if resource_step is _DEFAULT_RESOURCE_STEP:
            resource_step = RESOURCE_STEP if RESOURCE_STEP in self.splitter else None
        elif resource_step is not None and resource_step not in self.splitter:
            raise UnknownStepError(resource_step)
        self.resource_step = resource_step
        if runner is None:
            runner = PhaseRunner(StepTimer(dispatcher))
        self.runner = runner
        self.configuration_of = configuration_of
        self.state = State.IDLE
        self.target: Any = None
        self.configuration: Any = None
        self._split: Optional[PhaseSplit] = None
        self._hooks_installed = False
        if cut_point is not None:
            self.configure_split(cut_point)

    @property
    def steps(self) -> StepList:
        return self.splitter.master

    @property
    def phases(self) -> PhaseSplit:
        if self._split is None:
            raise SequenceError("No cut point configured")
        return self._split

    @property
    def early_phase(self) -> StepList:
        return self.phases.early

    @property
    def late_phase(self) -> StepList:
        return self.phases.late

    @property
    def initialized(self) -> bool:
        return self.state is State.LATE_DONE

    def configure_split(self, cut_point: str) -> PhaseSplit:
        """Split the master list before *cut_point*."""

        if self.state in (State.EARLY_DONE, State.LATE_DONE):
            raise SequenceError("Cannot change the cut point after the early phase has run")
        self._split = self.splitter.split(cut_point)
        if self.state is State.IDLE:
            self.state = State.CONFIGURED
        logger.debug(
            "Split at '%s': %d early steps, %d late steps",
            cut_point,
            len(self._split.early),
            len(self._split.late),
        )
        return self._split

    def preloads_resources(self) -> bool:
        """Return whether the early phase materializes pooled resources."""

        return self.resource_step is not None and self.resource_step in self.early_phase

    def run_early_phase(self, target: Any) -> PhaseReport:
        """Run the early phase on *target* and capture its configuration."""

        if self.state is State.IDLE:
            raise SequenceError("configure_split must be called before the early phase")
        if self.state in (State.EARLY_DONE, State.LATE_DONE):
            raise SequenceError("The early phase has already run; call reset() first")
        if self._hooks_installed and self.state is not State.PREPARED:
            raise SequenceError(f"Hook '{HookName.BEFORE_PRELOAD.value}' must fire before the early phase")
        logger.info("Running early phase up to '%s'", self.phases.cut_point)
        report = self.runner.run_phase(target, self.early_phase)
        self.target = target
        self.configuration = self.configuration_of(target)
        self.state = State.EARLY_DONE
        return report

    def boot(self, configuration: Any, factory: TargetFactory) -> Any:
        """Build a target from *configuration* and run the early phase on it."""

        target = factory(configuration)
        self.run_early_phase(target)
        return target

    def run_late_phase(self, target: Any) -> PhaseReport:
        """Run the late phase on a target built after the early phase."""

        if self.state not in (State.EARLY_DONE, State.LATE_DONE):
            raise SequenceError("The early phase must complete before the late phase")
        logger.info("Running late phase from '%s'", self.phases.cut_point)
        report = self.runner.run_phase(target, self.late_phase)
        self.state = State.LATE_DONE
        return report

    def reset(self) -> None:
        """Forget the early-phase target so the early phase can run again."""

        self.target = None
        self.configuration = None
        self.state = State.CONFIGURED if self._split is not None else State.IDLE

    def install_hooks(
        self,
        hooks: HookRegistry,
        *,
        prepare: Callable[[], Any],
        build_target: TargetFactory,
        reset_resources: Optional[Callable[[], Any]] = None,
    ) -> None:
        """Register the lifecycle callbacks that drive both phases.

        ``prepare`` boots the host before the early phase, ``reset_resources``
        drops pooled resources after it when they were preloaded, and
        ``build_target`` creates the late-phase target from the captured
        configuration after a fork.
        """

        def before_preload() -> None:
            if self.state not in (State.CONFIGURED, State.PREPARED):
                raise SequenceError(f"Cannot prepare while {self.state.value}")
            prepare()
            self.state = State.PREPARED

        def after_preload() -> None:
            if self.state is not State.EARLY_DONE:
                raise SequenceError("The early phase has not completed")
            if reset_resources is not None and self.preloads_resources():
                logger.info("'%s' was preloaded; resetting pooled resources", self.resource_step)
                reset_resources()

        def after_fork() -> None:
            if self.state not in (State.EARLY_DONE, State.LATE_DONE):
                raise SequenceError("The early phase must complete before the late phase")
            self.run_late_phase(build_target(self.configuration))

        hooks.register(HookName.BEFORE_PRELOAD, before_preload)
        hooks.register(HookName.AFTER_PRELOAD, after_preload)
        hooks.register(HookName.AFTER_FORK, after_fork)
        self._hooks_installed = True


__all__ = ["Coordinator", "State", "TargetFactory"]
