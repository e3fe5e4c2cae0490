"""stagesplit - run a monolithic initialization sequence as two phases."""
from __future__ import annotations

from importlib import metadata
from typing import Optional

from stagesplit.coordinator import Coordinator, State
from stagesplit.core import (
    DEFAULT_CUT_POINT,
    DEFAULT_STEPS,
    RESOURCE_STEP,
    AttributeDispatcher,
    PhaseRunner,
    PhaseSplit,
    PhaseSplitter,
    StepTable,
    StepTimer,
    split,
)
from stagesplit.core.dispatch import Dispatcher
from stagesplit.hooks import HookName, HookRegistry
from stagesplit.profiles import load_step_profile
from stagesplit.settings import Settings

__all__ = [
    "__version__",
    "AttributeDispatcher",
    "Coordinator",
    "DEFAULT_CUT_POINT",
    "DEFAULT_STEPS",
    "HookName",
    "HookRegistry",
    "PhaseRunner",
    "PhaseSplit",
    "PhaseSplitter",
    "RESOURCE_STEP",
    "Settings",
    "State",
    "StepTable",
    "StepTimer",
    "create_coordinator",
    "split",
]


def __getattr__(name: str):  # pragma: no cover - passthrough to package metadata
    if name == "__version__":
        try:
            return metadata.version("stagesplit")
        except metadata.PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)


def create_coordinator(
    settings: Optional[Settings] = None,
    dispatcher: Optional[Dispatcher] = None,
) -> Coordinator:
    """Construct a :class:`Coordinator` configured from *settings*."""

    settings = settings or Settings.load()
    steps = DEFAULT_STEPS
    cut_point = settings.cut_point or DEFAULT_CUT_POINT
    resource_step = RESOURCE_STEP
    if settings.profile_path is not None:
        # The profile's cut point wins; a settings cut point only applies when
        # the profile contains it. Otherwise the coordinator stays idle.
        profile = load_step_profile(settings.profile_path)
        steps = profile.steps
        cut_point = profile.cut_point
        if cut_point is None and settings.cut_point in steps:
            cut_point = settings.cut_point
        resource_step = profile.resource_step
    timer = StepTimer(
        dispatcher,
        system_name=settings.system_name,
        width=settings.report_width,
    )
    return Coordinator(
        steps,
        cut_point=cut_point,
        resource_step=resource_step,
        runner=PhaseRunner(timer),
    )
