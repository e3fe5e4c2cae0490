"""Primitives for splitting and running initialization steps."""
from __future__ import annotations

from .dispatch import AttributeDispatcher, Dispatcher, StepTable
from .runner import PhaseReport, PhaseRunner
from .splitter import PhaseSplit, PhaseSplitter, split
from .steps import DEFAULT_CUT_POINT, DEFAULT_STEPS, RESOURCE_STEP, StepList
from .timer import StepTimer, format_timing

__all__ = [
    "AttributeDispatcher",
    "DEFAULT_CUT_POINT",
    "DEFAULT_STEPS",
    "Dispatcher",
    "PhaseReport",
    "PhaseRunner",
    "PhaseSplit",
    "PhaseSplitter",
    "RESOURCE_STEP",
    "StepList",
    "StepTable",
    "StepTimer",
    "format_timing",
    "split",
]
