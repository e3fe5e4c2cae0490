"""Exception hierarchy for staged initialization."""
from __future__ import annotations

from typing import Any


class StagedInitError(RuntimeError):
    """Base class for every error raised by :mod:`stagesplit`."""


class UnknownStepError(StagedInitError, ValueError):
    """Raised when a step name is not part of the master step list."""

    def __init__(self, step: str) -> None:
        super().__init__(f"Unknown step '{step}'")
        self.step = step


class StepNotFoundError(StagedInitError, LookupError):
    """Raised when a step cannot be dispatched on a target."""

    def __init__(self, step: str, target: Any = None) -> None:
        owner = type(target).__name__ if target is not None else "target"
        super().__init__(f"Step '{step}' is not invocable on {owner}")
        self.step = step
        self.target = target


class UnknownHookError(StagedInitError, ValueError):
    """Raised when a hook name is outside the supported set."""

    def __init__(self, name: Any) -> None:
        super().__init__(f"Unknown hook '{name}'")
        self.name = name


class SequenceError(StagedInitError):
    """Raised when phases are run out of order."""


class StepExecutionError(StagedInitError):
    """Raised when a step fails; the original exception is the ``__cause__``."""

    def __init__(self, step: str, position: int) -> None:
        super().__init__(f"Step '{step}' (position {position}) failed")
        self.step = step
        self.position = position


class ProfileError(StagedInitError):
    """Raised when a step profile cannot be loaded."""


class SettingsError(StagedInitError):
    """Raised when an environment setting has an invalid value."""


__all__ = [
    "ProfileError",
    "SequenceError",
    "SettingsError",
    "StagedInitError",
    "StepExecutionError",
    "StepNotFoundError",
    "UnknownHookError",
    "UnknownStepError",
]
