"""Load step lists from YAML profiles."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

from stagesplit.core.steps import StepList, as_step_list
from stagesplit.errors import ProfileError, UnknownStepError


@dataclass(slots=True, frozen=True)
class StepProfile:
    """A master step list with its optional cut point and resource step."""

    steps: StepList
    cut_point: Optional[str] = None
    resource_step: Optional[str] = None


def _optional_step(payload: Mapping[str, object], key: str, steps: StepList) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ProfileError(f"'{key}' must be a step name")
    if value not in steps:
        raise UnknownStepError(value)
    return value


def parse_step_profile(payload: object) -> StepProfile:
    """Validate an already decoded profile document."""

    if not isinstance(payload, Mapping):
        raise ProfileError("Step profile must be a mapping")
    raw_steps = payload.get("steps")
    if not isinstance(raw_steps, list) or not raw_steps:
        raise ProfileError("'steps' must be a non-empty list")
    invalid = [item for item in raw_steps if not isinstance(item, str) or not item]
    if invalid:
        raise ProfileError(f"Invalid step names {invalid!r}")
    steps = as_step_list(raw_steps)
    return StepProfile(
        steps=steps,
        cut_point=_optional_step(payload, "cut_point", steps),
        resource_step=_optional_step(payload, "resource_step", steps),
    )


def load_step_profile(path: Path) -> StepProfile:
    """Load the step profile stored at *path*."""

    if not path.exists():
        raise ProfileError(f"Step profile not found at {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ProfileError(f"Invalid YAML in {path}: {exc}") from exc
    return parse_step_profile(payload)


__all__ = ["StepProfile", "load_step_profile", "parse_step_profile"]
