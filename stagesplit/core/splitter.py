"""Split a master step list into early and late phases."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from stagesplit.errors import UnknownStepError

from .steps import StepList, as_step_list


@dataclass(slots=True, frozen=True)
class PhaseSplit:
    """The two phases produced by cutting the master list at ``cut_point``."""

    cut_point: str
    early: StepList
    late: StepList

    def __iter__(self):
        return iter((self.early, self.late))


def split(master: Iterable[str], cut_point: str) -> PhaseSplit:
    """Cut *master* right before the first occurrence of *cut_point*.

    The early phase holds every step strictly before the cut point and the
    late phase holds the cut point and everything after it, so
    ``early + late == master``.
    """

    steps = as_step_list(master)
    try:
        index = steps.index(cut_point)
    except ValueError as exc:
        raise UnknownStepError(cut_point) from exc
    return PhaseSplit(cut_point=cut_point, early=steps[:index], late=steps[index:])


class PhaseSplitter:
    """Owns an immutable master list and recomputes splits on demand."""

    def __init__(self, master: Iterable[str]) -> None:
        self._master = as_step_list(master)

    @property
    def master(self) -> StepList:
        return self._master

    def __contains__(self, step: object) -> bool:
        return step in self._master

    def split(self, cut_point: str) -> PhaseSplit:
        return split(self._master, cut_point)


__all__ = ["PhaseSplit", "PhaseSplitter", "split"]
