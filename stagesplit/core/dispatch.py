"""Ways of invoking a named step on a target."""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol

from stagesplit.errors import StepNotFoundError, UnknownStepError

from .steps import as_step_list

StepCallable = Callable[[Any], Any]


class Dispatcher(Protocol):
    """Invoke *step* on *target* with no further arguments."""

    def __call__(self, target: Any, step: str) -> Any:
        """Run the step."""


class AttributeDispatcher:
    """Dispatch steps as zero-argument methods of the target."""

    def __call__(self, target: Any, step: str) -> Any:
        method = getattr(target, step, None)
        if method is None or not callable(method):
            raise StepNotFoundError(step, target)
        return method()


class StepTable:
    """Explicit lookup table from step name to implementation.

    Implementations receive the target as their only argument. When the
    table is built against a master list, only names from that list may be
    registered.
    """

    def __init__(self, master: Optional[Iterable[str]] = None) -> None:
        self._master = as_step_list(master) if master is not None else None
        self._steps: Dict[str, StepCallable] = {}

    def register(self, name: str, func: StepCallable) -> StepCallable:
        """Register *func* for *name* and return it for decorator usage."""

        if self._master is not None and name not in self._master:
            raise UnknownStepError(name)
        if name in self._steps:
            raise ValueError(f"Step '{name}' is already registered")
        self._steps[name] = func
        return func

    def step(self, name: str) -> Callable[[StepCallable], StepCallable]:
        """Decorator form of :meth:`register`."""

        def decorator(func: StepCallable) -> StepCallable:
            return self.register(name, func)

        return decorator

    def names(self) -> List[str]:
        """Return registered step names preserving insertion order."""

        return list(self._steps.keys())

    def missing(self, steps: Iterable[str]) -> List[str]:
        """Return the names from *steps* that have no implementation."""

        return [name for name in steps if name not in self._steps]

    def __call__(self, target: Any, step: str) -> Any:
        func = self._steps.get(step)
        if func is None:
            raise StepNotFoundError(step, target)
        return func(target)


__all__ = ["AttributeDispatcher", "Dispatcher", "StepCallable", "StepTable"]
