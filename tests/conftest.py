from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Iterator, List

import pytest

from stagesplit.core.steps import DEFAULT_STEPS
from stagesplit.hooks import HookRegistry


class RecordingTarget:
    """Target whose steps append their name to a shared call log."""

    def __init__(self, configuration: Any, calls: List[str], steps: Iterable[str] = DEFAULT_STEPS) -> None:
        self.configuration = configuration
        self.calls = calls
        self._steps = frozenset(steps)

    def __getattr__(self, name: str):
        if name.startswith("_") or name not in self._steps:
            raise AttributeError(name)

        def step() -> None:
            self.calls.append(name)

        return step


class ConnectionPool:
    def __init__(self) -> None:
        self.disconnected = False

    def disconnect(self) -> None:
        self.disconnected = True


@pytest.fixture
def calls() -> List[str]:
    return []


@pytest.fixture
def configuration() -> MappingProxyType:
    return MappingProxyType({"environment": "test"})


@pytest.fixture
def make_target(calls: List[str], configuration: MappingProxyType):
    """Factory building targets that share the fixture call log."""

    def factory(config: Any = configuration, steps: Iterable[str] = DEFAULT_STEPS) -> RecordingTarget:
        return RecordingTarget(config, calls, steps)

    return factory


@pytest.fixture
def hooks() -> Iterator[HookRegistry]:
    registry = HookRegistry()
    yield registry
    registry.clear()


@pytest.fixture
def pool() -> ConnectionPool:
    return ConnectionPool()
