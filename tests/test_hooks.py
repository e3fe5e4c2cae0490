from __future__ import annotations

import pytest

from stagesplit.errors import UnknownHookError
from stagesplit.hooks import HookName, HookRegistry


def test_fire_runs_callbacks_in_registration_order(hooks: HookRegistry) -> None:
    order = []
    for label in ("f1", "f2", "f3"):
        hooks.register(HookName.AFTER_FORK, lambda label=label: order.append(label))

    hooks.fire(HookName.AFTER_FORK)

    assert order == ["f1", "f2", "f3"]


def test_fire_without_callbacks_is_a_no_op(hooks: HookRegistry) -> None:
    hooks.fire(HookName.BEFORE_FORK)

    assert hooks.callbacks(HookName.BEFORE_FORK) == ()


def test_same_callback_registered_twice_runs_twice(hooks: HookRegistry) -> None:
    order = []

    def callback() -> None:
        order.append("called")

    hooks.register("after_preload", callback)
    hooks.register(HookName.AFTER_PRELOAD, callback)
    hooks.fire("after_preload")

    assert order == ["called", "called"]


def test_unknown_hook_names_are_rejected(hooks: HookRegistry) -> None:
    with pytest.raises(UnknownHookError):
        hooks.register("before_boot", lambda: None)
    with pytest.raises(UnknownHookError):
        hooks.fire("before_boot")


def test_failing_callback_stops_the_firing(hooks: HookRegistry) -> None:
    order = []

    def failing() -> None:
        raise RuntimeError("stop")

    hooks.register(HookName.BEFORE_PRELOAD, lambda: order.append("first"))
    hooks.register(HookName.BEFORE_PRELOAD, failing)
    hooks.register(HookName.BEFORE_PRELOAD, lambda: order.append("third"))

    with pytest.raises(RuntimeError, match="stop"):
        hooks.fire(HookName.BEFORE_PRELOAD)
    assert order == ["first"]


def test_hook_decorator_and_clear(hooks: HookRegistry) -> None:
    @hooks.hook("before_fork")
    def before_fork() -> None:
        pass

    assert hooks.callbacks(HookName.BEFORE_FORK) == (before_fork,)
    hooks.clear()
    assert hooks.callbacks(HookName.BEFORE_FORK) == ()
