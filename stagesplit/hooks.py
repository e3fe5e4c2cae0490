"""Named lifecycle hooks."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union

from stagesplit.errors import UnknownHookError

logger = logging.getLogger(__name__)

HookCallback = Callable[[], object]


class HookName(str, Enum):
    """The closed set of lifecycle events."""

    BEFORE_FORK = "before_fork"
    AFTER_FORK = "after_fork"
    BEFORE_PRELOAD = "before_preload"
    AFTER_PRELOAD = "after_preload"


def resolve_hook(name: Union[HookName, str]) -> HookName:
    """Return the :class:`HookName` for *name* or raise :class:`UnknownHookError`."""

    if isinstance(name, HookName):
        return name
    try:
        return HookName(name)
    except ValueError as exc:
        raise UnknownHookError(name) from exc


class HookRegistry:
    """Ordered callbacks per hook, run synchronously when the hook fires.

    Registrations are append-only. The same callback may be registered more
    than once and then runs once per registration.
    """

    def __init__(self) -> None:
        self._hooks: Dict[HookName, List[HookCallback]] = {name: [] for name in HookName}

    def register(self, name: Union[HookName, str], callback: HookCallback) -> HookCallback:
        """Append *callback* to the hook *name* and return it."""

        hook = resolve_hook(name)
        self._hooks[hook].append(callback)
        logger.debug("Registered callback %r for hook '%s'", callback, hook.value)
        return callback

    def hook(self, name: Union[HookName, str]) -> Callable[[HookCallback], HookCallback]:
        """Decorator to register a callback when defining it."""

        hook = resolve_hook(name)

        def decorator(func: HookCallback) -> HookCallback:
            return self.register(hook, func)

        return decorator

    def fire(self, name: Union[HookName, str]) -> None:
        """Invoke every callback of *name* in registration order.

        The first failing callback stops the firing and its error propagates.
        """

        hook = resolve_hook(name)
        # Callbacks registered during a firing only run on the next one.
        callbacks = tuple(self._hooks[hook])
        logger.debug("Firing hook '%s' (%d callbacks)", hook.value, len(callbacks))
        for callback in callbacks:
            callback()

    def callbacks(self, name: Union[HookName, str]) -> Tuple[HookCallback, ...]:
        return tuple(self._hooks[resolve_hook(name)])

    def clear(self) -> None:
        """Remove all registrations."""

        for callbacks in self._hooks.values():
            callbacks.clear()


__all__ = ["HookCallback", "HookName", "HookRegistry", "resolve_hook"]
