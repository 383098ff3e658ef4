"""In-memory hook registry.

Hooks are kept per name as an ordered list of ``(sequence, Hook)`` pairs and
dispatched synchronously by priority, then registration order. Callbacks
registered by name are resolved when they fire; a name nothing provides
raises `UndefinedCallbackError`, which is how a hook left behind for a module
that was never loaded shows up.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import Any

from shortinit.domain.hooks import DEFAULT_PRIORITY, Callback, Hook
from shortinit.interfaces.hooks import AbstractHookRegistry

logger = logging.getLogger(__name__)

Resolver = Callable[[str], object]


class UndefinedCallbackError(LookupError):
    """Raised when a hook fires a named callback that nothing defines."""

    def __init__(self, hook: str, callback: str) -> None:
        super().__init__(
            f"Hook {hook!r} fired undefined callback {callback!r}; "
            "its module was not loaded and the hook was not removed"
        )
        self.hook = hook
        self.callback = callback


class InMemoryHookRegistry(AbstractHookRegistry):
    """Ordered in-memory hook registry.

    Args:
        resolver: Turns a named callback into a callable at dispatch time
            (typically `CapabilityRegistry.symbol`). A `LookupError` it raises
            is reported as `UndefinedCallbackError`.
    """

    def __init__(self, resolver: Resolver | None = None) -> None:
        self._resolver = resolver
        self._hooks: dict[str, list[tuple[int, Hook]]] = {}
        self._sequence = itertools.count()

    def add_filter(
        self,
        name: str,
        callback: Callback,
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        hook = Hook(name, callback, priority, accepted_args)
        entries = self._hooks.setdefault(name, [])
        for index, (seq, existing) in enumerate(entries):
            if existing.matches(callback, priority):
                # Re-registering keeps the original dispatch position.
                entries[index] = (seq, hook)
                return
        entries.append((next(self._sequence), hook))

    def remove_filter(
        self, name: str, callback: Callback, priority: int = DEFAULT_PRIORITY
    ) -> bool:
        entries = self._hooks.get(name, [])
        for index, (_, hook) in enumerate(entries):
            if hook.matches(callback, priority):
                del entries[index]
                return True
        return False

    def has_filter(self, name: str, callback: Callback | None = None) -> bool:
        entries = self._hooks.get(name, [])
        if callback is None:
            return bool(entries)
        return any(hook.matches(callback) for _, hook in entries)

    def hooks(self, name: str) -> list[Hook]:
        """Return the hooks on `name` in dispatch order."""
        entries = sorted(self._hooks.get(name, []), key=lambda e: (e[1].priority, e[0]))
        return [hook for _, hook in entries]

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        for hook in self.hooks(name):
            value = self._call(hook, (value, *args))
        return value

    def do_action(self, name: str, *args: Any) -> None:
        for hook in self.hooks(name):
            self._call(hook, args)

    def _call(self, hook: Hook, args: tuple[Any, ...]) -> Any:
        fn = self._resolve(hook)
        return fn(*args[: hook.accepted_args])

    def _resolve(self, hook: Hook) -> Callable[..., Any]:
        if not isinstance(hook.callback, str):
            return hook.callback
        if self._resolver is None:
            raise UndefinedCallbackError(hook.name, hook.callback)
        try:
            fn = self._resolver(hook.callback)
        except LookupError as err:
            logger.error(
                "Hook %s fired undefined callback %s", hook.name, hook.callback
            )
            raise UndefinedCallbackError(hook.name, hook.callback) from err
        if not callable(fn):
            raise UndefinedCallbackError(hook.name, hook.callback)
        return fn
