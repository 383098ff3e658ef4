"""Hook registry interface.

Defines `AbstractHookRegistry`, the contract of the core's hook system:
registration, removal and membership keyed by ``(name, callback,
priority)``, plus ordered synchronous dispatch of filters and actions.
"""

import abc
from typing import Any

from shortinit.domain.hooks import DEFAULT_PRIORITY, Callback, HookKind, HookSpec


class AbstractHookRegistry(abc.ABC):
    """Contract for the core's hook registry.

    Actions are filters whose return value is ignored, so the action methods
    delegate to their filter counterparts.
    """

    @abc.abstractmethod
    def add_filter(
        self,
        name: str,
        callback: Callback,
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """Register `callback` on hook `name`.

        Registering the same callback at the same priority again replaces the
        earlier registration in place instead of adding a second one.

        Args:
            name: Hook name.
            callback: A callable, or the name of a core function resolved at
                dispatch time.
            priority: Lower runs first; equal priorities run in registration order.
            accepted_args: Number of dispatch arguments passed to the callback.
        """

    @abc.abstractmethod
    def remove_filter(
        self, name: str, callback: Callback, priority: int = DEFAULT_PRIORITY
    ) -> bool:
        """Remove the registration matching ``(name, callback, priority)``.

        Returns:
            bool: True if a registration was removed.
        """

    @abc.abstractmethod
    def has_filter(self, name: str, callback: Callback | None = None) -> bool:
        """Return whether anything (or `callback`, at any priority) is on `name`."""

    @abc.abstractmethod
    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Pass `value` through every callback on `name` and return the result."""

    @abc.abstractmethod
    def do_action(self, name: str, *args: Any) -> None:
        """Call every callback on `name` with `args`.

        Arguments are passed as-is, so callbacks observe (and may mutate) the
        very objects the caller holds.
        """

    # --- Convenience Methods ---

    def add_action(
        self,
        name: str,
        callback: Callback,
        priority: int = DEFAULT_PRIORITY,
        accepted_args: int = 1,
    ) -> None:
        """Register an action callback. See `add_filter`."""
        self.add_filter(name, callback, priority, accepted_args)

    def remove_action(
        self, name: str, callback: Callback, priority: int = DEFAULT_PRIORITY
    ) -> bool:
        """Remove an action callback. See `remove_filter`."""
        return self.remove_filter(name, callback, priority)

    def has_action(self, name: str, callback: Callback | None = None) -> bool:
        """See `has_filter`."""
        return self.has_filter(name, callback)

    def register(self, spec: HookSpec) -> None:
        """Register a hook described by a `HookSpec`."""
        if spec.kind is HookKind.ACTION:
            self.add_action(spec.name, spec.callback, spec.priority, spec.accepted_args)
        else:
            self.add_filter(spec.name, spec.callback, spec.priority, spec.accepted_args)

    def unregister(self, spec: HookSpec) -> bool:
        """Remove a hook described by a `HookSpec`."""
        if spec.kind is HookKind.ACTION:
            return self.remove_action(spec.name, spec.callback, spec.priority)
        return self.remove_filter(spec.name, spec.callback, spec.priority)
