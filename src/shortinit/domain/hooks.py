"""Hook value objects shared by the registry, the suppressor and the core."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

DEFAULT_PRIORITY = 10

Callback = Callable[..., object] | str


class HookKind(Enum):
    """Whether a hook transforms a value or only observes."""

    FILTER = "filter"
    ACTION = "action"


def same_callback(registered: Callback, callback: Callback) -> bool:
    """Return whether two callbacks denote the same registration.

    Named callbacks (strings) match only the same name. Callables match by
    equality, so two bound methods of one instance are the same callback
    while the same method bound to two instances is not.
    """
    if isinstance(registered, str) != isinstance(callback, str):
        return False
    return registered == callback


@dataclass(frozen=True)
class Hook:
    """A registered callback on a named hook."""

    name: str
    callback: Callback
    priority: int = DEFAULT_PRIORITY
    accepted_args: int = 1

    def matches(self, callback: Callback, priority: int | None = None) -> bool:
        """Match on callback, and on priority when one is given."""
        if priority is not None and priority != self.priority:
            return False
        return same_callback(self.callback, callback)


@dataclass(frozen=True)
class HookSpec:
    """A hook registration described by name only.

    Used for contract tables: the core installs these at startup and the
    suppressor removes them again. Removal matches on ``(name, callback,
    priority)``.
    """

    kind: HookKind
    name: str
    callback: str
    priority: int = DEFAULT_PRIORITY
    accepted_args: int = 1


def action(
    name: str, callback: str, priority: int = DEFAULT_PRIORITY, accepted_args: int = 1
) -> HookSpec:
    """Shorthand for an action `HookSpec`."""
    return HookSpec(HookKind.ACTION, name, callback, priority, accepted_args)


def filter_(
    name: str, callback: str, priority: int = DEFAULT_PRIORITY, accepted_args: int = 1
) -> HookSpec:
    """Shorthand for a filter `HookSpec`."""
    return HookSpec(HookKind.FILTER, name, callback, priority, accepted_args)


def return_true(*_args: object) -> bool:
    """Callback that always returns True."""
    return True


def return_false(*_args: object) -> bool:
    """Callback that always returns False."""
    return False
