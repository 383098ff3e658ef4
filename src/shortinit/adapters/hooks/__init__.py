"""Hook registry adapters."""

from .memory import InMemoryHookRegistry, UndefinedCallbackError

__all__ = ["InMemoryHookRegistry", "UndefinedCallbackError"]
