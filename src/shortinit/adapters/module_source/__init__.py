"""Module source adapters."""

from .importlib_source import ImportlibModuleSource
from .memory import InMemoryModuleSource, UnknownTargetError

__all__ = ["ImportlibModuleSource", "InMemoryModuleSource", "UnknownTargetError"]
