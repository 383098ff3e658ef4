"""In-memory module source.

Maps each load target to a zero-argument provider that returns the names the
target defines. Every load is recorded, which lets tests assert on load order
and load counts.
"""

from collections.abc import Callable, Mapping

from shortinit.interfaces.module_source import AbstractModuleSource

Provider = Callable[[], Mapping[str, object]]


class UnknownTargetError(LookupError):
    """Raised when a target is not in the manifest."""

    def __init__(self, target: str) -> None:
        super().__init__(f"No load target named {target!r}")
        self.target = target


class InMemoryModuleSource(AbstractModuleSource):
    """Module source backed by a manifest of providers.

    Args:
        manifest: Mapping of target name to provider.
    """

    def __init__(self, manifest: Mapping[str, Provider]) -> None:
        self._manifest = dict(manifest)
        self.loads: list[str] = []

    def load(self, target: str) -> Mapping[str, object]:
        try:
            provider = self._manifest[target]
        except KeyError:
            raise UnknownTargetError(target) from None
        self.loads.append(target)
        return provider()
