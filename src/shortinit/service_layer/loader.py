"""Subsystem loader: load a capability's targets only when it is missing."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from shortinit.domain.capabilities import CapabilityRegistry
from shortinit.interfaces.module_source import AbstractModuleSource

logger = logging.getLogger(__name__)

Probe = Callable[[], bool]


class SubsystemLoader:
    """Load targets from a module source into a capability registry.

    Args:
        capabilities: Registry recording what has been loaded.
        source: Module source that performs the actual loads.
    """

    def __init__(
        self, capabilities: CapabilityRegistry, source: AbstractModuleSource
    ) -> None:
        self.capabilities = capabilities
        self.source = source
        self.load_count = 0

    def ensure_loaded(self, probe: Probe | str, targets: Sequence[str]) -> None:
        """Load `targets` in order unless `probe` reports the capability present.

        A target already loaded is never loaded again, so repeated calls
        (from any call site) load each target at most once. The probe is not
        re-checked after loading and load errors propagate unchanged.

        Args:
            probe: Zero-argument predicate, or a capability name to probe.
            targets: Load targets providing the capability, in dependency order.
        """
        if isinstance(probe, str):
            probe = self.capabilities.probe(probe)
        if probe():
            return
        for target in targets:
            if self.capabilities.is_loaded(target):
                continue
            logger.debug("Loading %s", target)
            provides = self.source.load(target)
            self.capabilities.record(target, provides)
            self.load_count += 1
