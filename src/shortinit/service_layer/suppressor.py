"""Hook suppressor: unhook default feature hooks whose module is missing.

The core wires these hooks at startup regardless of which feature modules a
selective bootstrap loads. Firing one into a module that was never loaded is
fatal, so each feature group is removed in one batch when its single
presence probe fails, and left untouched when it passes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from shortinit.domain.capabilities import CapabilityRegistry
from shortinit.domain.default_wiring import FEATURE_GROUPS, Feature, FeatureGroup
from shortinit.interfaces.hooks import AbstractHookRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuppressionReport:
    """What the suppressor did.

    Attributes:
        removed: Number of hooks removed per suppressed feature.
        kept: Features whose module is loaded and whose hooks were left alone.
    """

    removed: dict[Feature, int] = field(default_factory=dict)
    kept: tuple[Feature, ...] = ()

    @property
    def suppressed(self) -> tuple[Feature, ...]:
        return tuple(self.removed)


def suppress_group(hooks: AbstractHookRegistry, group: FeatureGroup) -> int:
    """Remove every hook of `group` and return how many were registered."""
    removed = 0
    for spec in group.hooks:
        if hooks.unregister(spec):
            removed += 1
            logger.debug(
                "Removed %s %s (priority %s)", spec.name, spec.callback, spec.priority
            )
        else:
            logger.debug(
                "%s %s (priority %s) was not registered",
                spec.name,
                spec.callback,
                spec.priority,
            )
    return removed


def suppress_default_hooks(
    hooks: AbstractHookRegistry,
    capabilities: CapabilityRegistry,
    groups: Iterable[FeatureGroup] = FEATURE_GROUPS,
) -> SuppressionReport:
    """Suppress the default hooks of every feature group whose probe fails.

    Args:
        hooks: The core's hook registry.
        capabilities: Registry answering the presence probes.
        groups: Feature groups to consider.

    Returns:
        SuppressionReport: Removed counts and kept features.
    """
    removed: dict[Feature, int] = {}
    kept: list[Feature] = []
    for group in groups:
        if capabilities.has(group.probe):
            kept.append(group.feature)
            continue
        removed[group.feature] = suppress_group(hooks, group)
        logger.debug(
            "Suppressed %s: %d hook(s) removed",
            group.feature.value,
            removed[group.feature],
        )
    return SuppressionReport(removed=removed, kept=tuple(kept))
