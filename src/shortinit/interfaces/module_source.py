"""Module source interface: how load targets are turned into capabilities."""

import abc
from collections.abc import Mapping


class AbstractModuleSource(abc.ABC):
    """Contract for loading one target of the content core."""

    @abc.abstractmethod
    def load(self, target: str) -> Mapping[str, object]:
        """Load `target` and return the names it provides.

        Args:
            target: Load target name (e.g. ``"pluggable"``).

        Returns:
            Mapping of provided capability names to the objects behind them.

        Raises:
            Exception: Whatever the underlying load raises. Failures are fatal
                and are not caught by the bootloader.
        """
