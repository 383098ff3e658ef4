"""Module source that imports load targets as Python modules.

A target ``"user"`` under package ``"mycms.core"`` is imported as
``mycms.core.user``. The capabilities it provides are the names in the
module's ``__all__``, or every public attribute when ``__all__`` is absent.
"""

import importlib
import logging
from collections.abc import Mapping

from shortinit.interfaces.module_source import AbstractModuleSource

logger = logging.getLogger(__name__)


class ImportlibModuleSource(AbstractModuleSource):
    """Load targets with `importlib.import_module`.

    Args:
        package: Dotted package that contains the target modules.
    """

    def __init__(self, package: str) -> None:
        self.package = package

    def load(self, target: str) -> Mapping[str, object]:
        module_name = f"{self.package}.{target}"
        logger.debug("Importing %s", module_name)
        module = importlib.import_module(module_name)
        names = getattr(module, "__all__", None)
        if names is None:
            names = [name for name in vars(module) if not name.startswith("_")]
        return {name: getattr(module, name) for name in names}
