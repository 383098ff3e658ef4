"""Bootstrap (composition root) for SHORTINIT.

Runs the process-start sequence of the bootloader against a content core:
registers the deployment overrides and the query-var extender, suppresses
default hooks of unloaded features, loads the user subsystem, derives the
cookie constants and installs the request-parse override. Returns an
`AppContainer` whose lifecycle driver serves the request.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `shortinit.adapters`, `shortinit.service_layer`,
  `shortinit.interfaces`, `shortinit.domain`, and `shortinit.config`.
- Inner layers must not import `shortinit.bootstrap`.
"""

from shortinit.service_layer.not_found import NotFoundPolicy, always_found, never_found

from .bootstrap import AppContainer, bootstrap

__all__ = [
    "AppContainer",
    "NotFoundPolicy",
    "always_found",
    "bootstrap",
    "never_found",
]
