"""Request-parse override: front-load what the core's parser needs.

Without the core's full startup, letting its request parser run crashes on
the first undefined function it reaches. This ``do_parse_request`` filter
loads exactly the missing pieces, in dependency order, before parsing starts.
It never turns parsing on: a false decision is returned untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from shortinit.domain.capabilities import (
    CONTENT_QUERY,
    HOME_URL,
    LINK_TEMPLATE_TARGETS,
    PARSE_SUPPORT,
    QUERY_OBJECT_SUPPORT,
    REWRITE,
    REWRITE_TARGETS,
)
from shortinit.interfaces.core import AbstractEnvironment
from shortinit.interfaces.hooks import AbstractHookRegistry

from .loader import SubsystemLoader

logger = logging.getLogger(__name__)

PARSE_GUARD_PRIORITY = 99


class ParseRequestGuard:
    """``do_parse_request`` filter that loads the parser's dependencies.

    Args:
        loader: Loader used for every dependency.
    """

    def __init__(self, loader: SubsystemLoader) -> None:
        self.loader = loader

    def __call__(
        self,
        doing: bool = True,
        environment: AbstractEnvironment | None = None,
        extra_query_vars: Sequence[str] = (),  # pylint: disable=unused-argument
    ) -> bool:
        if not doing:
            return doing
        if environment is None:
            raise TypeError("do_parse_request must pass the request environment")

        capabilities = self.loader.capabilities
        queries = environment.queries

        # (a) primary query, aliased into the current slot
        if queries.main is None:
            for probe, targets in QUERY_OBJECT_SUPPORT:
                self.loader.ensure_loaded(probe, targets)
        queries.ensure_main(lambda: capabilities.symbol(CONTENT_QUERY)())

        # (b) rewrite engine and link helpers
        if queries.rewrite is None:
            self.loader.ensure_loaded(REWRITE, REWRITE_TARGETS)
            queries.rewrite = capabilities.symbol(REWRITE)()
            self.loader.ensure_loaded(HOME_URL, LINK_TEMPLATE_TARGETS)

        # (c)-(h) query, post type, taxonomy, feed, comment and option functions
        for probe, targets in PARSE_SUPPORT:
            self.loader.ensure_loaded(probe, targets)

        return doing

    def __repr__(self) -> str:
        return "ParseRequestGuard()"


def install_parse_request_guard(
    hooks: AbstractHookRegistry, loader: SubsystemLoader
) -> ParseRequestGuard:
    """Register a `ParseRequestGuard` late on ``do_parse_request``."""
    guard = ParseRequestGuard(loader)
    hooks.add_filter("do_parse_request", guard, PARSE_GUARD_PRIORITY, 3)
    return guard
