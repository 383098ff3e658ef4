"""Request-scoped state: query slots, lifecycle states and the request context."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from shortinit.interfaces.core import AbstractEnvironment

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    """States of the request lifecycle, in the order they are visited."""

    INIT = "init"
    PARSE = "parse"
    HEADERS = "headers"
    QUERY_STRING = "query_string"
    QUERY = "query"
    RESOLVE_STATUS = "resolve_status"
    PUBLISH = "publish"
    NOTIFY = "notify"
    OUTPUT = "output"


@dataclass
class QuerySlots:
    """The main query, the current query and the rewrite engine of a request.

    ``main`` is the primary request's query; ``current`` is the query other
    code reads. Once both are set they are the same object.
    """

    main: Any = None
    current: Any = None
    rewrite: Any = None

    def ensure_main(self, factory: Callable[[], Any]) -> Any:
        """Create the main query if missing and alias the current slot to it.

        An existing current query is left alone.

        Args:
            factory: Zero-argument constructor for the query object.

        Returns:
            The main query.
        """
        if self.main is None:
            self.main = factory()
            logger.debug("Created main query %r", self.main)
        if self.current is None:
            self.current = self.main
        return self.main


@dataclass
class RequestContext:
    """Everything one request carries from Init to Output.

    Attributes:
        environment: The request environment (parsed flag, query vars, status).
        extra_query_vars: Extra query variables handed to the request parser.
        states: Lifecycle states visited so far, in order.
        output: Terminal output emitted by the Output state, if reached.
    """

    environment: AbstractEnvironment
    extra_query_vars: tuple[str, ...] = ()
    states: list[LifecycleState] = field(default_factory=list)
    output: str | None = None

    def enter(self, state: LifecycleState) -> None:
        """Record a state transition."""
        logger.debug("Request lifecycle: %s", state.value)
        self.states.append(state)
