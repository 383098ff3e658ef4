"""Request lifecycle driver.

Drives one request through Init, Parse, Headers, QueryString, Query,
ResolveStatus, Publish, Notify and Output. Each state calls into the core;
nothing is retried and any failure propagates after being logged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from shortinit.domain.capabilities import SET_CURRENT_USER
from shortinit.domain.hooks import return_true
from shortinit.domain.request import LifecycleState, RequestContext
from shortinit.interfaces.core import AbstractCore

from .not_found import NotFoundPolicy

logger = logging.getLogger(__name__)

TERMINAL_OUTPUT = "\U0001f97e"  # hiking boot
COMPLETION_ACTION = "wp"


class LifecycleDriver:
    """Run requests against a bootstrapped core.

    Args:
        core: The content core.
        policy: Not-found policy used when ``pre_handle_404`` is overridden.
        extra_query_vars: Extra query variables handed to the request parser.
    """

    def __init__(
        self,
        core: AbstractCore,
        policy: NotFoundPolicy | None = None,
        extra_query_vars: Sequence[str] = (),
    ) -> None:
        self.core = core
        self.policy = policy or NotFoundPolicy()
        self.extra_query_vars = tuple(extra_query_vars)

    def run(self) -> RequestContext:
        """Handle one request and return its context.

        Raises:
            Exception: Whatever the core raises; logged, then re-raised.
        """
        context = RequestContext(
            self.core.create_environment(), extra_query_vars=self.extra_query_vars
        )
        steps = (
            (LifecycleState.INIT, self._init),
            (LifecycleState.PARSE, self._parse),
            (LifecycleState.HEADERS, self._headers),
            (LifecycleState.QUERY_STRING, self._query_string),
            (LifecycleState.QUERY, self._query),
            (LifecycleState.RESOLVE_STATUS, self._resolve_status),
            (LifecycleState.PUBLISH, self._publish),
            (LifecycleState.NOTIFY, self._notify),
            (LifecycleState.OUTPUT, self._output),
        )
        for state, step in steps:
            context.enter(state)
            try:
                step(context)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Request failed in state %s", state.value)
                raise
        return context

    def custom_not_found_active(self) -> bool:
        """Return whether the deployment overrides the core's 404 handling."""
        return self.core.hooks.has_filter("pre_handle_404", return_true)

    # --- States ---

    def _init(self, context: RequestContext) -> None:
        if self.core.capabilities.has(SET_CURRENT_USER):
            context.environment.init()
        else:
            logger.debug("No user subsystem loaded; skipping user init")

    def _parse(self, context: RequestContext) -> None:
        environment = context.environment
        environment.parsed = environment.parse_request(context.extra_query_vars)
        logger.debug(
            "Parsed=%s, query vars=%s", environment.parsed, environment.query_vars
        )

    def _headers(self, context: RequestContext) -> None:
        context.environment.send_headers()

    def _query_string(self, context: RequestContext) -> None:
        context.environment.build_query_string()

    def _query(self, context: RequestContext) -> None:
        environment = context.environment
        main = environment.queries.main
        if environment.parsed and callable(getattr(main, "query", None)):
            main.query(environment.query_vars)

    def _resolve_status(self, context: RequestContext) -> None:
        if self.custom_not_found_active():
            self.policy.resolve(context, self.core.response)
        else:
            context.environment.handle_404()

    def _publish(self, context: RequestContext) -> None:
        if context.environment.parsed:
            context.environment.register_globals()

    def _notify(self, context: RequestContext) -> None:
        self.core.hooks.do_action(COMPLETION_ACTION, context.environment)

    def _output(self, context: RequestContext) -> None:
        self.core.response.write(TERMINAL_OUTPUT)
        context.output = TERMINAL_OUTPUT
