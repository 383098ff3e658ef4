"""Custom not-found policy used when the core's 404 handler is bypassed."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from shortinit.domain.request import RequestContext
from shortinit.interfaces.core import AbstractResponse

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_NOT_FOUND = 404

FoundPredicate = Callable[[RequestContext], bool]


def always_found(context: RequestContext) -> bool:  # pylint: disable=unused-argument
    """Shipped business rule: every request resolves to found content."""
    return True


def never_found(context: RequestContext) -> bool:  # pylint: disable=unused-argument
    """Business rule resolving every request to not found."""
    return False


@dataclass(frozen=True)
class NotFoundPolicy:
    """Resolve the status code of a request with a pluggable business rule.

    The status starts at 404 and becomes 200 when `is_found` holds. A
    request that stays at 404 marks the current query as not found (if the
    request was parsed) and is sent with no-cache headers. The status line is
    always sent.
    """

    is_found: FoundPredicate = always_found

    def resolve(self, context: RequestContext, response: AbstractResponse) -> int:
        """Resolve, record and send the status code of `context`.

        Returns:
            int: The resolved status code.
        """
        environment = context.environment
        environment.status_header = HTTP_NOT_FOUND

        if self.is_found(context):
            environment.status_header = HTTP_OK

        if environment.status_header == HTTP_NOT_FOUND:
            query = environment.queries.current
            if environment.parsed and callable(getattr(query, "set_404", None)):
                query.set_404()
            response.nocache_headers()

        logger.debug("Resolved status %s", environment.status_header)
        response.status_header(environment.status_header)
        return environment.status_header
