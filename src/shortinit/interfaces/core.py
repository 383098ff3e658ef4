"""Content core interfaces.

Defines the narrow contract the bootloader consumes from the content core:
the request environment, the content query, the response primitives and the
core facade that ties them together.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping, Sequence
from typing import Any

from shortinit.domain.capabilities import CapabilityRegistry
from shortinit.domain.request import QuerySlots

from .hooks import AbstractHookRegistry
from .module_source import AbstractModuleSource


class AbstractContentQuery(abc.ABC):
    """Contract for the object that executes the content lookup."""

    found: bool

    @abc.abstractmethod
    def query(self, query_vars: Mapping[str, Any]) -> list[Any]:
        """Run the lookup for `query_vars` and return the matched items."""

    @abc.abstractmethod
    def set_404(self) -> None:
        """Mark the query as not found."""


class AbstractResponse(abc.ABC):
    """Contract for the header/status/body primitives of the core."""

    @abc.abstractmethod
    def send_header(self, name: str, value: str) -> None:
        """Emit one response header."""

    @abc.abstractmethod
    def nocache_headers(self) -> None:
        """Emit the headers that stop clients and proxies caching the response."""

    @abc.abstractmethod
    def status_header(self, code: int) -> None:
        """Emit the HTTP status line for `code`."""

    @abc.abstractmethod
    def write(self, body: str) -> None:
        """Emit response body text."""


class AbstractEnvironment(abc.ABC):
    """Contract for the request environment.

    Attributes:
        parsed: Whether the request was parsed.
        query_vars: Matched query variables.
        query_string: Canonical query string built from `query_vars`.
        status_header: Status code to send, once resolved.
        queries: Main/current query and rewrite engine slots.
    """

    parsed: bool
    query_vars: dict[str, Any]
    query_string: str
    status_header: int | None
    queries: QuerySlots

    @abc.abstractmethod
    def init(self) -> None:
        """Set up the current user (authentication state, cookie identity)."""

    @abc.abstractmethod
    def parse_request(self, extra_query_vars: Sequence[str] = ()) -> bool:
        """Parse the request into query variables.

        Returns:
            bool: True if the request was parsed.
        """

    @abc.abstractmethod
    def send_headers(self) -> None:
        """Emit the basic headers for the request."""

    @abc.abstractmethod
    def build_query_string(self) -> None:
        """Set `query_string` from `query_vars`."""

    @abc.abstractmethod
    def handle_404(self) -> None:
        """Run the core's own not-found handling."""

    @abc.abstractmethod
    def register_globals(self) -> None:
        """Publish the parsed query variables for template consumers."""


class AbstractCore(abc.ABC):
    """Facade over the content core used by the bootstrap and the driver."""

    hooks: AbstractHookRegistry
    capabilities: CapabilityRegistry
    module_source: AbstractModuleSource
    response: AbstractResponse

    @abc.abstractmethod
    def create_environment(self) -> AbstractEnvironment:
        """Create the environment for the current request."""

    @abc.abstractmethod
    def is_multisite(self) -> bool:
        """Return whether the core runs a network of sites."""

    @abc.abstractmethod
    def plugin_directory_constants(self) -> None:
        """Define the plugin directory constants used by the cookie constants."""

    @abc.abstractmethod
    def ms_cookie_constants(self) -> None:
        """Define the network-wide cookie path constants."""

    @abc.abstractmethod
    def cookie_constants(self) -> None:
        """Define the authentication cookie constants."""

    @abc.abstractmethod
    def ssl_constants(self) -> None:
        """Define the forced-SSL constants."""
