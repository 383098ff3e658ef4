"""In-memory reference content core.

A small, dependency-free stand-in for the content core this bootloader sits
on. It is meant for the CLI demo, tests and local experiments: it keeps posts,
options and published globals in dicts, records every header and status line
instead of sending them, and loads its subsystems from the manifest in
`shortinit.adapters.core.modules`.

Key behaviors
-------------
- **Default wiring**: on construction the core registers every hook of
  `FEATURE_GROUPS` by callback *name*, exactly like a full startup would,
  whether or not the feature modules are loaded.
- **Short startup**: only the targets listed in ``preload`` are loaded; all
  other capabilities must be loaded on demand.
- **Strict parser**: `MemoryEnvironment.parse_request` touches the rewrite
  engine and the option, post-type and taxonomy accessors, so a parser run
  without its dependencies fails with `UnknownCapabilityError`.
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit

from shortinit.adapters.hooks import InMemoryHookRegistry
from shortinit.adapters.module_source import InMemoryModuleSource
from shortinit.domain.capabilities import (
    ADMIN_CHECK,
    GET_OPTION,
    GET_POST_TYPES,
    GET_TAXONOMIES,
    REWRITE,
    SET_CURRENT_USER,
    CapabilityRegistry,
    UnknownCapabilityError,
)
from shortinit.domain.default_wiring import FEATURE_GROUPS
from shortinit.domain.request import QuerySlots
from shortinit.interfaces.core import (
    AbstractContentQuery,
    AbstractCore,
    AbstractEnvironment,
    AbstractResponse,
)

from .modules import build_manifest

logger = logging.getLogger(__name__)

# pylint: disable=too-many-instance-attributes

PUBLIC_QUERY_VARS = (
    "m",
    "p",
    "posts",
    "w",
    "cat",
    "withcomments",
    "withoutcomments",
    "s",
    "search",
    "exact",
    "sentence",
    "page",
    "paged",
    "more",
    "tb",
    "pb",
    "author",
    "order",
    "orderby",
    "year",
    "monthnum",
    "day",
    "hour",
    "minute",
    "second",
    "name",
    "category_name",
    "tag",
    "feed",
    "author_name",
    "pagename",
    "page_id",
    "error",
    "attachment",
    "attachment_id",
    "subpost",
    "subpost_id",
    "preview",
    "robots",
    "taxonomy",
    "term",
    "cpage",
    "post_type",
    "embed",
)

DEFAULT_OPTIONS: dict[str, Any] = {
    "home": "http://localhost",
    "siteurl": "http://localhost",
    "blog_charset": "UTF-8",
    "permalink_structure": "/%postname%/",
    "rewrite_rules": {r"boot/([^/]+)": {"boot": "$1"}},
}

NOCACHE_HEADERS = (
    ("Expires", "Wed, 11 Jan 1984 05:00:00 GMT"),
    ("Cache-Control", "no-cache, must-revalidate, max-age=0"),
)


class MemoryPost(dict):
    """A post: a mapping of field name to value."""


@dataclass
class MemoryRequest:
    """The inbound request: path, query parameters and cookies."""

    path: str = "/"
    params: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_url(cls, url: str, cookies: Mapping[str, str] | None = None) -> MemoryRequest:
        parts = urlsplit(url)
        return cls(
            path=parts.path or "/",
            params=dict(parse_qsl(parts.query)),
            cookies=dict(cookies or {}),
        )


class MemoryRewrite:
    """Rewrite engine matching request paths against regex rules.

    Args:
        rules: Mapping of path regex to query-var template. Template values of
            the form ``"$N"`` are replaced by the Nth match group.
    """

    def __init__(self, rules: Mapping[str, Mapping[str, str]]) -> None:
        self.rules = dict(rules)

    def match(self, path: str) -> dict[str, str]:
        """Return the query vars of the first rule matching `path`."""
        path = path.strip("/")
        for pattern, template in self.rules.items():
            if m := re.fullmatch(pattern, path):
                return {
                    key: m.group(int(value[1:])) if value.startswith("$") else value
                    for key, value in template.items()
                }
        return {}


class RecordingResponse(AbstractResponse):
    """Response that records headers, status lines and body instead of sending."""

    def __init__(self) -> None:
        self.headers: list[tuple[str, str]] = []
        self.status_codes: list[int] = []
        self.nocache_count = 0
        self.body: list[str] = []

    @property
    def status(self) -> int | None:
        """Last status code sent, if any."""
        return self.status_codes[-1] if self.status_codes else None

    @property
    def output(self) -> str:
        return "".join(self.body)

    def send_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def nocache_headers(self) -> None:
        self.nocache_count += 1
        for name, value in NOCACHE_HEADERS:
            self.send_header(name, value)

    def status_header(self, code: int) -> None:
        self.status_codes.append(code)

    def write(self, body: str) -> None:
        self.body.append(body)


class MemoryContentQuery(AbstractContentQuery):
    """Content query over the core's posts.

    A post matches when every query var equals the post field of the same
    name. No query vars match every post.
    """

    def __init__(self, core: MemoryCore) -> None:
        self._core = core
        self.query_vars: dict[str, Any] = {}
        self.posts: list[MemoryPost] = []
        self.found = False
        self.is_404 = False
        self.set_404_calls = 0

    def query(self, query_vars: Mapping[str, Any]) -> list[Any]:
        self.query_vars = dict(query_vars)
        posts = [
            post
            for post in self._core.posts
            if all(str(post.get(k)) == str(v) for k, v in self.query_vars.items())
        ]
        self.posts = list(self._core.hooks.apply_filters("the_posts", posts, self))
        self.found = bool(self.posts)
        logger.debug("Query %s matched %d post(s)", self.query_vars, len(self.posts))
        return self.posts

    def set_404(self) -> None:
        self.set_404_calls += 1
        self.is_404 = True
        self.found = False


class MemoryEnvironment(AbstractEnvironment):
    """Request environment of the reference core."""

    def __init__(self, core: MemoryCore) -> None:
        self.core = core
        self.parsed = False
        self.query_vars: dict[str, Any] = {}
        self.query_string = ""
        self.status_header: int | None = None
        self.queries = QuerySlots()

    def init(self) -> None:
        set_current_user = self.core.capabilities.symbol(SET_CURRENT_USER)
        set_current_user(self.core.request.cookies.get("user_id"))

    def parse_request(self, extra_query_vars: Sequence[str] = ()) -> bool:
        hooks = self.core.hooks
        if not hooks.apply_filters("do_parse_request", True, self, extra_query_vars):
            return False

        get_option = self.core.capabilities.symbol(GET_OPTION)
        if self.queries.rewrite is None:
            raise UnknownCapabilityError(REWRITE)

        public = hooks.apply_filters("query_vars", list(PUBLIC_QUERY_VARS))
        recognized = list(dict.fromkeys([*public, *extra_query_vars]))

        params: dict[str, Any] = {}
        if get_option("permalink_structure"):
            params.update(self.queries.rewrite.match(self.core.request.path))
        params.update(self.core.request.params)
        query_vars = {name: params[name] for name in recognized if name in params}

        post_types = self.core.capabilities.symbol(GET_POST_TYPES)()
        if query_vars.get("post_type") not in (None, *post_types):
            del query_vars["post_type"]
        taxonomies = self.core.capabilities.symbol(GET_TAXONOMIES)()
        if query_vars.get("taxonomy") not in (None, *taxonomies):
            del query_vars["taxonomy"]

        self.query_vars = hooks.apply_filters("request", query_vars)
        hooks.do_action("parse_request", self)
        return True

    def send_headers(self) -> None:
        headers = {"Content-Type": f"text/html; charset={self.core.options['blog_charset']}"}
        headers = self.core.hooks.apply_filters("wp_headers", headers, self)
        for name, value in headers.items():
            self.core.response.send_header(name, value)
        self.core.hooks.do_action("send_headers", self)

    def build_query_string(self) -> None:
        query_string = urlencode(self.query_vars)
        self.query_string = self.core.hooks.apply_filters("query_string", query_string)

    def handle_404(self) -> None:
        query = self.queries.current
        if self.core.hooks.apply_filters("pre_handle_404", False, query):
            return
        if self.parsed and query is not None and query.found:
            self.status_header = 200
            self.core.response.status_header(200)
            return
        if query is not None:
            query.set_404()
        self.status_header = 404
        self.core.response.status_header(404)
        self.core.response.nocache_headers()

    def register_globals(self) -> None:
        self.core.published.update(self.query_vars)
        self.core.published["query_string"] = self.query_string
        query = self.queries.main
        if query is not None:
            self.core.published["posts"] = list(getattr(query, "posts", []))


class MemoryCore(AbstractCore):
    """In-memory content core.

    Args:
        request: The request to serve. Defaults to ``GET /``.
        posts: Content available to the content query.
        options: Overrides for `DEFAULT_OPTIONS`.
        multisite: Whether the core reports a network of sites.
        preload: Targets the core's own short startup loads.
        admin_functions: Whether the short startup defines ``is_admin``.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        request: MemoryRequest | None = None,
        *,
        posts: Iterable[Mapping[str, Any]] = (),
        options: Mapping[str, Any] | None = None,
        multisite: bool = False,
        preload: Iterable[str] = (),
        admin_functions: bool = True,
    ) -> None:
        self.request = request or MemoryRequest()
        self.posts = [MemoryPost(post) for post in posts]
        self.options = {**DEFAULT_OPTIONS, **(options or {})}
        self.constants: dict[str, Any] = {}
        self.published: dict[str, Any] = {}
        self.current_user: str | None = None
        self.environment: MemoryEnvironment | None = None
        self._multisite = multisite

        self.capabilities = CapabilityRegistry()
        self.hooks = InMemoryHookRegistry(resolver=self.capabilities.symbol)
        self.response = RecordingResponse()
        self.module_source = InMemoryModuleSource(build_manifest(self))

        if admin_functions:
            self.capabilities.provide(ADMIN_CHECK, lambda: False)
        for target in preload:
            self.capabilities.record(target, self.module_source.load(target))
        self.install_default_wiring()

    def install_default_wiring(self) -> None:
        """Register the default hooks of every feature group by name."""
        for group in FEATURE_GROUPS:
            for spec in group.hooks:
                self.hooks.register(spec)

    def create_environment(self) -> MemoryEnvironment:
        self.environment = MemoryEnvironment(self)
        return self.environment

    def is_multisite(self) -> bool:
        return self._multisite

    def plugin_directory_constants(self) -> None:
        siteurl = self.options["siteurl"]
        self.constants.setdefault("CONTENT_URL", f"{siteurl}/content")
        self.constants.setdefault("PLUGIN_URL", f"{siteurl}/content/plugins")

    def ms_cookie_constants(self) -> None:
        self.constants.setdefault("SITECOOKIEPATH", "/")
        self.constants.setdefault("ADMIN_COOKIE_PATH", "/admin")

    def cookie_constants(self) -> None:
        cookie_hash = hashlib.md5(
            self.options["siteurl"].encode("utf-8"), usedforsecurity=False
        ).hexdigest()
        self.constants.setdefault("COOKIEHASH", cookie_hash)
        self.constants.setdefault("AUTH_COOKIE", f"auth_{cookie_hash}")
        self.constants.setdefault("SECURE_AUTH_COOKIE", f"sec_auth_{cookie_hash}")
        self.constants.setdefault("LOGGED_IN_COOKIE", f"logged_in_{cookie_hash}")

    def ssl_constants(self) -> None:
        self.constants.setdefault("FORCE_SSL_ADMIN", False)
        self.constants.setdefault("FORCE_SSL_LOGIN", False)
