"""Capability names and the load targets that provide them.

A capability is a name a loaded target provides (a function or class of the
content core). Probing a capability answers "has the module that defines
this been loaded yet?". Target tuples are ordered: later targets may depend
on earlier ones.
"""

from collections.abc import Callable, Mapping
from functools import partial

# --- Legacy request variables ---

ADMIN_CHECK = "is_admin"
PAGENOW = "pagenow"
VARS_TARGETS = ("vars",)

# --- User / session / auth ---

SET_CURRENT_USER = "set_current_user"
USER_TARGETS = (
    "pluggable",
    "user",
    "capabilities",
    "class_query",
    "class_role",
    "class_roles",
    "class_user",
    "class_session_tokens",
    "class_user_meta_session_tokens",
)

# --- Request parsing dependencies, in the order they are front-loaded ---

CONTENT_QUERY = "ContentQuery"
POST_CLASS = "Post"
POST_CLASS_TARGETS = ("class_post",)
CONTENT_QUERY_TARGETS = ("class_query",)
QUERY_OBJECT_SUPPORT = (
    (POST_CLASS, POST_CLASS_TARGETS),
    (CONTENT_QUERY, CONTENT_QUERY_TARGETS),
)

REWRITE = "Rewrite"
REWRITE_TARGETS = ("rewrite", "class_rewrite")

HOME_URL = "home_url"
LINK_TEMPLATE_TARGETS = ("link_template",)

IS_404 = "is_404"
QUERY_FUNCTIONS_TARGETS = ("query",)

GET_POST_TYPES = "get_post_types"
POST_FUNCTIONS_TARGETS = ("post",)

GET_TAXONOMIES = "get_taxonomies"
TAXONOMY_TARGETS = ("taxonomy",)

GET_DEFAULT_FEED = "get_default_feed"
FEED_TARGETS = ("feed",)

GET_LAST_COMMENT_MODIFIED = "get_lastcommentmodified"
COMMENT_TARGETS = ("comment",)

GET_OPTION = "get_option"
OPTION_TARGETS = ("option",)

# (probe, targets) pairs for steps (c) to (h) of the parse override.
PARSE_SUPPORT = (
    (IS_404, QUERY_FUNCTIONS_TARGETS),
    (GET_POST_TYPES, POST_FUNCTIONS_TARGETS),
    (GET_TAXONOMIES, TAXONOMY_TARGETS),
    (GET_DEFAULT_FEED, FEED_TARGETS),
    (GET_LAST_COMMENT_MODIFIED, COMMENT_TARGETS),
    (GET_OPTION, OPTION_TARGETS),
)


class UnknownCapabilityError(LookupError):
    """Raised when a capability is looked up but no loaded target provides it."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Capability {name!r} is not provided by any loaded target")
        self.name = name


class CapabilityRegistry:
    """The set of loaded targets and the capabilities they provide.

    Replaces "is this function defined?" reflection with explicit
    bookkeeping: each loaded target is recorded once, together with the
    names it provides.
    """

    def __init__(self) -> None:
        self._loaded: list[str] = []
        self._provided: dict[str, object] = {}

    @property
    def loaded_targets(self) -> tuple[str, ...]:
        """Targets loaded so far, in load order."""
        return tuple(self._loaded)

    def is_loaded(self, target: str) -> bool:
        return target in self._loaded

    def has(self, name: str) -> bool:
        """Return whether capability `name` is available."""
        return name in self._provided

    def probe(self, name: str) -> Callable[[], bool]:
        """Return a zero-argument predicate for capability `name`."""
        return partial(self.has, name)

    def symbol(self, name: str) -> object:
        """Return the object behind capability `name`.

        Raises:
            UnknownCapabilityError: If no loaded target provides `name`.
        """
        try:
            return self._provided[name]
        except KeyError:
            raise UnknownCapabilityError(name) from None

    def record(self, target: str, provides: Mapping[str, object]) -> None:
        """Record that `target` was loaded and provides `provides`."""
        if target not in self._loaded:
            self._loaded.append(target)
        self._provided.update(provides)

    def provide(self, name: str, value: object) -> None:
        """Make a single capability available without a load target.

        Used for names the core defines during its own short startup.
        """
        self._provided[name] = value
