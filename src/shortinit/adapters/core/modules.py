"""Load-target manifest of the in-memory reference core.

Each target provides a handful of names. The user, parser-support and
feature targets mirror the split of the real core's files so that the
bootloader's probes and load orders can be exercised faithfully.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any

from shortinit.domain.default_wiring import FEATURE_GROUPS, FeatureGroup

if TYPE_CHECKING:
    from .memory import MemoryCore

Provider = Callable[[], Mapping[str, object]]


@dataclass
class MemoryUser:
    """A user known to the reference core."""

    user_id: str
    roles: list[str] = field(default_factory=lambda: ["subscriber"])


@dataclass
class MemoryRole:
    """A named role and its capabilities."""

    name: str
    capabilities: dict[str, bool] = field(default_factory=dict)


class MemorySessionTokens:
    """Per-user session token store."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        self.tokens: dict[str, dict[str, Any]] = {}


def _passthrough(*args: Any) -> Any:
    """Default feature callback: return the filtered value unchanged."""
    return args[0] if args else None


def _feature_provider(group: FeatureGroup) -> Provider:
    names = {spec.callback for spec in group.hooks} | {group.probe}
    return lambda: {name: _passthrough for name in sorted(names)}


def build_manifest(core: MemoryCore) -> dict[str, Provider]:
    """Build the target → provider manifest bound to `core`."""
    # pylint: disable=import-outside-toplevel
    from .memory import MemoryContentQuery, MemoryPost, MemoryRewrite

    def set_current_user(user_id: str | None) -> MemoryUser | None:
        core.current_user = user_id
        core.hooks.do_action("set_current_user")
        return MemoryUser(user_id) if user_id else None

    def is_404() -> bool:
        env = core.environment
        return env is not None and bool(getattr(env.queries.current, "is_404", False))

    def home_url(path: str = "") -> str:
        return core.options["home"].rstrip("/") + "/" + path.lstrip("/")

    manifest: dict[str, Provider] = {
        "vars": lambda: {"pagenow": core.request.path},
        # user / session / auth
        "pluggable": lambda: {
            "set_current_user": set_current_user,
            "get_current_user": lambda: core.current_user,
        },
        "user": lambda: {"get_user_by": lambda user_id: MemoryUser(user_id)},
        "capabilities": lambda: {"current_user_can": lambda cap: False},
        "class_query": lambda: {"ContentQuery": partial(MemoryContentQuery, core)},
        "class_role": lambda: {"Role": MemoryRole},
        "class_roles": lambda: {"Roles": dict},
        "class_user": lambda: {"User": MemoryUser},
        "class_session_tokens": lambda: {"SessionTokens": MemorySessionTokens},
        "class_user_meta_session_tokens": lambda: {
            "UserMetaSessionTokens": MemorySessionTokens
        },
        # request parsing support
        "class_post": lambda: {"Post": MemoryPost},
        "rewrite": lambda: {"rewrite_rules": lambda: core.options["rewrite_rules"]},
        "class_rewrite": lambda: {
            "Rewrite": lambda: MemoryRewrite(core.options["rewrite_rules"])
        },
        "link_template": lambda: {"home_url": home_url},
        "query": lambda: {"is_404": is_404},
        "post": lambda: {"get_post_types": lambda: ("post", "page")},
        "taxonomy": lambda: {"get_taxonomies": lambda: ("category", "post_tag")},
        "feed": lambda: {"get_default_feed": lambda: "rss2"},
        "comment": lambda: {"get_lastcommentmodified": lambda: None},
        "option": lambda: {"get_option": core.options.get},
    }
    for group in FEATURE_GROUPS:
        manifest[group.feature.value] = _feature_provider(group)
    return manifest
