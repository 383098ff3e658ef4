"""Unit tests for the request-parse override."""

import pytest

from shortinit.adapters.core import MemoryCore, MemoryRequest
from shortinit.domain.hooks import return_false
from shortinit.service_layer.loader import SubsystemLoader
from shortinit.service_layer.parse_override import (
    PARSE_GUARD_PRIORITY,
    ParseRequestGuard,
    install_parse_request_guard,
)
from shortinit.service_layer.suppressor import suppress_default_hooks

# pylint: disable=magic-value-comparison

FRONT_LOADED = [
    "class_post",
    "class_query",
    "rewrite",
    "class_rewrite",
    "link_template",
    "query",
    "post",
    "taxonomy",
    "feed",
    "comment",
    "option",
]


def make_guard(core: MemoryCore) -> ParseRequestGuard:
    return ParseRequestGuard(SubsystemLoader(core.capabilities, core.module_source))


def test_false_decision_loads_nothing(core):
    """A false decision is returned untouched."""
    env = core.create_environment()
    assert make_guard(core)(False, env, ()) is False
    assert core.module_source.loads == []
    assert env.queries.main is None


def test_missing_environment_is_rejected(core):
    """The filter needs the environment to fill its query slots."""
    with pytest.raises(TypeError):
        make_guard(core)(True)


def test_everything_absent_is_front_loaded_in_order(core):
    """All parser dependencies are loaded in dependency order."""
    env = core.create_environment()
    assert make_guard(core)(True, env, ()) is True
    assert core.module_source.loads == FRONT_LOADED
    assert env.queries.main is not None
    assert env.queries.main is env.queries.current
    assert env.queries.rewrite is not None


def test_everything_present_loads_nothing():
    """Present dependencies are not reloaded."""
    core = MemoryCore(preload=FRONT_LOADED)
    env = core.create_environment()
    make_guard(core)(True, env, ())
    assert core.module_source.loads == FRONT_LOADED
    assert env.queries.main is env.queries.current


def test_present_post_class_loads_only_the_query_class():
    """Each query-object dependency is probed on its own."""
    core = MemoryCore(preload=["class_post"])
    env = core.create_environment()
    make_guard(core)(True, env, ())
    assert core.module_source.loads == FRONT_LOADED
    assert core.module_source.loads.count("class_post") == 1
    assert env.queries.main is not None


def test_existing_current_query_is_kept(core):
    """Only the main slot is filled when current is already set."""
    env = core.create_environment()
    sentinel = object()
    env.queries.current = sentinel
    make_guard(core)(True, env, ())
    assert env.queries.current is sentinel
    assert env.queries.main is not sentinel


def test_existing_rewrite_skips_rewrite_and_links(core):
    """A present rewrite engine skips step (b) entirely."""
    env = core.create_environment()
    env.queries.rewrite = object()
    make_guard(core)(True, env, ())
    assert "rewrite" not in core.module_source.loads
    assert "link_template" not in core.module_source.loads


def test_second_call_loads_nothing_more(core):
    """Each dependency is loaded once per process."""
    env = core.create_environment()
    guard = make_guard(core)
    guard(True, env, ())
    guard(True, core.create_environment(), ())
    assert core.module_source.loads == FRONT_LOADED


def test_installed_after_return_false(core):
    """Registered late, the guard sees the skip decision and does nothing."""
    core.hooks.add_filter("do_parse_request", return_false)
    loader = SubsystemLoader(core.capabilities, core.module_source)
    install_parse_request_guard(core.hooks, loader)
    assert [h.priority for h in core.hooks.hooks("do_parse_request")] == [
        10,
        PARSE_GUARD_PRIORITY,
    ]
    assert core.create_environment().parse_request(("boot",)) is False
    assert core.module_source.loads == []


def test_guard_lets_the_parser_run():
    """With the guard installed, the core's parser succeeds."""
    core = MemoryCore(MemoryRequest.from_url("/boot/chelsea"))
    suppress_default_hooks(core.hooks, core.capabilities)
    loader = SubsystemLoader(core.capabilities, core.module_source)
    install_parse_request_guard(core.hooks, loader)
    env = core.create_environment()
    assert env.parse_request(("boot",)) is True
    assert env.query_vars == {"boot": "chelsea"}
