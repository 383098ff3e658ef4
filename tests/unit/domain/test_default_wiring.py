"""Unit tests for the default wiring contract table."""

from collections import Counter

from shortinit.domain.default_wiring import (
    COMMENT_CLOSING,
    FEATURE_GROUPS,
    KSES,
    POST_FORMATS,
    REST_API,
    Feature,
)
from shortinit.domain.hooks import HookKind

# pylint: disable=magic-value-comparison


def test_one_group_per_feature():
    """Every feature has exactly one group and one probe."""
    assert [group.feature for group in FEATURE_GROUPS] == list(Feature)
    probes = [group.probe for group in FEATURE_GROUPS]
    assert len(set(probes)) == len(probes)


def test_group_sizes():
    """Group sizes match the core's default wiring."""
    assert len(KSES.hooks) == 2
    assert len(REST_API.hooks) == 17
    assert len(POST_FORMATS.hooks) == 5
    assert len(COMMENT_CLOSING.hooks) == 1


def test_no_duplicate_registrations():
    """(name, callback, priority) is unique across the table."""
    keys = Counter(
        (spec.name, spec.callback, spec.priority)
        for group in FEATURE_GROUPS
        for spec in group.hooks
    )
    assert all(count == 1 for count in keys.values())


def test_non_default_priorities_and_args():
    """The registrations with explicit priorities or arg counts are exact."""
    specs = {(s.name, s.callback): s for g in FEATURE_GROUPS for s in g.hooks}
    assert specs[("rest_api_init", "create_initial_rest_routes")].priority == 99
    assert specs[("template_redirect", "rest_output_link_header")].priority == 11
    assert specs[("wp_head", "rest_output_link_wp_head")].accepted_args == 0
    errors = "rest_authentication_errors"
    assert specs[(errors, "rest_application_password_check_errors")].priority == 90
    assert specs[(errors, "rest_cookie_check_errors")].priority == 100
    assert specs[("the_posts", "_close_comments_for_old_posts")].accepted_args == 2
    assert specs[("term_link", "_post_format_link")].accepted_args == 3


def test_post_format_hooks_are_filters():
    """Post-format rewriting only uses filters."""
    assert all(spec.kind is HookKind.FILTER for spec in POST_FORMATS.hooks)
    assert all(spec.kind is HookKind.ACTION for spec in KSES.hooks)
