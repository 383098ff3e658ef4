"""Default wiring contract of the content core.

The core registers the hooks below unconditionally during its normal startup,
assuming the feature modules behind them are loaded. Under a selective
bootstrap they may not be, so the suppressor removes each group when its
presence probe fails.

This table mirrors the core's own default-filter registrations for
`DEFAULT_WIRING_VERSION`. Names and priorities must match the core exactly;
a mismatch leaves a stale hook behind. Update the table together with the
version when the core changes its wiring.
"""

from dataclasses import dataclass
from enum import Enum

from .hooks import HookSpec, action, filter_

DEFAULT_WIRING_VERSION = "5.6"


class Feature(Enum):
    """Feature groups whose default hooks may be suppressed."""

    KSES = "kses"
    REST_API = "rest_api"
    POST_FORMATS = "post_formats"
    COMMENT_CLOSING = "comment_closing"


@dataclass(frozen=True)
class FeatureGroup:
    """Hooks installed for one feature, gated by a single presence probe."""

    feature: Feature
    probe: str
    hooks: tuple[HookSpec, ...]


KSES = FeatureGroup(
    Feature.KSES,
    probe="kses_init",
    hooks=(
        action("init", "kses_init"),
        action("set_current_user", "kses_init"),
    ),
)

REST_API = FeatureGroup(
    Feature.REST_API,
    probe="rest_cookie_collect_status",
    hooks=(
        # init
        action("init", "rest_api_init"),
        action("rest_api_init", "rest_api_default_filters", 10, 1),
        action("rest_api_init", "register_initial_settings", 10),
        action("rest_api_init", "create_initial_rest_routes", 99),
        action("parse_request", "rest_api_loaded"),
        # auth
        action("xmlrpc_rsd_apis", "rest_output_rsd"),
        action("wp_head", "rest_output_link_wp_head", 10, 0),
        action("template_redirect", "rest_output_link_header", 11, 0),
        action("auth_cookie_malformed", "rest_cookie_collect_status"),
        action("auth_cookie_expired", "rest_cookie_collect_status"),
        action("auth_cookie_bad_username", "rest_cookie_collect_status"),
        action("auth_cookie_bad_hash", "rest_cookie_collect_status"),
        action("auth_cookie_valid", "rest_cookie_collect_status"),
        action(
            "application_password_failed_authentication",
            "rest_application_password_collect_status",
        ),
        action(
            "application_password_did_authenticate",
            "rest_application_password_collect_status",
            10,
            2,
        ),
        filter_(
            "rest_authentication_errors", "rest_application_password_check_errors", 90
        ),
        filter_("rest_authentication_errors", "rest_cookie_check_errors", 100),
    ),
)

POST_FORMATS = FeatureGroup(
    Feature.POST_FORMATS,
    probe="_post_format_request",
    hooks=(
        filter_("request", "_post_format_request"),
        filter_("term_link", "_post_format_link", 10, 3),
        filter_("get_post_format", "_post_format_get_term"),
        filter_("get_terms", "_post_format_get_terms", 10, 3),
        filter_("wp_get_object_terms", "_post_format_wp_get_object_terms"),
    ),
)

COMMENT_CLOSING = FeatureGroup(
    Feature.COMMENT_CLOSING,
    probe="_close_comments_for_old_posts",
    hooks=(filter_("the_posts", "_close_comments_for_old_posts", 10, 2),),
)

FEATURE_GROUPS: tuple[FeatureGroup, ...] = (
    KSES,
    REST_API,
    POST_FORMATS,
    COMMENT_CLOSING,
)
