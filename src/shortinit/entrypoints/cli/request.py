"""``shortinit request`` serves one request through the reference core.

Builds the in-memory reference core for URL, bootstraps the bootloader
against it and runs the request lifecycle once. The terminal output goes to
**stdout**; ``--show-state`` adds a summary of the request on **stderr**.

Settings come from the ``SHORTINIT_*`` environment variables; the flags below
override them for this invocation.

Failure modes
- Invalid ``SHORTINIT_*`` value → ``ClickException`` naming the variable.
- Unknown ``--preload`` target, a missing capability or a hook firing into a
  module that was not loaded → ``ClickException`` with the core's message.

``--not-found`` only steers the bootloader's own not-found policy, so combined
with ``--default-404`` it is reported as a warning and ignored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace

import click

from shortinit.adapters.core import MemoryCore, MemoryRequest
from shortinit.bootstrap import AppContainer, NotFoundPolicy, bootstrap, never_found
from shortinit.config import InvalidSettingError, load_settings
from shortinit.domain.request import RequestContext

from .helpers import boot_glyph, error, success, warn
from .helpers.log_level_parser import parse_post, split_items

logger = logging.getLogger(__name__)


def _print_state(app: AppContainer, context: RequestContext) -> None:
    environment = context.environment

    def echo(line: str) -> None:
        click.echo(line, err=True)

    echo(f"status: {environment.status_header}")
    echo(f"parsed: {environment.parsed}")
    echo(f"query vars: {json.dumps(environment.query_vars, sort_keys=True)}")
    echo(f"states: {' > '.join(state.value for state in context.states)}")
    echo(f"loaded: {', '.join(app.core.capabilities.loaded_targets) or '-'}")
    suppressed = [feature.value for feature in app.suppression.suppressed]
    echo(f"suppressed: {', '.join(suppressed) or '-'}")


@click.command("request")
@click.argument("url", default="/")
@click.option(
    "--parse/--no-parse",
    "parse",
    default=None,
    help="Let the core parse the request (overrides SHORTINIT_SKIP_REQUEST_PARSING).",
)
@click.option(
    "--custom-404/--default-404",
    "custom_not_found",
    default=None,
    help="Use the bootloader's not-found policy or the core's own 404 handler.",
)
@click.option(
    "--not-found",
    "force_not_found",
    is_flag=True,
    help="Make the custom not-found policy resolve the request to 404.",
)
@click.option(
    "--users/--no-users",
    "load_users",
    default=None,
    help="Load the user/session/auth subsystem at startup.",
)
@click.option(
    "--extra-var",
    "extra_vars",
    multiple=True,
    help="Extra recognized query variable. Repeatable; replaces the configured list.",
)
@click.option(
    "--post",
    "posts",
    multiple=True,
    callback=parse_post,
    help="Content available to the query, as FIELD=VALUE[,FIELD=VALUE]. Repeatable.",
)
@click.option(
    "--preload",
    multiple=True,
    help="Target the core loads during its own startup (e.g. kses). Repeatable.",
)
@click.option("--user", "user_id", default=None, help="Authenticate as USER_ID.")
@click.option("--multisite", is_flag=True, help="Run the core as a network of sites.")
@click.option(
    "--show-state", is_flag=True, help="Print the resolved request state on stderr."
)
def request(  # pylint: disable=too-many-arguments, too-many-locals, too-many-positional-arguments
    url: str,
    parse: bool | None,
    custom_not_found: bool | None,
    force_not_found: bool,
    load_users: bool | None,
    extra_vars: tuple[str, ...],
    posts: list[dict[str, str]],
    preload: tuple[str, ...],
    user_id: str | None,
    multisite: bool,
    show_state: bool,
) -> None:
    """Serve one request for URL through the in-memory reference core."""
    try:
        settings = load_settings()
    except InvalidSettingError as e:
        raise click.ClickException(str(e)) from e

    overrides: dict[str, object] = {}
    if parse is not None:
        overrides["skip_request_parsing"] = not parse
    if custom_not_found is not None:
        overrides["custom_not_found"] = custom_not_found
    if load_users is not None:
        overrides["load_user_subsystem"] = load_users
    if extra_vars:
        overrides["extra_query_vars"] = tuple(split_items(extra_vars))
    logger.debug("Command-line overrides: %s", overrides)
    settings = replace(settings, **overrides)
    if force_not_found and not settings.custom_not_found:
        warn("--not-found has no effect while the core handles 404s itself")

    policy = NotFoundPolicy(never_found) if force_not_found else NotFoundPolicy()
    cookies = {"user_id": user_id} if user_id else {}

    try:
        core = MemoryCore(
            MemoryRequest.from_url(url, cookies),
            posts=posts,
            multisite=multisite,
            preload=preload,
        )
        app = bootstrap(core, settings, policy)
        context = app.driver.run()
    except LookupError as e:
        error("Request failed")
        raise click.ClickException(str(e)) from e

    if show_state:
        _print_state(app, context)
        success(f"Served {url} with status {context.environment.status_header}")
    click.echo(boot_glyph(context.output or ""))
