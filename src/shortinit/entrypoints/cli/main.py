"""SHORTINIT CLI entry point.

The ``shortinit`` group (Click-Extra) sets up logging for every subcommand
and carries the subcommands themselves.

Commands
- ``shortinit request``: boot the in-memory reference core and serve one request.

Log records go to stderr, so stdout only carries what the request printed.
With the flight recorder on, the last records are also kept at DEBUG and
written to ``--log-path`` as soon as a warning or error is logged.

Examples
    $ shortinit --version
    $ shortinit -vv request /boot/chelsea --parse
    $ shortinit -L shortinit.service_layer=DEBUG request --show-state
"""

import logging
from pathlib import Path

import click
import click_extra as clickx

from shortinit import __version__
from shortinit.logging import (
    LogConfig,
    configure_logging,
    default_log_path,
    log_startup,
)

from .helpers import parse_log_level
from .request import request as request_command

logger = logging.getLogger(__name__)


HELP = """Boot a content core the short way and serve requests through it.

    The bootloader loads only the subsystems a deployment needs, unhooks the
    default hooks of features whose modules stayed unloaded and drives each
    request from authentication to output.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "-v",
    "--verbose",
    "verbose_count",
    count=True,
    help="Log more on the console: -v for INFO, -vv for DEBUG.",
)
@click.option(
    "-q",
    "--quiet",
    "quiet_count",
    count=True,
    help="Log less on the console: -q for ERROR only, -qq for CRITICAL only.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Log everything with timestamps, logger names and source locations.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=default_log_path,
    envvar="SHORTINIT_LOG_PATH",
    show_envvar=True,
    help="File the flight recorder writes to. Defaults to the user log directory.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    default=True,
    show_envvar=True,
    help="Keep recent records at DEBUG and write them out on a warning or error.",
)
@click.option(
    "--flight-recorder-capacity",
    "recorder_capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="SHORTINIT_FLIGHT_RECORDER_CAPACITY",
    help="Records the flight recorder buffers before it flushes anyway.",
)
@click.option(
    "--force-flush/--no-force-flush",
    default=False,
    show_envvar=True,
    help="Also write the flight recorder buffer when the command succeeds.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar="SHORTINIT_LOGGER_LEVELS",
    show_envvar=True,
    help=(
        "Minimum LEVEL for one logger and its children, as NAME=LEVEL "
        "(e.g. shortinit.adapters=INFO). Repeatable; binds the console "
        "and the flight recorder alike."
    ),
)
@clickx.pass_context
def shortinit(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder: bool,
    recorder_capacity: int,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """SHORTINIT command-line interface."""
    config = LogConfig(
        verbosity=verbose_count - quiet_count,
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        recorder=flight_recorder,
        recorder_capacity=recorder_capacity,
        flush_on_exit=force_flush,
        logger_levels=logger_levels,
    )
    configure_logging(config)
    log_startup(logger, config, __version__)
    ctx.call_on_close(logging.shutdown)


shortinit.add_command(request_command)
