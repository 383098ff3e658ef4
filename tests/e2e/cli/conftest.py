"""Fixtures for end-to-end CLI tests.

`emit-records` is a test-only subcommand that logs what a request through
the bootloader typically logs, on the bootloader's own loggers and on a
third-party one, so the logging options can be checked without depending
on what a real request happens to log.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from shortinit.entrypoints.cli.main import shortinit

# pylint: disable=redefined-outer-name

LOADER = "shortinit.service_layer.loader"
LIFECYCLE = "shortinit.service_layer.lifecycle"
THIRD_PARTY = "urllib3.connectionpool"


@click.command()
def emit_records():
    """Log one record per level, then a final DEBUG record after the failure."""
    logging.getLogger(LOADER).debug("Loaded target kses for kses_init")
    logging.getLogger("shortinit.bootstrap").info("Bootstrapped: 9 target(s) loaded")
    logging.getLogger("shortinit.service_layer.suppressor").warning(
        "Feature rest_api kept with 17 default hook(s)"
    )
    lifecycle = logging.getLogger(LIFECYCLE)
    lifecycle.error("Request failed in state notify")
    lifecycle.critical("Lifecycle aborted before output")
    third_party = logging.getLogger(THIRD_PARTY)
    third_party.debug("Starting new HTTP connection (1): localhost:80")
    third_party.info("Resetting dropped connection: localhost")
    lifecycle.debug("Lifecycle finished in state done")


def _remove_command_everywhere(group, name: str) -> None:
    """Drop a command from a Click-Extra group and its help sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def with_emit_records():
    """Make ``shortinit emit-records`` available for one test."""
    shortinit.add_command(emit_records, name="emit-records")
    try:
        yield
    finally:
        _remove_command_everywhere(shortinit, "emit-records")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield
