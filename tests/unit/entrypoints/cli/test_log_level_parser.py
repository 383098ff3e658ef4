"""Unit tests for the CLI NAME=VALUE option parsers.

These tests exercise shortinit.entrypoints.cli.helpers.log_level_parser,
covering default behavior, override semantics, input normalization
(commas/spaces), case-insensitivity, and error handling for malformed input.
"""

import logging
import types

import click
import pytest

from shortinit.entrypoints.cli.helpers.log_level_parser import (
    parse_log_level,
    parse_post,
    split_items,
)


def make_ctx():
    """Create a minimal Click context stub.

    The callbacks expect a Click context argument but do not use it.
    """
    return types.SimpleNamespace()


def test_empty_uses_defaults():
    """When no levels are provided, return the default logger levels."""
    assert parse_log_level(make_ctx(), None, ()) == {"shortinit.adapters": logging.INFO}


def test_repeated_flags_override_order():
    """Later repeated CLI flags override earlier ones for the same logger."""
    value = ("shortinit.adapters=DEBUG", "urllib3=ERROR", "shortinit.adapters=WARNING")
    out = parse_log_level(make_ctx(), None, value)
    assert out["shortinit.adapters"] == logging.WARNING
    assert out["urllib3"] == logging.ERROR


def test_envvar_string_with_commas_and_spaces():
    """Accept a plain string (e.g. from an env var) with commas and spaces."""
    value = "shortinit.adapters=DEBUG,  urllib3=WARNING shortinit.service_layer=ERROR"
    out = parse_log_level(make_ctx(), None, value)
    assert out == {
        "shortinit.adapters": logging.DEBUG,
        "urllib3": logging.WARNING,
        "shortinit.service_layer": logging.ERROR,
    }


def test_case_insensitive_levels():
    """Level names are parsed case-insensitively."""
    out = parse_log_level(make_ctx(), None, ("shortinit=info", "urllib3=WaRnInG"))
    assert out["shortinit"] == logging.INFO
    assert out["urllib3"] == logging.WARNING


@pytest.mark.parametrize("item", ["not-a-pair", "=DEBUG"])
def test_invalid_pair_raises(item):
    """Malformed NAME=LEVEL pairs raise click.BadParameter."""
    with pytest.raises(click.BadParameter):
        parse_log_level(make_ctx(), None, (item,))


def test_invalid_level_raises():
    """Unknown level names raise click.BadParameter."""
    with pytest.raises(click.BadParameter, match="LOUD"):
        parse_log_level(make_ctx(), None, ("shortinit=LOUD",))


def test_split_items_drops_empty_chunks():
    """Separators at either end produce no empty items."""
    assert split_items(", a=1 ,,b=2 ") == ["a=1", "b=2"]


def test_parse_post_one_post_per_occurrence():
    """Each --post occurrence is one post; fields split within it."""
    value = ("boot=chelsea,colour=tan", "boot=oxford")
    assert parse_post(make_ctx(), None, value) == [
        {"boot": "chelsea", "colour": "tan"},
        {"boot": "oxford"},
    ]


def test_parse_post_rejects_bare_field():
    """A field without a value separator is rejected."""
    with pytest.raises(click.BadParameter):
        parse_post(make_ctx(), None, ("boot",))
