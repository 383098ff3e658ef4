"""Click callbacks for NAME=VALUE style options.

Options such as ``-L NAME=LEVEL`` and ``--post FIELD=VALUE`` are repeatable
and also accept a single comma/space separated string (as read from an
environment variable). These helpers flatten such input and split each
item into its name and value.
"""

import logging
import re

import click

# The reference core logs every query at DEBUG; keep it out of -vv output.
DEFAULT_LIB_LEVELS = {"shortinit.adapters": logging.INFO}


def split_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Flatten a string or a sequence of strings on commas and whitespace.

    Args:
        value: A plain string, or the tuple Click passes for repeatable options.

    Returns:
        list[str]: Non-empty items, in input order.
    """
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in re.split(r"[,\s]+", chunk) if item]


def split_pair(item: str) -> tuple[str, str]:
    """Split ``NAME=VALUE`` into its stripped parts.

    Raises:
        click.BadParameter: If `item` has no ``=``.
    """
    name, sep, val = item.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected NAME=VALUE, got {item!r}")
    return name.strip(), val.strip()


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback that parses NAME=LEVEL pairs into a name->level dict.

    Starts from DEFAULT_LIB_LEVELS; later items override earlier ones. LEVEL
    is a standard logging level name, matched case-insensitively.

    Returns:
        dict[str, int]: Mapping of logger names to numeric logging levels.

    Raises:
        click.BadParameter: If an item is malformed or names an unknown level.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in split_items(value):
        name, level_str = split_pair(item)
        lvl = logging.getLevelName(level_str.upper())
        if not isinstance(lvl, int):
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name] = lvl
    return levels


def parse_post(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: tuple[str, ...],
) -> list[dict[str, str]]:
    """Click callback turning each ``--post FIELD=VALUE[,FIELD=VALUE]`` into a post.

    Unlike `parse_log_level`, each repetition is its own post, so items are
    only split within one occurrence.

    Raises:
        click.BadParameter: If a field is malformed.
    """
    return [
        dict(split_pair(item) for item in split_items(occurrence))
        for occurrence in value
    ]
