"""Configuration utilities for SHORTINIT.

This module centralizes the deployment settings read from ``SHORTINIT_*``
environment variables and the helpers used to parse them.
"""

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

BOOT_MODE_SHORT = "short"  # pragma: no mutate
DEFAULT_EXTRA_QUERY_VARS = ("boot", "bootloader")

ENV_BOOT_MODE = "SHORTINIT_BOOT_MODE"
ENV_EXTRA_QUERY_VARS = "SHORTINIT_EXTRA_QUERY_VARS"
ENV_SKIP_REQUEST_PARSING = "SHORTINIT_SKIP_REQUEST_PARSING"
ENV_CUSTOM_NOT_FOUND = "SHORTINIT_CUSTOM_NOT_FOUND"
ENV_LOAD_USER_SUBSYSTEM = "SHORTINIT_LOAD_USER_SUBSYSTEM"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class InvalidSettingError(ValueError):
    """Raised when a SHORTINIT_* environment variable has an invalid value."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        super().__init__(f"{name}={value!r} is invalid; expected {expected}")
        self.name = name
        self.value = value


@dataclass(frozen=True)
class Settings:
    """Deployment settings for the bootloader.

    Attributes:
        boot_mode: Boot-mode signal handed to the core. Only ``"short"`` is
            supported; the full startup path is what this bootloader skips.
        extra_query_vars: Query variables registered on top of the core's
            public ones, in registration order.
        skip_request_parsing: When True the core's request parser is switched
            off with a ``do_parse_request`` filter.
        custom_not_found: When True the core's 404 handler is replaced by the
            lifecycle driver's own not-found policy.
        load_user_subsystem: When True the user/session/auth subsystem is
            loaded at process start.
    """

    boot_mode: str = BOOT_MODE_SHORT
    extra_query_vars: tuple[str, ...] = DEFAULT_EXTRA_QUERY_VARS
    skip_request_parsing: bool = True
    custom_not_found: bool = True
    load_user_subsystem: bool = True


def parse_bool(name: str, value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        name: Variable name, used in the error message.
        value: Raw value, matched case-insensitively.

    Returns:
        The parsed boolean.

    Raises:
        InvalidSettingError: If the value is not a recognized boolean string.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise InvalidSettingError(name, value, "one of 1/0, true/false, yes/no, on/off")


def parse_names(value: str) -> tuple[str, ...]:
    """Split a comma/space separated list of names, dropping empty fragments."""
    return tuple(s for s in re.split(r"[,\s]+", value) if s)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build `Settings` from the environment.

    Unset variables keep their defaults.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        The resolved settings.

    Raises:
        InvalidSettingError: If a variable is set to an invalid value.
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    boot_mode = env.get(ENV_BOOT_MODE, defaults.boot_mode).strip().lower()
    if boot_mode != BOOT_MODE_SHORT:
        raise InvalidSettingError(ENV_BOOT_MODE, boot_mode, repr(BOOT_MODE_SHORT))

    extra_query_vars = defaults.extra_query_vars
    if (raw := env.get(ENV_EXTRA_QUERY_VARS)) is not None:
        extra_query_vars = parse_names(raw)

    flags = {}
    for field_name, var in (
        ("skip_request_parsing", ENV_SKIP_REQUEST_PARSING),
        ("custom_not_found", ENV_CUSTOM_NOT_FOUND),
        ("load_user_subsystem", ENV_LOAD_USER_SUBSYSTEM),
    ):
        if (raw := env.get(var)) is not None:
            flags[field_name] = parse_bool(var, raw)

    return Settings(boot_mode=boot_mode, extra_query_vars=extra_query_vars, **flags)
