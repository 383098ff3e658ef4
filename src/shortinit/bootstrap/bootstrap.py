"""Bootstrap the bootloader against a content core."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from shortinit import config
from shortinit.config import Settings
from shortinit.domain.capabilities import (
    ADMIN_CHECK,
    PAGENOW,
    SET_CURRENT_USER,
    USER_TARGETS,
    VARS_TARGETS,
)
from shortinit.domain.hooks import return_false, return_true
from shortinit.interfaces.core import AbstractCore
from shortinit.interfaces.hooks import AbstractHookRegistry
from shortinit.logging import log_bootstrap, log_settings
from shortinit.service_layer.lifecycle import LifecycleDriver
from shortinit.service_layer.loader import SubsystemLoader
from shortinit.service_layer.not_found import NotFoundPolicy
from shortinit.service_layer.parse_override import install_parse_request_guard
from shortinit.service_layer.query_vars import register_query_vars
from shortinit.service_layer.suppressor import (
    SuppressionReport,
    suppress_default_hooks,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """A class to hold the bootstrapped bootloader."""

    settings: Settings
    core: AbstractCore
    loader: SubsystemLoader
    driver: LifecycleDriver
    suppression: SuppressionReport


def register_deployment_overrides(
    hooks: AbstractHookRegistry, settings: Settings
) -> None:
    """Switch off the core's request parsing and/or 404 handling."""
    if settings.skip_request_parsing:
        hooks.add_filter("do_parse_request", return_false)
    if settings.custom_not_found:
        hooks.add_filter("pre_handle_404", return_true)


def define_constants(core: AbstractCore) -> None:
    """Derive the constants the auth cookie functions read.

    Plugin directory constants feed the cookie constants, so they go first.
    """
    core.plugin_directory_constants()
    if core.is_multisite():
        core.ms_cookie_constants()
    core.cookie_constants()
    core.ssl_constants()


def bootstrap(
    core: AbstractCore,
    settings: Settings | None = None,
    policy: NotFoundPolicy | None = None,
) -> AppContainer:
    """Run the process-start sequence and return the assembled container.

    Args:
        core: The content core, already through its own short startup.
        settings: Deployment settings. Defaults to `config.load_settings()`.
        policy: Not-found policy for the lifecycle driver.

    Returns:
        AppContainer: The bootstrapped bootloader.
    """
    if settings is None:
        settings = config.load_settings()
    log_settings(logger, settings)
    hooks = core.hooks
    capabilities = core.capabilities
    loader = SubsystemLoader(capabilities, core.module_source)

    if capabilities.has(ADMIN_CHECK):
        loader.ensure_loaded(PAGENOW, VARS_TARGETS)

    register_deployment_overrides(hooks, settings)
    register_query_vars(hooks, settings.extra_query_vars)
    suppression = suppress_default_hooks(hooks, capabilities)

    if settings.load_user_subsystem:
        loader.ensure_loaded(SET_CURRENT_USER, USER_TARGETS)

    define_constants(core)
    install_parse_request_guard(hooks, loader)

    log_bootstrap(
        logger,
        load_count=loader.load_count,
        loaded_targets=capabilities.loaded_targets,
        suppression=suppression,
    )
    return AppContainer(
        settings=settings,
        core=core,
        loader=loader,
        driver=LifecycleDriver(core, policy, settings.extra_query_vars),
        suppression=suppression,
    )
