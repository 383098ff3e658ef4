"""Logging setup for the SHORTINIT CLI and the bootloader's reports.

Console records go through Rich on stderr so that stdout only carries the
request output. A flight recorder keeps recent records at DEBUG in memory and
writes them to a log file once something goes wrong. The bootloader reports
its resolved settings and what the process-start sequence loaded and
unhooked through `log_settings` and `log_bootstrap`.
"""

from __future__ import annotations

import logging
import os
import platform
from collections.abc import Iterable
from dataclasses import dataclass, field
from importlib.metadata import version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from platformdirs import user_log_path
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

    from shortinit.config import Settings
    from shortinit.domain.default_wiring import Feature
    from shortinit.service_layer.suppressor import SuppressionReport

PROJECT_PREFIX = "shortinit"
LOG_FILE_NAME = "latest.log"

CONSOLE_FORMAT = "%(origin)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] %(levelname)-8s %(name)s:%(lineno)d (pid %(process)d) %(message)s"
)

LIBRARIES = ("click", "click-extra", "rich", "platformdirs")

# Same choices as click-extra's --color / --no-color
ColorSystem = Literal["auto", "standard", "256", "truecolor", "windows"]


def default_log_path() -> Path:
    """Flight recorder file in the user's log directory."""
    directory = user_log_path(PROJECT_PREFIX, appauthor=False, ensure_exists=True)
    return directory / LOG_FILE_NAME


class OriginFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Tag each console record with where it came from.

    Bootloader records carry their layer (``[service_layer]``, ``[adapters]``,
    ...) and records of other libraries their top-level package
    (``[urllib3]``). The tag is stored on ``record.origin``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        root, _, rest = record.name.partition(".")
        if root != PROJECT_PREFIX:
            record.origin = f"[{root}]"
        else:
            record.origin = f"[{rest.split('.')[0]}]" if rest else ""
        return True


@dataclass(frozen=True)
class LogConfig:  # pylint: disable=too-many-instance-attributes
    """Where log records go and how much of them.

    Attributes:
        verbosity: Count of ``-v`` minus count of ``-q``. Zero means WARNING.
        debug: Developer mode: DEBUG console output with timestamps and paths.
        color: Whether the console may use color.
        log_path: Flight recorder file. Defaults to `default_log_path()`.
        recorder: Whether the flight recorder is installed.
        recorder_capacity: Records buffered before the recorder flushes anyway.
        flush_on_exit: Write the buffer on a clean exit as well.
        logger_levels: Minimum level per logger name, for both handlers.
    """

    verbosity: int = 0
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    recorder: bool = True
    recorder_capacity: int = 2000
    flush_on_exit: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def verbosity_level(self) -> int:
        """Console level implied by ``-v``/``-q``, clamped to DEBUG..CRITICAL."""
        level = logging.WARNING - 10 * self.verbosity
        return max(logging.DEBUG, min(logging.CRITICAL, level))


def console_handler(config: LogConfig) -> RichHandler:
    """Rich handler on stderr.

    Debug mode lowers it to DEBUG and adds timestamps, logger names and
    source links. Otherwise records are tagged by `OriginFilter`.
    """
    color_system: ColorSystem | None = "auto" if config.color else None
    handler = RichHandler(
        level=logging.DEBUG if config.debug else config.verbosity_level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=config.debug,
        enable_link_path=config.debug,
    )
    if config.debug:
        handler.setFormatter(logging.Formatter(DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.addFilter(OriginFilter())
    return handler


def flight_recorder(config: LogConfig) -> MemoryHandler:
    """Buffer every record and write the buffer out on WARNING or worse.

    The file is only opened on the first flush, so a quiet run leaves no log
    file behind.
    """
    target = logging.FileHandler(
        config.log_path or default_log_path(), mode="w", encoding="utf-8", delay=True
    )
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=config.recorder_capacity,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=config.flush_on_exit,
    )


def configure_logging(config: LogConfig) -> list[logging.Handler]:
    """Install the handlers on the root logger and return them.

    The root logger lets everything through; each handler applies its own
    level. Per-logger levels are set last and bind both handlers.
    """
    handlers: list[logging.Handler] = [console_handler(config)]
    if config.recorder:
        handlers.append(flight_recorder(config))
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in config.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def log_startup(logger: Logger, config: LogConfig, app_version: str) -> None:
    """Report the logging setup: a summary at INFO, the details at DEBUG."""
    logger.info(
        "shortinit %s starting: console=%s, flight recorder=%s",
        app_version,
        logging.getLevelName(logging.DEBUG if config.debug else config.verbosity_level),
        "on" if config.recorder else "off",
    )
    logger.debug(
        "Runtime: Python %s on %s, pid %d",
        platform.python_version(),
        platform.system(),
        os.getpid(),
    )
    logger.debug(
        "Libraries: %s", ", ".join(f"{name} {version(name)}" for name in LIBRARIES)
    )
    if config.recorder:
        logger.debug(
            "Flight recorder: file=%s, capacity=%d, flush on exit=%s",
            config.log_path or default_log_path(),
            config.recorder_capacity,
            config.flush_on_exit,
        )
    logger.debug(
        "Logger levels: %s",
        {name: logging.getLevelName(lvl) for name, lvl in config.logger_levels.items()}
        or "defaults",
    )


def log_settings(logger: Logger, settings: Settings) -> None:
    """Report the deployment settings the bootloader runs with."""
    logger.debug(
        "Settings: boot mode=%s, request parsing=%s, not-found=%s, users=%s",
        settings.boot_mode,
        "skipped" if settings.skip_request_parsing else "core parser",
        "custom policy" if settings.custom_not_found else "core handler",
        "loaded" if settings.load_user_subsystem else "not loaded",
    )
    logger.debug("Extra query vars: %s", ", ".join(settings.extra_query_vars) or "-")


def _features(features: Iterable[Feature]) -> str:
    return ", ".join(feature.value for feature in features) or "-"


def log_bootstrap(
    logger: Logger,
    *,
    load_count: int,
    loaded_targets: Iterable[str],
    suppression: SuppressionReport,
) -> None:
    """Report what the process-start sequence loaded and unhooked.

    Args:
        logger: Logger to report on.
        load_count: Targets the bootloader itself loaded.
        loaded_targets: Every loaded target, the core's own included.
        suppression: Outcome of the default-hook suppression.
    """
    logger.info(
        "Bootstrapped: %d target(s) loaded, %d default hook(s) removed",
        load_count,
        sum(suppression.removed.values()),
    )
    logger.debug("Loaded targets: %s", ", ".join(loaded_targets) or "-")
    logger.debug("Suppressed features: %s", _features(suppression.suppressed))
    logger.debug("Kept features: %s", _features(suppression.kept))
