"""Logging helpers for the eqcontract command line.

Console output goes through Rich on stderr. A "flight recorder" keeps the
most recent records of a verification session in memory and writes them to
a file once something goes wrong (or on exit, when forced), so a failing run
can be diagnosed at DEBUG detail without flooding the console.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "eqcontract"

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
)

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from other libraries with their top-level package name.

    ``record.prefix`` becomes ``"[rich]"`` for a record of ``rich.console``
    and stays empty for eqcontract's own loggers. Nothing is filtered out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == PROJECT_PREFIX or record.name.startswith(f"{PROJECT_PREFIX}."):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Return a Rich console handler writing to stderr.

    Args:
        level: Minimum level shown; forced to DEBUG in debug mode.
        debug_mode: Show timestamps, logger names and source locations.
        color: Follow click-extra's ``--color/--no-color`` switch.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Return a memory handler that dumps its buffer into ``path``.

    The buffer holds up to ``capacity`` records and is written out when a
    record at ``flush_level`` or above arrives, when it is full, or on close
    if ``flush_on_close`` is set. The file is truncated when created.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def _distribution_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "<not installed>"


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line session summary at INFO and environment details at DEBUG.

    Args:
        logger: Logger to write to.
        app_version: eqcontract version.
        level: Effective console level.
        handlers: Handlers attached to the root logger.
        log_path: Flight recorder file, if any.
        flight_recorder: Whether the flight recorder is active.
        logger_levels: Per-logger level overrides.
    """
    logger.info(
        "eqcontract %s (console=%s, flight recorder=%s)",
        app_version,
        logging.getLevelName(level),
        log_path if flight_recorder else "off",
    )
    logger.debug(
        "Python %s on %s %s",
        sys.version.split()[0],
        platform.system(),
        platform.release(),
    )
    logger.debug("PID %s, working directory %s", os.getpid(), Path.cwd())
    logger.debug(
        "click %s, click-extra %s, rich %s",
        _distribution_version("click"),
        _distribution_version("click-extra"),
        _distribution_version("rich"),
    )
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if logger_levels:
        logger.debug(
            "Logger levels: %s",
            {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
        )
