"""eqcontract CLI entry point.

Defines the top-level ``eqcontract`` command (via Click-Extra), sets up
console logging and the flight recorder, and registers the subcommands.

Examples
    $ eqcontract --version
    $ eqcontract verify mypkg.money:Money --decimal-compare
    $ eqcontract -v verify mypkg.points:Point mypkg.points:Point3D --report-all
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from eqcontract import __version__
from eqcontract.logging import (
    config_console_handler,
    config_flight_recorder,
    log_startup,
)

from .helpers import parse_log_level
from .verify import verify

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """eqcontract command-line interface.

    eqcontract checks that a class's __eq__, __ne__ and __hash__ honor the
    equality contract: reflexive, symmetric, transitive, consistent, safe
    against None and foreign types, and with hashes that agree with equality.
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
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Raise console verbosity one level above WARNING per repetition.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Lower console verbosity one level below WARNING per repetition.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Debug console output: every record, with logger names and sources.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(user_log_dir("eqcontract", appauthor=False)) / "latest.log",
    envvar="EQCONTRACT_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="EQCONTRACT_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    default=True,
    show_envvar=True,
    help=(
        "Keep recent log records at DEBUG detail in memory and write them to "
        "--log-path when a WARNING or ERROR is logged (or on exit with "
        "--force-flush). Console verbosity is unaffected."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    show_default=True,
    show_envvar=True,
    help="Write the flight recorder buffer to --log-path on exit.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("click_extra=WARNING",),
    show_default=True,
    show_envvar=True,
    help=(
        "Minimum level for a logger (NAME=LEVEL), applied to console and flight "
        "recorder alike. Repeatable, e.g. -L eqcontract.engine=DEBUG."
    ),
)
@clickx.pass_context
def eqcontract(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """eqcontract command-line interface."""
    level = logging.WARNING - 10 * verbose_count + 10 * quiet_count
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # Root captures everything; each handler filters on its own level.
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        logger_levels=logger_levels,
    )
    ctx.call_on_close(logging.shutdown)


eqcontract.add_command(verify)
