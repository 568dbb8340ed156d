"""``eqcontract verify``: check the equality contract of classes.

Each TARGET (``module:QualifiedName``) is verified with the same options.
A passing class prints one success line; a failing class prints the full
report.

Exit status
- 0: every target passed.
- 1: at least one target violated the contract.
- 2: a target could not be verified (import failure, unresolvable or
  unconstructible type, invalid options).

Options not given on the command line fall back to the ``EQCONTRACT_*``
environment variables read by `Configuration.from_env`.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import click

from eqcontract.config import Configuration
from eqcontract.domain.errors import ConfigurationError
from eqcontract.domain.model import Invariant, SubclassPolicy
from eqcontract.domain.strategies import DECIMAL_COMPARE
from eqcontract.engine.verifier import verify as verify_class

from .helpers import ClassReference, error, success, warn

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_CONFIGURATION = 2


def _build_configuration(
    fail_fast: bool | None,
    ignored: tuple[str, ...],
    suppressed: tuple[str, ...],
    decimal_compare: bool,
    subclass_policy: str | None,
    all_fields_used: bool,
) -> Configuration:
    options: dict[str, Any] = {}
    if fail_fast is not None:
        options["fail_fast"] = fail_fast
    if ignored:
        options["ignored_fields"] = frozenset(ignored)
    if suppressed:
        options["suppressed_checks"] = suppressed
    if decimal_compare:
        options["strategy_overrides"] = {Decimal: DECIMAL_COMPARE}
    if subclass_policy is not None:
        options["subclass_policy"] = subclass_policy
    if all_fields_used:
        options["all_fields_used"] = True
    return Configuration.from_env(**options)


@click.command()
@click.argument("targets", nargs=-1, required=True, type=ClassReference())
@click.option(
    "--fail-fast/--report-all",
    default=None,
    help="Stop at the first violation per class (default) or report all of them.",
)
@click.option(
    "--ignore",
    "ignored",
    multiple=True,
    metavar="FIELD",
    help="Field that must not influence equality. Repeatable.",
)
@click.option(
    "--suppress",
    "suppressed",
    multiple=True,
    type=click.Choice([invariant.name for invariant in Invariant], case_sensitive=False),
    help="Check to skip. Repeatable.",
)
@click.option(
    "--decimal-compare",
    is_flag=True,
    default=False,
    help="Treat Decimal fields as equal when Decimal.compare says so (1 == 1.00).",
)
@click.option(
    "--subclass-policy",
    type=click.Choice([policy.value for policy in SubclassPolicy], case_sensitive=False),
    default=None,
    help="Expected equality towards a trivial subclass [default: symmetric].",
)
@click.option(
    "--all-fields-used",
    is_flag=True,
    default=False,
    help="Report fields that __eq__ does not use.",
)
@click.pass_context
def verify(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    targets: tuple[type, ...],
    fail_fast: bool | None,
    ignored: tuple[str, ...],
    suppressed: tuple[str, ...],
    decimal_compare: bool,
    subclass_policy: str | None,
    all_fields_used: bool,
) -> None:
    """Verify __eq__ and __hash__ of one or more classes (module:ClassName)."""
    try:
        config = _build_configuration(
            fail_fast, ignored, suppressed, decimal_compare, subclass_policy, all_fields_used
        )
    except ConfigurationError as exc:
        error(str(exc))
        ctx.exit(EXIT_CONFIGURATION)
    logger.debug(
        "Options: fail_fast=%s, subclass_policy=%s, all_fields_used=%s, "
        "suppressed=%s, ignored=%s",
        config.fail_fast,
        config.subclass_policy.value,
        config.all_fields_used,
        sorted(check.name for check in config.suppressed_checks) or "none",
        sorted(config.ignored_fields) or "none",
    )

    failures = 0
    for cls in targets:
        try:
            outcome = verify_class(cls, config)
        except ConfigurationError as exc:
            logger.debug("Cannot verify %s", cls.__qualname__, exc_info=True)
            error(f"{cls.__qualname__}: {exc}")
            ctx.exit(EXIT_CONFIGURATION)
        if outcome.passed:
            success(outcome.message.splitlines()[0])
            for skip in outcome.skips:
                warn(f"{cls.__qualname__}: skipped {skip}")
        else:
            failures += 1
            error(outcome.message)

    if failures:
        logger.info("%d of %d class(es) failed", failures, len(targets))
        ctx.exit(EXIT_FAILED)
