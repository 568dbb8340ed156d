"""The verification pipeline: introspect, synthesize, check, report.

Every call to `verify` owns its accessor, registry, builder and value
factory, so concurrent calls share no mutable state.
"""

from __future__ import annotations

import logging

from eqcontract.config import Configuration
from eqcontract.domain.errors import UnresolvableTypeError
from eqcontract.domain.model import ExamplePair, TargetType
from eqcontract.domain.strategies import ComparisonStrategy
from eqcontract.engine.builder import InstanceBuilder
from eqcontract.engine.checker import InvariantChecker
from eqcontract.engine.fields import FieldAccessor
from eqcontract.engine.registry import ComparisonStrategyRegistry
from eqcontract.engine.reporter import Reporter, VerificationOutcome
from eqcontract.engine.values import ValueFactory

logger = logging.getLogger(__name__)


def verify(cls: type, config: Configuration | None = None) -> VerificationOutcome:
    """Verify the equality contract of ``cls``.

    Args:
        cls: The class under verification.
        config: Options of the run; defaults to `Configuration()`.

    Returns:
        The outcome. Call `VerificationOutcome.raise_for_failure` to turn a
        failure into an exception.

    Raises:
        TypeError: If ``cls`` is not a class.
        ConfigurationError: If the options are invalid, or example values or
            instances cannot be produced for ``cls``.
    """
    config = config or Configuration()
    accessor = FieldAccessor()
    target = accessor.introspect(cls)
    logger.debug("Verifying %s", target.name)

    registry = ComparisonStrategyRegistry.from_overrides(
        config.strategy_overrides, config.ignored_fields
    )
    strategies = registry.resolve(target)
    builder = InstanceBuilder(accessor, config.instance_suppliers)
    factory = ValueFactory(accessor, builder, registry, config.prefab_values)
    pairs = _synthesize(target, strategies, factory)

    # Surface construction problems before any check runs.
    builder.build(target, {name: pair.red for name, pair in pairs.items()})
    builder.build(target, {name: pair.blue for name, pair in pairs.items()})

    checker = InvariantChecker(target, config, builder, strategies, pairs)
    violations, skips = checker.run()
    outcome = Reporter().report(target, violations, skips)
    if outcome.passed:
        logger.info("%s: passed (%d skipped)", target.name, len(outcome.skips))
    else:
        logger.info("%s: %d violation(s)", target.name, len(outcome.violations))
    return outcome


def _synthesize(
    target: TargetType,
    strategies: dict[str, ComparisonStrategy],
    factory: ValueFactory,
) -> dict[str, ExamplePair]:
    pairs: dict[str, ExamplePair] = {}
    for descriptor in target.fields:
        try:
            pairs[descriptor.name] = factory.values_for(
                descriptor.declared_type, strategies[descriptor.name]
            )
        except UnresolvableTypeError as exc:
            exc.add_note(f"while deriving values for field {descriptor.qualified_name}")
            raise
        logger.debug(
            "%s: %s <- red=%r blue=%r%s",
            target.name,
            descriptor.name,
            pairs[descriptor.name].red,
            pairs[descriptor.name].blue,
            "" if pairs[descriptor.name].distinct else " (not distinct)",
        )
    return pairs
