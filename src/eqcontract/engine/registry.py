"""Comparison strategy registry.

Holds the strategy overrides of one verification run and resolves the
strategy that applies to each field. Precedence, highest first:

1. a field-level override (``strategy_overrides["name"]`` or ``ignored_fields``),
2. a field declared ``dataclasses.field(compare=False)``, which is ignored,
3. a type-level override for the field's declared type (or a base class of it),
4. `NATURAL`.
"""

from __future__ import annotations

import logging
import types
from typing import Annotated, Any, Union, get_args, get_origin

from eqcontract.domain.errors import InvalidConfigurationError
from eqcontract.domain.model import FieldDescriptor, TargetType
from eqcontract.domain.strategies import IGNORED, NATURAL, ComparisonStrategy

logger = logging.getLogger(__name__)


class ComparisonStrategyRegistry:
    """Per-run mapping of scopes (field names or types) to comparison strategies."""

    def __init__(self) -> None:
        self._field_overrides: dict[str, ComparisonStrategy] = {}
        self._type_overrides: dict[Any, ComparisonStrategy] = {}

    @classmethod
    def from_overrides(
        cls,
        overrides: dict[str | type, ComparisonStrategy],
        ignored_fields: frozenset[str] = frozenset(),
    ) -> ComparisonStrategyRegistry:
        """Build a registry from configuration-style overrides."""
        registry = cls()
        for scope, strategy in overrides.items():
            registry.register(scope, strategy)
        for name in ignored_fields:
            registry.register(name, IGNORED)
        return registry

    def register(self, scope: str | Any, strategy: ComparisonStrategy) -> None:
        """Override the strategy for a field name (``str``) or for a type.

        Raises:
            InvalidConfigurationError: If ``strategy`` is not a `ComparisonStrategy`.
        """
        if not isinstance(strategy, ComparisonStrategy):
            raise InvalidConfigurationError(
                f"{strategy!r} is not a ComparisonStrategy (scope {scope!r})"
            )
        if isinstance(scope, str):
            self._field_overrides[scope] = strategy
        else:
            self._type_overrides[scope] = strategy

    def strategy_for(self, scope: FieldDescriptor | str | Any) -> ComparisonStrategy:
        """Return the strategy in force for a field descriptor, field name or type."""
        if isinstance(scope, FieldDescriptor):
            if (strategy := self._field_overrides.get(scope.name)) is not None:
                return strategy
            if not scope.compare:
                return IGNORED
            return self._type_strategy(scope.declared_type) or NATURAL
        if isinstance(scope, str):
            return self._field_overrides.get(scope, NATURAL)
        return self._type_strategy(scope) or NATURAL

    def resolve(self, target: TargetType) -> dict[str, ComparisonStrategy]:
        """Resolve the strategy of every field of ``target`` once for the run.

        Raises:
            InvalidConfigurationError: If a field-level override names a field
                the target does not declare.
        """
        if unknown := sorted(set(self._field_overrides) - set(target.field_names)):
            raise InvalidConfigurationError(
                f"{target.name} has no field(s) {', '.join(unknown)}; "
                f"known fields: {', '.join(target.field_names) or '<none>'}"
            )
        resolved = {f.name: self.strategy_for(f) for f in target.fields}
        logger.debug(
            "Resolved strategies for %s: %s",
            target.name,
            {name: s.name for name, s in resolved.items()},
        )
        return resolved

    def _type_strategy(self, type_: Any) -> ComparisonStrategy | None:
        type_ = _strip(type_)
        try:
            if (strategy := self._type_overrides.get(type_)) is not None:
                return strategy
        except TypeError:  # unhashable annotation
            return None
        if isinstance(type_, type):
            for klass in type_.__mro__[1:]:
                if (strategy := self._type_overrides.get(klass)) is not None:
                    return strategy
        return None


def _strip(type_: Any) -> Any:
    """Unwrap ``Annotated[T, ...]`` and ``T | None`` down to ``T``."""
    origin = get_origin(type_)
    if origin is Annotated:
        return _strip(get_args(type_)[0])
    if origin is Union or origin is types.UnionType:
        arms = [a for a in get_args(type_) if a is not type(None)]
        if len(arms) == 1:
            return _strip(arms[0])
    return type_
