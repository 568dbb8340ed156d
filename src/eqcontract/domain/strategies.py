"""Comparison strategies for field values.

A comparison strategy states how the verifier should treat two values of a
field when deciding what the type's own ``__eq__`` ought to do:

* `Natural`: the values' own ``==`` decides.
* `OrderingBased`: two values are equivalent when the value type's ordering
  says neither is smaller than the other, even if their representations
  differ (``Decimal("1")`` vs ``Decimal("1.00")``).
* `Ignored`: the field must not influence equality at all.

Strategies are resolved once per field at the start of a run and are plain
frozen values, so they can be used as cache keys.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Any


@dataclass(frozen=True)
class ComparisonStrategy:
    """Base for all comparison strategies."""

    name: str

    def equivalent(self, left: Any, right: Any) -> bool:
        """Return True if the two values should count as equal for this strategy."""
        raise NotImplementedError

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class Natural(ComparisonStrategy):
    """Values are equivalent when ``left == right``."""

    name: str = "NATURAL"

    def equivalent(self, left: Any, right: Any) -> bool:
        return bool(left == right)


@dataclass(frozen=True)
class Ignored(ComparisonStrategy):
    """The field does not take part in equality; every pair is equivalent."""

    name: str = "IGNORED"

    def equivalent(self, left: Any, right: Any) -> bool:
        return True


@dataclass(frozen=True)
class OrderingBased(ComparisonStrategy):
    """Values are equivalent when their ordering comparison yields zero.

    Attributes:
        name: Label used in diagnostics (e.g. ``"DECIMAL_COMPARE"``).
        compare: Optional three-way comparison returning a negative number,
            zero or a positive number. When omitted the value type's own
            ``<`` operator is used in both directions.
        equivalent_of: Optional function returning a value that is
            ordering-equal to its argument but represented differently. The
            verifier uses it to probe whether ``__eq__`` and ``__hash__``
            honor the strategy. Without it that probe is skipped.
        value_type: Optional type the strategy is meant for; only used to
            phrase diagnostics.
    """

    name: str = "ORDERING"
    compare: Callable[[Any, Any], Any] | None = None
    equivalent_of: Callable[[Any], Any] | None = None
    value_type: type | None = None

    def equivalent(self, left: Any, right: Any) -> bool:
        if self.compare is not None:
            return self.compare(left, right) == 0
        return not left < right and not right < left

    def describe(self) -> str:
        subject = self.value_type.__name__ if self.value_type else "value"
        return f"{self.name} ({subject} compare-based equality)"


def _decimal_compare(left: Decimal, right: Decimal) -> Decimal:
    # NaN operands yield Decimal("NaN"), which never equals zero.
    return left.compare(right)


def rescaled_decimal(value: Decimal) -> Decimal:
    """Return ``value`` with two more trailing zeros: same value, new exponent."""
    _, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int):
        return value
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(digits) + 2)
        return value.quantize(Decimal((0, (1,), exponent - 2)))


NATURAL = Natural()
IGNORED = Ignored()
DECIMAL_COMPARE = OrderingBased(
    name="DECIMAL_COMPARE",
    compare=_decimal_compare,
    equivalent_of=rescaled_decimal,
    value_type=Decimal,
)
