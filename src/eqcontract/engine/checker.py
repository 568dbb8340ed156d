"""The invariant battery.

`InvariantChecker` runs the nine equality-contract checks against one
target, in a fixed order, using the example pairs synthesized for its
fields. Every check is a generator of `Violation` objects; the runner stops
at the first one in fail-fast mode.

Instances are rebuilt for every check. Only the boolean outcome of comparing
a base instance with a single-field variant is memoized, since several
checks need it and user ``__eq__`` implementations may be slow.

Exceptions escaping the type's own ``__eq__``, ``__ne__`` or ``__hash__`` are
contract violations of the check that triggered them, never crashes of the
run. Construction and configuration errors, on the other hand, propagate.
"""

from __future__ import annotations

import itertools
import logging
import reprlib
import types
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Annotated, Any, Union, get_args, get_origin

from eqcontract.domain.errors import (
    InvalidConfigurationError,
    UnconstructibleTypeError,
)
from eqcontract.domain.model import (
    ExamplePair,
    FieldDescriptor,
    Invariant,
    Skip,
    SubclassPolicy,
    TargetType,
    Violation,
    ViolationKind,
)
from eqcontract.domain.strategies import (
    ComparisonStrategy,
    Ignored,
    Natural,
    OrderingBased,
)
from eqcontract.engine.values import equal_variant
from eqcontract.interfaces.construction import ConstructionFailedError

if TYPE_CHECKING:
    from eqcontract.config import Configuration
    from eqcontract.engine.builder import InstanceBuilder

logger = logging.getLogger(__name__)

_repr = reprlib.Repr()
_repr.maxstring = 80
_repr.maxother = 200

_UNSET = object()


class _OperationRaised(Exception):
    """An equality or hash method of the target raised."""

    def __init__(self, operation: str, error: Exception) -> None:
        super().__init__(f"{operation} raised {type(error).__name__}: {error}")
        self.operation = operation
        self.error = error
        self.fields: tuple[str, ...] = ()
        self.context = ""

    def within(self, field: str, context: str) -> _OperationRaised:
        if not self.fields:
            self.fields = (field,)
            self.context = context
        return self

    def violation(self, invariant: Invariant) -> Violation:
        context = f" {self.context}" if self.context else ""
        return Violation(
            invariant,
            f"{self}{context}",
            fields=self.fields,
            expected=f"{self.operation} returns normally",
            actual=f"{type(self.error).__name__} raised",
            hint=(
                f"{self.operation} must not raise for valid instances; "
                "return NotImplemented for operands it cannot handle"
            ),
        )


class _Unrelated:
    """Instance of a class no target can be related to."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<unrelated object>"


def _eq(left: Any, right: Any) -> bool:
    try:
        return bool(left == right)
    except Exception as exc:  # pylint: disable=broad-except
        raise _OperationRaised("__eq__", exc) from exc


def _ne(left: Any, right: Any) -> bool:
    try:
        return bool(left != right)
    except Exception as exc:  # pylint: disable=broad-except
        raise _OperationRaised("__ne__", exc) from exc


def _hash(value: Any) -> int:
    try:
        return hash(value)
    except Exception as exc:  # pylint: disable=broad-except
        raise _OperationRaised("__hash__", exc) from exc


def _snapshots(**instances: Any) -> tuple[tuple[str, str], ...]:
    return tuple((label, _repr.repr(value)) for label, value in instances.items())


def _admits_none(annotation: Any) -> bool:
    if annotation is None or annotation is type(None):
        return True
    origin = get_origin(annotation)
    if origin is Annotated:
        return _admits_none(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return any(_admits_none(arm) for arm in get_args(annotation))
    return False


class InvariantChecker:
    """Runs the invariant battery against one target.

    Args:
        target: The introspected class.
        config: Options of the run.
        builder: Builds instances from field values.
        strategies: Resolved comparison strategy per field name.
        pairs: Example values per field name.
    """

    # pylint: disable=too-many-instance-attributes

    def __init__(
        self,
        target: TargetType,
        config: Configuration,
        builder: InstanceBuilder,
        strategies: Mapping[str, ComparisonStrategy],
        pairs: Mapping[str, ExamplePair],
    ) -> None:
        self._target = target
        self._config = config
        self._builder = builder
        self._strategies = dict(strategies)
        self._pairs = dict(pairs)
        self._skips: list[Skip] = []
        self._observed: dict[tuple[str, str], tuple[bool, bool]] = {}
        self._equivalents: dict[str, Any] = {}

    @property
    def battery(self) -> list[tuple[Invariant, Callable[[], Iterator[Violation]]]]:
        return [
            (Invariant.REFLEXIVITY, self.check_reflexivity),
            (Invariant.NULL_SAFETY, self.check_null_safety),
            (Invariant.TYPE_SAFETY, self.check_type_safety),
            (Invariant.SIGNIFICANT_FIELDS, self.check_significant_fields),
            (Invariant.STRATEGY_EQUIVALENCE, self.check_strategy_equivalence),
            (Invariant.INSIGNIFICANT_FIELDS, self.check_insignificant_fields),
            (Invariant.HASH_CONSISTENCY, self.check_hash_consistency),
            (Invariant.TRANSITIVITY, self.check_transitivity),
            (Invariant.SUBCLASS, self.check_subclass),
        ]

    def run(self) -> tuple[list[Violation], list[Skip]]:
        """Run every check that is not suppressed.

        Returns:
            The violations found, in detection order, and the skips recorded.
        """
        violations: list[Violation] = []
        for invariant, check in self.battery:
            if invariant in self._config.suppressed_checks:
                logger.debug(
                    "%s: check %s suppressed", self._target.name, invariant.title
                )
                continue
            logger.debug("%s: checking %s", self._target.name, invariant.title)
            for violation in self._guarded(invariant, check):
                logger.info(
                    "%s: %s violated: %s",
                    self._target.name,
                    invariant.title,
                    violation.explanation,
                )
                violations.append(violation)
                if self._config.fail_fast:
                    return violations, list(self._skips)
        return violations, list(self._skips)

    @staticmethod
    def _guarded(
        invariant: Invariant, check: Callable[[], Iterator[Violation]]
    ) -> Iterator[Violation]:
        try:
            yield from check()
        except _OperationRaised as exc:
            yield exc.violation(invariant)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _fields(self) -> tuple[FieldDescriptor, ...]:
        return self._target.fields

    def _instance(
        self, overrides: Mapping[str, Any] | None = None, cls: type | None = None
    ) -> Any:
        values = {name: pair.red for name, pair in self._pairs.items()}
        values.update(overrides or {})
        return self._builder.build(self._target, values, cls=cls)

    def _skip(
        self, invariant: Invariant, reason: str, field: str | None = None
    ) -> None:
        skip = Skip(invariant, reason, field)
        if skip not in self._skips:
            logger.debug("%s: skipped %s", self._target.name, skip)
            self._skips.append(skip)

    def _observe(self, name: str, value: Any, key: str = "blue") -> tuple[bool, bool]:
        """Return ``(x == y, y == x)`` where y differs from x only in ``name``."""
        if (name, key) not in self._observed:
            x = self._instance()
            y = self._instance({name: value})
            try:
                self._observed[name, key] = (_eq(x, y), _eq(y, x))
            except _OperationRaised as exc:
                exc.within(name, f"comparing instances that differ in {name}")
                raise
        return self._observed[name, key]

    def _observe_blue(self, name: str) -> tuple[bool, bool]:
        return self._observe(name, self._pairs[name].blue)

    def _equivalent_value(self, field: FieldDescriptor) -> Any:
        """Return a value equivalent to the field's red value under its strategy
        (plain ``==`` for natural fields) but represented differently, or
        `_UNSET` when there is none."""
        if field.name in self._equivalents:
            return self._equivalents[field.name]
        strategy = self._strategies[field.name]
        pair = self._pairs[field.name]
        value: Any = _UNSET
        if isinstance(strategy, Natural):
            if (variant := equal_variant(pair.red)) is not None:
                value = variant
        elif not isinstance(strategy, OrderingBased):
            pass
        elif not pair.distinct:
            value = pair.blue
        elif strategy.equivalent_of is None:
            self._skip(
                Invariant.STRATEGY_EQUIVALENCE,
                f"{strategy.name} provides no equivalent_of function",
                field.name,
            )
        else:
            try:
                comparable = strategy.equivalent(pair.red, pair.red)
                if comparable:
                    value = strategy.equivalent_of(pair.red)
                    equivalent = strategy.equivalent(pair.red, value)
            except Exception as exc:  # pylint: disable=broad-except
                raise InvalidConfigurationError(
                    f"{strategy.name}.equivalent_of failed for {pair.red!r}: {exc}"
                ) from exc
            if not comparable:
                self._skip(
                    Invariant.STRATEGY_EQUIVALENCE,
                    f"{pair.red!r} is not equivalent to itself under {strategy.name}",
                    field.name,
                )
            elif not equivalent:
                raise InvalidConfigurationError(
                    f"{strategy.name}.equivalent_of returned {value!r}, "
                    f"which is not equivalent to {pair.red!r}"
                )
        if value is not _UNSET and repr(value) == repr(pair.red):
            self._skip(
                Invariant.STRATEGY_EQUIVALENCE,
                f"no differently represented value equivalent to {pair.red!r} under "
                f"{strategy.name}",
                field.name,
            )
            value = _UNSET
        self._equivalents[field.name] = value
        return value

    def _observe_equivalent(self, name: str, value: Any) -> tuple[bool, bool]:
        return self._observe(name, value, key="equivalent")

    # ------------------------------------------------------------------
    # The checks
    # ------------------------------------------------------------------

    def check_reflexivity(self) -> Iterator[Violation]:
        x = self._instance()
        if not _eq(x, x):
            yield Violation(
                Invariant.REFLEXIVITY,
                "an instance does not equal itself",
                expected="x == x",
                actual="x != x",
                snapshots=_snapshots(x=x),
                hint="__eq__ must return True when an object is compared with itself",
            )
            return
        if _ne(x, x):
            yield Violation(
                Invariant.REFLEXIVITY,
                "__ne__ returns True when an instance is compared with itself",
                expected="not (x != x)",
                actual="x != x",
                snapshots=_snapshots(x=x),
                hint="remove the custom __ne__ or make it the negation of __eq__",
            )
            return
        copy = self._instance()
        if not self._target.declares_eq:
            yield Violation(
                Invariant.REFLEXIVITY,
                f"{self._target.name} does not define __eq__, so an identical copy "
                "of an instance is not equal to it",
                expected="x == copy",
                actual="x != copy (identity comparison)",
                snapshots=_snapshots(x=x, copy=copy),
                hint="define __eq__ and __hash__ over the significant fields, "
                "or use @dataclass",
            )
            return
        first = _eq(x, copy)
        if not first:
            yield Violation(
                Invariant.REFLEXIVITY,
                "an identical copy of an instance is not equal to it",
                expected="x == copy",
                actual="x != copy",
                snapshots=_snapshots(x=x, copy=copy),
                hint="compare field values in __eq__, not object identities",
            )
            return
        if not _eq(x, copy) or not _eq(copy, x):
            yield Violation(
                Invariant.REFLEXIVITY,
                "repeating the comparison of an instance with its copy gave a "
                "different result",
                expected="x == copy every time",
                actual="x == copy only sometimes",
                snapshots=_snapshots(x=x, copy=copy),
                hint="__eq__ must not depend on mutable or random state",
            )

    def check_null_safety(self) -> Iterator[Violation]:
        x = self._instance()
        if _eq(x, None):
            yield Violation(
                Invariant.NULL_SAFETY,
                "an instance equals None",
                expected="x != None",
                actual="x == None",
                snapshots=_snapshots(x=x),
                hint="return NotImplemented when the other operand is None",
            )
            return
        if not _ne(x, None):
            yield Violation(
                Invariant.NULL_SAFETY,
                "__ne__ returns False when an instance is compared with None",
                expected="x != None",
                actual="not (x != None)",
                snapshots=_snapshots(x=x),
                hint="remove the custom __ne__ or make it the negation of __eq__",
            )
            return
        for field in self._fields:
            if not _admits_none(field.declared_type):
                continue
            if self._pairs[field.name].red is None:
                continue
            try:
                yield from self._check_none_field(x, field.name)
            except _OperationRaised as exc:
                exc.within(field.name, f"while field {field.name} is None")
                raise

    def _check_none_field(self, x: Any, name: str) -> Iterator[Violation]:
        v = self._instance({name: None})
        w = self._instance({name: None})
        if not _eq(v, v):
            yield Violation(
                Invariant.NULL_SAFETY,
                f"an instance whose field {name} is None does not equal itself",
                fields=(name,),
                expected="x == x",
                actual="x != x",
                snapshots=_snapshots(x=v),
                hint=f"handle None in the comparison of {name}",
            )
            return
        if self._target.declares_eq and not _eq(v, w):
            yield Violation(
                Invariant.NULL_SAFETY,
                f"two identical instances whose field {name} is None are not equal",
                fields=(name,),
                expected="x == copy",
                actual="x != copy",
                snapshots=_snapshots(x=v, copy=w),
                hint=f"handle None in the comparison of {name}",
            )
            return
        _eq(v, x)
        _eq(x, v)
        if self._target.hashable:
            _hash(v)

    def check_type_safety(self) -> Iterator[Violation]:
        x = self._instance()
        other = _Unrelated()
        try:
            result = _eq(x, other)
        except _OperationRaised as exc:
            yield Violation(
                Invariant.TYPE_SAFETY,
                f"{exc} when an instance is compared with an object of an unrelated class",
                expected="x != other",
                actual=f"{type(exc.error).__name__} raised",
                snapshots=_snapshots(x=x, other=other),
                hint="return NotImplemented for operands of other types instead of "
                "accessing their attributes",
            )
            return
        if result:
            yield Violation(
                Invariant.TYPE_SAFETY,
                "an instance equals an object of an unrelated class",
                expected="x != other",
                actual="x == other",
                snapshots=_snapshots(x=x, other=other),
                hint="check the type of the other operand in __eq__",
            )

    def check_significant_fields(self) -> Iterator[Violation]:
        for field in self._fields:
            name = field.name
            strategy = self._strategies[name]
            pair = self._pairs[name]
            if isinstance(strategy, Ignored):
                continue
            if not pair.distinct:
                reason = f"no second value distinct from {pair.red!r} is available"
                if isinstance(strategy, OrderingBased):
                    reason = (
                        f"no second value distinct from {pair.red!r} under "
                        f"{strategy.name} is available"
                    )
                self._skip(Invariant.SIGNIFICANT_FIELDS, reason, name)
                continue
            xy, yx = self._observe_blue(name)
            if xy != yx:
                x, y = self._instance(), self._instance({name: pair.blue})
                yield Violation(
                    Invariant.SIGNIFICANT_FIELDS,
                    f"__eq__ is not symmetric for instances that differ in field {name}",
                    fields=(name,),
                    expected="x == y and y == x agree",
                    actual=f"x == y is {xy}, y == x is {yx}",
                    snapshots=_snapshots(x=x, y=y),
                    hint="compare the same fields in the same way regardless of "
                    "which operand is self",
                )
                continue
            if xy:
                if self._config.all_fields_used:
                    x, y = self._instance(), self._instance({name: pair.blue})
                    yield Violation(
                        Invariant.SIGNIFICANT_FIELDS,
                        f"__eq__ does not use field {name}",
                        fields=(name,),
                        expected=f"x != y when only {name} differs",
                        actual="x == y",
                        snapshots=_snapshots(x=x, y=y),
                        hint=f"compare {name} in __eq__, or list it in ignored_fields",
                    )
                continue
            x, y = self._instance(), self._instance({name: pair.blue})
            if not _ne(x, y) or not _ne(y, x):
                yield Violation(
                    Invariant.SIGNIFICANT_FIELDS,
                    f"__ne__ disagrees with __eq__ for instances that differ in field {name}",
                    fields=(name,),
                    expected="x != y",
                    actual="not (x != y)",
                    snapshots=_snapshots(x=x, y=y),
                    hint="remove the custom __ne__ or make it the negation of __eq__",
                )

    def check_strategy_equivalence(self) -> Iterator[Violation]:
        for field in self._fields:
            strategy = self._strategies[field.name]
            if not isinstance(strategy, OrderingBased):
                continue
            value = self._equivalent_value(field)
            if value is _UNSET:
                continue
            xy, yx = self._observe_equivalent(field.name, value)
            if xy and yx:
                continue
            red = self._pairs[field.name].red
            x, y = self._instance(), self._instance({field.name: value})
            yield Violation(
                Invariant.STRATEGY_EQUIVALENCE,
                f"{strategy.describe()} is configured for field {field.name}, but "
                f"__eq__ treats {red!r} and {value!r} as different: it compares "
                f"{field.name} by representation instead of with compare",
                kind=ViolationKind.STRATEGY_MISMATCH,
                fields=(field.name,),
                expected=f"x == y because {red!r} and {value!r} compare equal",
                actual=f"x == y is {xy}, y == x is {yx}",
                snapshots=_snapshots(x=x, y=y),
                hint=f"compare {field.name} in __eq__ with the type's ordering "
                f"(e.g. a.compare(b) == 0), or drop the {strategy.name} override",
            )

    def check_insignificant_fields(self) -> Iterator[Violation]:
        insignificant: list[str] = []
        for field in self._fields:
            name = field.name
            pair = self._pairs[name]
            if not pair.distinct:
                continue
            observed = self._observe_blue(name)
            if isinstance(self._strategies[name], Ignored):
                if observed != (True, True):
                    declared = "compare=False" if not field.compare else "ignored"
                    x, y = self._instance(), self._instance({name: pair.blue})
                    yield Violation(
                        Invariant.INSIGNIFICANT_FIELDS,
                        f"field {name} is declared insignificant ({declared}) but "
                        "__eq__ uses it",
                        fields=(name,),
                        expected=f"x == y when only {name} differs",
                        actual="x != y",
                        snapshots=_snapshots(x=x, y=y),
                        hint=f"stop comparing {name} in __eq__, or stop ignoring it",
                    )
                    continue
                insignificant.append(name)
            elif observed == (True, True):
                insignificant.append(name)
        if len(insignificant) < 2:
            return
        x = self._instance()
        y = self._instance({name: self._pairs[name].blue for name in insignificant})
        if not (_eq(x, y) and _eq(y, x)):
            yield Violation(
                Invariant.INSIGNIFICANT_FIELDS,
                f"changing fields {', '.join(insignificant)} one at a time keeps "
                "instances equal, but changing them together does not",
                fields=tuple(insignificant),
                expected="x == y",
                actual="x != y",
                snapshots=_snapshots(x=x, y=y),
                hint="__eq__ must depend on each field independently",
            )

    def check_hash_consistency(self) -> Iterator[Violation]:
        if not self._target.hashable:
            self._skip(
                Invariant.HASH_CONSISTENCY,
                f"{self._target.name} is unhashable (__hash__ is None)",
            )
            return
        x = self._instance()
        hx = _hash(x)
        if _hash(x) != hx:
            yield Violation(
                Invariant.HASH_CONSISTENCY,
                "hashing the same instance twice gave different values",
                expected="hash(x) == hash(x)",
                actual="hash(x) changes",
                snapshots=_snapshots(x=x),
                hint="__hash__ must not depend on mutable or random state",
            )
            return
        copy = self._instance()
        if self._target.declares_eq and _eq(x, copy) and _hash(copy) != hx:
            yield Violation(
                Invariant.HASH_CONSISTENCY,
                "identical copies are equal but hash differently",
                expected="hash(x) == hash(copy)",
                actual=f"{hx} != {_hash(copy)}",
                snapshots=_snapshots(x=x, copy=copy),
                hint="__hash__ must only use the values compared in __eq__, not id()",
            )
            return
        for field in self._fields:
            yield from self._check_field_hash(field, x, hx)

    def _check_field_hash(
        self, field: FieldDescriptor, x: Any, hx: int
    ) -> Iterator[Violation]:
        name = field.name
        pair = self._pairs[name]
        if pair.distinct and self._observe_blue(name) == (True, True):
            y = self._instance({name: pair.blue})
            if (hy := _hash(y)) != hx:
                yield Violation(
                    Invariant.HASH_CONSISTENCY,
                    f"__hash__ relies on field {name}, but __eq__ does not: "
                    "x == y yet hash(x) != hash(y)",
                    fields=(name,),
                    expected="hash(x) == hash(y)",
                    actual=f"{hx} != {hy}",
                    snapshots=_snapshots(x=x, y=y),
                    hint=f"leave {name} out of __hash__, or compare it in __eq__",
                )
                return
        strategy = self._strategies[name]
        value = self._equivalent_value(field)
        if value is _UNSET or self._observe_equivalent(name, value) != (True, True):
            return
        y = self._instance({name: value})
        if (hy := _hash(y)) == hx:
            return
        if isinstance(strategy, Natural):
            yield Violation(
                Invariant.HASH_CONSISTENCY,
                f"__eq__ treats {pair.red!r} and {value!r} in field {name} as equal, "
                "but __hash__ does not: the instances compare equal yet hash "
                "differently",
                fields=(name,),
                expected="hash(x) == hash(y)",
                actual=f"{hx} != {hy}",
                snapshots=_snapshots(x=x, y=y),
                hint=f"hash {name} the way __eq__ compares it: hash the value itself "
                "or a normalized form (e.g. value.normalize() for Decimal), not its "
                "string representation",
            )
        else:
            yield Violation(
                Invariant.HASH_CONSISTENCY,
                f"{strategy.describe()} is configured for field {name} and __eq__ "
                f"honors it, but __hash__ does not: {pair.red!r} and {value!r} "
                "compare equal yet the instances hash differently",
                kind=ViolationKind.STRATEGY_MISMATCH,
                fields=(name,),
                expected="hash(x) == hash(y)",
                actual=f"{hx} != {hy}",
                snapshots=_snapshots(x=x, y=y),
                hint=f"hash a normalized form of {name} (e.g. value.normalize() "
                "for Decimal) so that values equal under compare hash alike, "
                f"or drop the {strategy.name} override",
            )

    def check_transitivity(self) -> Iterator[Violation]:
        names = [f.name for f in self._fields if self._pairs[f.name].distinct]
        for first, second in itertools.permutations(names, 2):
            x = self._instance()
            y = self._instance({first: self._pairs[first].blue})
            z = self._instance(
                {first: self._pairs[first].blue, second: self._pairs[second].blue}
            )
            if _eq(x, y) and _eq(y, z) and not _eq(x, z):
                yield Violation(
                    Invariant.TRANSITIVITY,
                    f"x == y and y == z but x != z, where y differs from x in {first} "
                    f"and z differs from y in {second}",
                    fields=(first, second),
                    expected="x == z",
                    actual="x != z",
                    snapshots=_snapshots(x=x, y=y, z=z),
                    hint="combine the field comparisons in __eq__ with 'and'",
                )
                return

    def check_subclass(self) -> Iterator[Violation]:
        if self._target.is_final:
            self._skip(Invariant.SUBCLASS, f"{self._target.name} is final")
            return
        try:
            subclass = self._builder.trivial_subclass(self._target)
            sub = self._instance(cls=subclass)
        except (ConstructionFailedError, UnconstructibleTypeError) as exc:
            self._skip(Invariant.SUBCLASS, f"no trivial subclass instance ({exc})")
            return
        x = self._instance()
        xs, sx = _eq(x, sub), _eq(sub, x)
        policy = self._config.subclass_policy
        snapshots = _snapshots(x=x, subclass=sub)
        if xs != sx:
            yield Violation(
                Invariant.SUBCLASS,
                "comparing an instance with an instance of a trivial subclass is "
                "not symmetric",
                expected="x == sub and sub == x agree",
                actual=f"x == sub is {xs}, sub == x is {sx}",
                snapshots=snapshots,
                hint="check the other operand's type the same way on both sides: "
                "type(self) is type(other), or isinstance() against the same base",
            )
        elif policy is SubclassPolicy.EQUAL and not xs:
            yield Violation(
                Invariant.SUBCLASS,
                "an instance of a trivial subclass with equal fields is not equal",
                expected="x == sub",
                actual="x != sub",
                snapshots=snapshots,
                hint="use isinstance() in __eq__, mark the class @final, or choose "
                "another subclass_policy",
            )
        elif policy is SubclassPolicy.STRICT and xs:
            yield Violation(
                Invariant.SUBCLASS,
                "an instance of a trivial subclass is equal although strict "
                "subclass equality is required",
                expected="x != sub",
                actual="x == sub",
                snapshots=snapshots,
                hint="compare type(self) is type(other) in __eq__",
            )
        elif xs and self._target.hashable and _hash(x) != _hash(sub):
            yield Violation(
                Invariant.SUBCLASS,
                "an instance of a trivial subclass is equal but hashes differently",
                expected="hash(x) == hash(sub)",
                actual="hash(x) != hash(sub)",
                snapshots=snapshots,
                hint="__hash__ must not depend on the concrete class",
            )
