"""Example value synthesis.

`ValueFactory` produces two example values, *red* and *blue*, for any type a
field may declare. Built-in types draw from a short, fixed list of
candidates; red is the first candidate and blue the first later candidate
that the active comparison strategy does not consider equivalent to red.
Containers and unions are resolved from their parameters, and any other
class is synthesized recursively from its own fields.

Results are cached per ``(type, strategy)`` for the lifetime of the factory,
so two fields with the same declared type always receive the same values
within one run. Everything is deterministic: no randomness is involved.
"""

from __future__ import annotations

import collections
import collections.abc as cabc
import datetime as dt
import logging
import re
import types
import typing
import uuid
from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Annotated, Any, Literal, TypeVar, Union

from eqcontract.domain.errors import (
    InvalidConfigurationError,
    RecursiveDataStructureError,
    UnconstructibleTypeError,
    UnresolvableTypeError,
)
from eqcontract.domain.model import ExamplePair
from eqcontract.domain.strategies import (
    NATURAL,
    ComparisonStrategy,
    Ignored,
    Natural,
    rescaled_decimal,
)

if TYPE_CHECKING:
    from eqcontract.engine.builder import InstanceBuilder
    from eqcontract.engine.fields import FieldAccessor
    from eqcontract.engine.registry import ComparisonStrategyRegistry

logger = logging.getLogger(__name__)


def _red_callable(*args: Any, **kwargs: Any) -> str:
    return "red"


def _blue_callable(*args: Any, **kwargs: Any) -> str:
    return "blue"


_UTC = dt.timezone.utc

# Candidate lists for leaf types, keyed by exact type.
CANDIDATES: dict[type, Callable[[], list[Any]]] = {
    bool: lambda: [True, False],
    int: lambda: [1, 2, 3],
    float: lambda: [0.5, 1.5, 2.5],
    complex: lambda: [1 + 1j, 2 + 2j],
    str: lambda: ["red", "blue", "green"],
    bytes: lambda: [b"red", b"blue"],
    bytearray: lambda: [bytearray(b"red"), bytearray(b"blue")],
    Decimal: lambda: [Decimal("1"), Decimal("2"), Decimal("3")],
    Fraction: lambda: [Fraction(1, 2), Fraction(1, 3)],
    dt.datetime: lambda: [
        dt.datetime(2001, 2, 3, 4, 5, 6, tzinfo=_UTC),
        dt.datetime(2002, 3, 4, 5, 6, 7, tzinfo=_UTC),
    ],
    dt.date: lambda: [dt.date(2001, 2, 3), dt.date(2002, 3, 4)],
    dt.time: lambda: [dt.time(1, 2, 3), dt.time(4, 5, 6)],
    dt.timedelta: lambda: [dt.timedelta(seconds=1), dt.timedelta(seconds=2)],
    dt.timezone: lambda: [dt.timezone.utc, dt.timezone(dt.timedelta(hours=1))],
    uuid.UUID: lambda: [uuid.UUID(int=1), uuid.UUID(int=2)],
    PurePath: lambda: [PurePath("red"), PurePath("blue")],
    Path: lambda: [Path("red"), Path("blue")],
    re.Pattern: lambda: [re.compile("red"), re.compile("blue")],
    range: lambda: [range(1), range(2)],
    type: lambda: [int, str],
    object: lambda: [object(), object()],
    cabc.Hashable: lambda: [object(), object()],
}

# Unparameterized abstract collections and the builtin that stands in for them.
_COLLECTION_STAND_INS: dict[Any, type] = {
    cabc.Iterable: list,
    cabc.Collection: list,
    cabc.Container: list,
    cabc.Reversible: list,
    cabc.Sequence: list,
    cabc.MutableSequence: list,
    cabc.Set: frozenset,
    cabc.MutableSet: set,
    cabc.Mapping: dict,
    cabc.MutableMapping: dict,
}

# Alternative representations of a value that still compare equal to it.
EQUAL_VARIANTS: dict[type, Callable[[Any], Any]] = {
    Decimal: rescaled_decimal,
}

_SEQUENCES = (list, collections.deque)
_SETS = (set, frozenset)
_MAPPINGS = (dict, collections.OrderedDict, collections.Counter)


class ValueFactory:
    """Produces red/blue example values for types.

    Args:
        accessor: The run's field accessor (introspects user classes).
        builder: The run's instance builder (builds user class examples).
        registry: The run's strategy registry (strategies for nested types).
        prefab_values: User-supplied ``(red, blue)`` pairs keyed by type;
            they take precedence over everything else.
    """

    def __init__(
        self,
        accessor: FieldAccessor,
        builder: InstanceBuilder,
        registry: ComparisonStrategyRegistry,
        prefab_values: Mapping[Any, tuple[Any, Any]] | None = None,
    ) -> None:
        self._accessor = accessor
        self._builder = builder
        self._registry = registry
        self._prefab = dict(prefab_values or {})
        self._cache: dict[tuple[Any, ComparisonStrategy], ExamplePair] = {}
        self._stack: list[type] = []
        self._fallbacks = 0

    def values_for(
        self, type_: Any, strategy: ComparisonStrategy = NATURAL
    ) -> ExamplePair:
        """Return the red/blue pair for ``type_`` under ``strategy``.

        Args:
            type_: A class or typing construct.
            strategy: The comparison strategy the pair must be distinct under.
                `Ignored` fields are probed with natural equality.

        Returns:
            An `ExamplePair`; ``distinct`` is False when the type offers no
            second value that differs from the first under ``strategy``.

        Raises:
            UnresolvableTypeError: If no example values can be derived.
            InvalidConfigurationError: If ``strategy`` cannot compare the values.
        """
        if isinstance(strategy, Ignored):
            strategy = NATURAL
        key = (type_, strategy)
        try:
            if (cached := self._cache.get(key)) is not None:
                return cached
        except TypeError:
            key = None  # unhashable annotation, never cached
        fallbacks = self._fallbacks
        pair = self._resolve(type_, strategy)
        if key is not None and self._fallbacks == fallbacks:
            self._cache[key] = pair
        return pair

    # ------------------------------------------------------------------

    def _resolve(self, type_: Any, strategy: ComparisonStrategy) -> ExamplePair:
        # pylint: disable=too-many-return-statements
        if (prefab := self._prefab_for(type_)) is not None:
            return self._pick(type_, list(prefab), strategy)
        if type_ is Any:
            return self._pick(type_, CANDIDATES[object](), strategy)
        if type_ is None or type_ is types.NoneType:
            return ExamplePair(None, None, distinct=False)
        if isinstance(type_, TypeVar):
            return self._resolve_typevar(type_, strategy)
        if isinstance(type_, typing.NewType):
            return self.values_for(type_.__supertype__, strategy)
        if isinstance(type_, (str, typing.ForwardRef)):
            raise UnresolvableTypeError(type_, "unresolved forward reference")

        origin = typing.get_origin(type_)
        if origin is Annotated:
            return self.values_for(typing.get_args(type_)[0], strategy)
        if origin is Literal:
            return self._pick(type_, list(typing.get_args(type_)), strategy)
        if origin is Union or origin is types.UnionType:
            return self._resolve_union(type_, strategy)
        if origin is not None:
            return self._resolve_generic(type_, origin, typing.get_args(type_), strategy)

        if not isinstance(type_, type):
            raise UnresolvableTypeError(type_, "unsupported type construct")
        if issubclass(type_, Enum):
            members = list(type_)
            if not members:
                raise UnresolvableTypeError(type_, "enum has no members")
            return self._pick(type_, members, strategy)
        if type_ in CANDIDATES:
            return self._pick(type_, CANDIDATES[type_](), strategy)
        if type_ is cabc.Callable:
            return self._pick(type_, [_red_callable, _blue_callable], strategy)
        if (stand_in := _COLLECTION_STAND_INS.get(type_)) is not None:
            return self._resolve_generic(type_, stand_in, (), strategy)
        if type_ in (list, tuple, set, frozenset, dict) or type_ in _MAPPINGS:
            return self._resolve_generic(type_, type_, (), strategy)
        if (converted := self._from_builtin_base(type_)) is not None:
            return self._pick(type_, converted, strategy)
        return self._resolve_class(type_, strategy)

    def _prefab_for(self, type_: Any) -> tuple[Any, Any] | None:
        try:
            return self._prefab.get(type_)
        except TypeError:
            return None

    def _pick(
        self, type_: Any, candidates: Sequence[Any], strategy: ComparisonStrategy
    ) -> ExamplePair:
        if not candidates:
            raise UnresolvableTypeError(type_, "no candidate values")
        red = candidates[0]
        for candidate in candidates[1:]:
            try:
                equivalent = strategy.equivalent(red, candidate)
            except Exception as exc:  # pylint: disable=broad-except
                if isinstance(strategy, Natural):
                    # __eq__ of a nested value is broken; the checks report it.
                    logger.debug("Comparing %s examples raised %r", _name(type_), exc)
                    return ExamplePair(red, candidate)
                raise InvalidConfigurationError(
                    f"Strategy {strategy.describe()} cannot compare values of "
                    f"{_name(type_)}: {type(exc).__name__}: {exc}"
                ) from exc
            if not equivalent:
                return ExamplePair(red, candidate)
        blue = candidates[1] if len(candidates) > 1 else red
        logger.debug(
            "%s offers no second value distinct under %s", _name(type_), strategy.name
        )
        return ExamplePair(red, blue, distinct=False)

    def _resolve_typevar(
        self, type_: TypeVar, strategy: ComparisonStrategy
    ) -> ExamplePair:
        if type_.__bound__ is not None:
            return self.values_for(type_.__bound__, strategy)
        if type_.__constraints__:
            return self.values_for(type_.__constraints__[0], strategy)
        return self.values_for(Any, strategy)

    def _resolve_union(self, type_: Any, strategy: ComparisonStrategy) -> ExamplePair:
        arms = [a for a in typing.get_args(type_) if a is not types.NoneType]
        first_error: UnresolvableTypeError | None = None
        fallback: ExamplePair | None = None
        for arm in arms:
            try:
                pair = self.values_for(arm, strategy)
            except RecursiveDataStructureError as exc:
                if len(arms) < len(typing.get_args(type_)):
                    # Optional recursion: stop at None in the nested position.
                    self._fallbacks += 1
                    return ExamplePair(None, None, distinct=False)
                first_error = first_error or exc
                continue
            except UnresolvableTypeError as exc:
                first_error = first_error or exc
                continue
            if pair.distinct:
                return pair
            fallback = fallback or pair
        if fallback is not None:
            return fallback
        if first_error is not None:
            raise first_error
        return ExamplePair(None, None, distinct=False)

    def _resolve_generic(
        self,
        type_: Any,
        origin: Any,
        args: tuple[Any, ...],
        strategy: ComparisonStrategy,
    ) -> ExamplePair:
        # pylint: disable=too-many-return-statements
        origin = _COLLECTION_STAND_INS.get(origin, origin)
        if origin is type:
            return self._resolve_type_object(type_, args, strategy)
        if origin is cabc.Callable:
            return self._pick(type_, [_red_callable, _blue_callable], strategy)
        if origin is tuple:
            return self._resolve_tuple(type_, args, strategy)

        if origin in _SEQUENCES or origin in _SETS:
            element = self._nested(args[0] if args else Any)
            if element is None:
                return self._pick(type_, [origin(), origin()], strategy)
            return self._pick(
                type_, [origin([element.red]), origin([element.blue])], strategy
            )
        if origin in _MAPPINGS:
            key_type, value_type = args if len(args) == 2 else (Any, Any)
            keys, values = self._nested(key_type), self._nested(value_type)
            if keys is None or values is None:
                return self._pick(type_, [origin(), origin()], strategy)
            return self._pick(
                type_,
                [origin({keys.red: values.red}), origin({keys.blue: values.blue})],
                strategy,
            )
        if isinstance(origin, type):
            # A user generic such as Box[int]: build the class itself.
            return self._resolve_class(origin, strategy)
        raise UnresolvableTypeError(type_, "unsupported generic type")

    def _resolve_tuple(
        self, type_: Any, args: tuple[Any, ...], strategy: ComparisonStrategy
    ) -> ExamplePair:
        if len(args) == 2 and args[1] is Ellipsis:
            args = (args[0],)
        elif not args and typing.get_origin(type_) is None:
            args = (Any,)  # bare ``tuple``
        if not args:
            return ExamplePair((), (), distinct=False)
        pairs = [self._nested(arg) for arg in args]
        if any(p is None for p in pairs):
            return ExamplePair((), (), distinct=False)
        red = tuple(p.red for p in pairs)  # type: ignore[union-attr]
        blue = tuple(p.blue for p in pairs)  # type: ignore[union-attr]
        return self._pick(type_, [red, blue], strategy)

    def _resolve_type_object(
        self, type_: Any, args: tuple[Any, ...], strategy: ComparisonStrategy
    ) -> ExamplePair:
        base = args[0] if args else Any
        if not isinstance(base, type):
            return self._pick(type_, CANDIDATES[type](), strategy)
        try:
            variant = type(base)(f"{base.__name__}Variant", (base,), {})
        except Exception:  # pylint: disable=broad-except
            return ExamplePair(base, base, distinct=False)
        return self._pick(type_, [base, variant], strategy)

    def _nested(self, type_: Any) -> ExamplePair | None:
        """Values for a container element; None when recursion forces emptiness."""
        try:
            return self.values_for(type_, self._registry.strategy_for(type_))
        except RecursiveDataStructureError:
            self._fallbacks += 1
            return None

    @staticmethod
    def _from_builtin_base(type_: type) -> list[Any] | None:
        """Convert builtin candidates for subclasses such as ``class Name(str)``."""
        for base in type_.__mro__[1:]:
            if base is object or base not in CANDIDATES:
                continue
            try:
                return [type_(c) for c in CANDIDATES[base]()]
            except Exception:  # pylint: disable=broad-except
                return None
        return None

    def _resolve_class(self, type_: type, strategy: ComparisonStrategy) -> ExamplePair:
        if type_ in self._stack:
            raise RecursiveDataStructureError([*self._stack, type_])
        self._stack.append(type_)
        try:
            target = self._accessor.introspect(type_)
            reds: dict[str, Any] = {}
            blues: dict[str, Any] = {}
            for field in target.fields:
                pair = self.values_for(
                    field.declared_type, self._registry.strategy_for(field.declared_type)
                )
                reds[field.name] = pair.red
                blues[field.name] = pair.blue
            try:
                red = self._builder.build(target, reds)
                blue = self._builder.build(target, blues)
            except UnconstructibleTypeError as exc:
                raise UnresolvableTypeError(
                    type_, f"no way to construct it ({'; '.join(exc.reasons)})"
                ) from exc
        finally:
            self._stack.pop()
        logger.debug("Synthesized example values for %s", type_.__qualname__)
        return self._pick(type_, [red, blue], strategy)


def _name(type_: Any) -> str:
    return type_.__qualname__ if isinstance(type_, type) else repr(type_)


def equal_variant(value: Any) -> Any | None:
    """Return a value that ``==`` ``value`` but is represented differently.

    ``Decimal("1")`` yields ``Decimal("1.00")``. Returns None for types
    without such an alternative.
    """
    variant_of = EQUAL_VARIANTS.get(type(value))
    if variant_of is None:
        return None
    variant = variant_of(value)
    if variant != value or repr(variant) == repr(value):
        return None
    return variant
