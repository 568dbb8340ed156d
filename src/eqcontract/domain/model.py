"""Value objects shared across the verification engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Invariant(Enum):
    """The fixed battery of contract checks, in execution order."""

    REFLEXIVITY = "reflexivity"
    NULL_SAFETY = "null safety"
    TYPE_SAFETY = "type safety"
    SIGNIFICANT_FIELDS = "significant fields"
    STRATEGY_EQUIVALENCE = "strategy equivalence"
    INSIGNIFICANT_FIELDS = "insignificant fields"
    HASH_CONSISTENCY = "hash consistency"
    TRANSITIVITY = "transitivity"
    SUBCLASS = "subclass"

    @property
    def title(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Invariant | str) -> Invariant:
        """Return the member for ``value``; accepts members, names or titles.

        Raises:
            ValueError: If ``value`` names no invariant.
        """
        if isinstance(value, Invariant):
            return value
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown invariant: {value!r}") from None


class SubclassPolicy(Enum):
    """How a type is expected to compare with a trivial subclass of itself."""

    SYMMETRIC = "symmetric"  # either outcome, as long as both directions agree
    EQUAL = "equal"  # subclass instances with equal fields must be equal
    STRICT = "strict"  # subclass instances must never be equal


class ViolationKind(Enum):
    """Whether a violation comes from the type itself or from a configured strategy."""

    CONTRACT = "contract"
    STRATEGY_MISMATCH = "strategy mismatch"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A single piece of declared instance state.

    Attributes:
        name: Attribute name as stored on the instance.
        declared_type: The annotation (or ``Any`` when undeclared).
        owner: The class in the inheritance chain that declares the field.
            When a subclass redeclares a name, the subclass owns it.
        compare: False when the declaration itself opts the field out of
            equality (``dataclasses.field(compare=False)``).
    """

    name: str
    declared_type: Any
    owner: type
    compare: bool = True

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.__qualname__}.{self.name}"


@dataclass(frozen=True)
class TargetType:
    """The introspected shape of a class under verification."""

    # pylint: disable=too-many-instance-attributes

    cls: type
    fields: tuple[FieldDescriptor, ...]
    declares_eq: bool
    declares_hash: bool
    hashable: bool
    is_abstract: bool
    is_final: bool
    is_dataclass: bool = False

    @property
    def name(self) -> str:
        return self.cls.__qualname__

    def field(self, name: str) -> FieldDescriptor:
        """Return the descriptor named ``name``.

        Raises:
            KeyError: If the type declares no such field.
        """
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        raise KeyError(name)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)


@dataclass(frozen=True)
class ExamplePair:
    """Two example values for a type: ``red`` and ``blue``.

    ``distinct`` is False when no second value could be found that differs
    from ``red`` under the active comparison strategy (a one-member enum,
    ``None``, an empty tuple type, ...).
    """

    red: Any
    blue: Any
    distinct: bool = True


@dataclass(frozen=True)
class Skip:
    """A check that was deliberately not exercised, kept so it stays visible."""

    invariant: Invariant
    reason: str
    field: str | None = None

    def __str__(self) -> str:
        where = f" [{self.field}]" if self.field else ""
        return f"{self.invariant.title}{where}: {self.reason}"


@dataclass(frozen=True)
class Violation:
    """One broken invariant with the diagnostic payload needed to fix it."""

    # pylint: disable=too-many-instance-attributes

    invariant: Invariant
    explanation: str
    kind: ViolationKind = ViolationKind.CONTRACT
    fields: tuple[str, ...] = ()
    expected: str = ""
    actual: str = ""
    hint: str | None = None
    snapshots: tuple[tuple[str, str], ...] = ()

    @property
    def field(self) -> str | None:
        return self.fields[0] if self.fields else None
