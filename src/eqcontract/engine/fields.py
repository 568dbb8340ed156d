"""Field introspection and visibility-independent field access.

`FieldAccessor` enumerates the instance state a class declares, walking the
inheritance chain from the root down, and reads or writes that state on
already-constructed instances regardless of ``frozen=True`` dataclasses,
``__slots__`` or read-only ``__setattr__`` overrides.

Declared state is taken, in order of preference, from:

1. class-level annotations on every class in the MRO (``ClassVar`` and
   ``InitVar`` excluded),
2. ``__slots__`` entries without an annotation, typed from the matching
   ``__init__`` parameter when that one is annotated,
3. the parameters of ``__init__`` when a class declares neither.

A name redeclared by a subclass keeps the position of its first declaration
but is attributed to the subclass, which is the level whose declaration is
in force.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from typing import Any, ClassVar, Final, get_args, get_origin

from eqcontract.domain.errors import UnresolvableTypeError
from eqcontract.domain.model import FieldDescriptor, TargetType

logger = logging.getLogger(__name__)

_SKIPPED_SLOTS = frozenset({"__dict__", "__weakref__"})


class FieldAccessor:
    """Introspects classes and gets/sets their fields.

    Introspection results are cached per accessor; one accessor belongs to
    one verification run.
    """

    def __init__(self) -> None:
        self._cache: dict[type, TargetType] = {}

    def introspect(self, cls: type) -> TargetType:
        """Return the (cached) `TargetType` describing ``cls``.

        Raises:
            TypeError: If ``cls`` is not a class.
            UnresolvableTypeError: If an annotation cannot be evaluated.
        """
        if not isinstance(cls, type):
            raise TypeError(f"{cls!r} is not a class")
        if (cached := self._cache.get(cls)) is not None:
            return cached
        target = TargetType(
            cls=cls,
            fields=self._collect_fields(cls),
            declares_eq=_declares(cls, "__eq__"),
            declares_hash=_declares(cls, "__hash__"),
            hashable=getattr(cls, "__hash__", None) is not None,
            is_abstract=inspect.isabstract(cls),
            is_final=bool(getattr(cls, "__final__", False)),
            is_dataclass=dataclasses.is_dataclass(cls),
        )
        logger.debug(
            "Introspected %s: fields=%s, hashable=%s, abstract=%s, final=%s",
            target.name,
            list(target.field_names),
            target.hashable,
            target.is_abstract,
            target.is_final,
        )
        self._cache[cls] = target
        return target

    def fields_of(self, cls: type) -> tuple[FieldDescriptor, ...]:
        """Return the ordered field descriptors of ``cls``."""
        return self.introspect(cls).fields

    @staticmethod
    def get(instance: Any, field: FieldDescriptor | str) -> Any:
        """Read a field from ``instance``."""
        name = field if isinstance(field, str) else field.name
        return object.__getattribute__(instance, name)

    @staticmethod
    def set(instance: Any, field: FieldDescriptor | str, value: Any) -> None:
        """Write a field on ``instance``, bypassing ``__setattr__`` overrides.

        Raises:
            AttributeError: If the attribute is read-only at the storage level
                (e.g. a ``NamedTuple`` field).
        """
        name = field if isinstance(field, str) else field.name
        object.__setattr__(instance, name, value)

    # ------------------------------------------------------------------

    def _collect_fields(self, cls: type) -> tuple[FieldDescriptor, ...]:
        collected: dict[str, FieldDescriptor] = {}
        compare_flags = _dataclass_compare_flags(cls)

        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            for name, annotation in _own_annotations(klass).items():
                if _is_class_level(annotation):
                    continue
                if dataclasses.is_dataclass(cls) and name not in compare_flags:
                    continue
                collected[name] = FieldDescriptor(
                    name=name,
                    declared_type=_unwrap_final(annotation),
                    owner=klass,
                    compare=compare_flags.get(name, True),
                )
            for name in _own_slots(klass):
                if name not in collected:
                    collected[name] = FieldDescriptor(
                        name, _init_annotation(cls, name), klass
                    )

        if not collected:
            collected = _init_parameters(cls)
        return tuple(collected.values())


def _declares(cls: type, method: str) -> bool:
    return any(method in vars(klass) for klass in cls.__mro__ if klass is not object)


def _own_annotations(klass: type) -> dict[str, Any]:
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except NameError as exc:
        raise UnresolvableTypeError(
            klass, f"annotation refers to an undefined name ({exc})"
        ) from exc


def _own_slots(klass: type) -> list[str]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [s for s in slots if s not in _SKIPPED_SLOTS]


def _init_annotation(cls: type, name: str) -> Any:
    try:
        parameters = inspect.signature(cls.__init__, eval_str=True).parameters
    except (NameError, TypeError, ValueError):
        return Any
    for candidate in (name, name.lstrip("_")):
        param = parameters.get(candidate)
        if param is not None and param.annotation is not param.empty:
            return param.annotation
    return Any


def _is_class_level(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    return (
        isinstance(annotation, dataclasses.InitVar)
        or annotation is dataclasses.InitVar
    )


def _unwrap_final(annotation: Any) -> Any:
    if annotation is Final:
        return Any
    if get_origin(annotation) is Final:
        return get_args(annotation)[0]
    return annotation


def _dataclass_compare_flags(cls: type) -> dict[str, bool]:
    if not dataclasses.is_dataclass(cls):
        return {}
    return {f.name: f.compare for f in dataclasses.fields(cls)}


def _init_parameters(cls: type) -> dict[str, FieldDescriptor]:
    """Fall back to ``__init__`` parameters for classes that declare nothing."""
    init = getattr(cls, "__init__", object.__init__)
    if init is object.__init__:
        return {}
    owner = next((k for k in cls.__mro__ if "__init__" in vars(k)), cls)
    try:
        signature = inspect.signature(init, eval_str=True)
    except NameError as exc:
        raise UnresolvableTypeError(
            cls, f"__init__ annotation refers to an undefined name ({exc})"
        ) from exc
    except (TypeError, ValueError):
        return {}

    fields: dict[str, FieldDescriptor] = {}
    for index, param in enumerate(signature.parameters.values()):
        if index == 0 or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue  # self, *args, **kwargs
        if param.annotation is not param.empty:
            declared = param.annotation
        elif param.default is not param.empty and param.default is not None:
            declared = type(param.default)
        else:
            declared = Any
        fields[param.name] = FieldDescriptor(param.name, declared, owner)
    if fields:
        logger.debug(
            "%s declares no annotations; using __init__ parameters %s",
            cls.__qualname__,
            list(fields),
        )
    return fields
