"""Construction strategy adapters.

Three ways of obtaining an instance that holds a given set of field values,
tried by the instance builder in this order:

- `SuppliedFactory`: a user-registered callable receiving the field values as
  keyword arguments.
- `StandardConstructor`: the class's own constructor, with parameters matched
  to fields by name (``x`` or ``_x`` for a parameter ``x``).
- `FieldInjection`: ``object.__new__`` followed by writing every field
  directly, for classes whose constructors are private in spirit, throw, or
  normalize their inputs.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from eqcontract.interfaces.construction import (
    ConstructionFailedError,
    ConstructionStrategy,
)

if TYPE_CHECKING:
    from eqcontract.domain.model import TargetType
    from eqcontract.engine.fields import FieldAccessor

# pylint: disable=too-few-public-methods


class SuppliedFactory(ConstructionStrategy):
    """Delegates to a user-supplied factory for exactly one class."""

    NAME = "supplied factory"

    def __init__(self, factory: Callable[..., Any]) -> None:
        self._factory = factory

    def construct(
        self, target: TargetType, cls: type, values: Mapping[str, Any]
    ) -> Any:
        try:
            instance = self._factory(**values)
        except Exception as exc:  # pylint: disable=broad-except
            raise ConstructionFailedError(
                self.NAME, f"factory raised {type(exc).__name__}: {exc}"
            ) from exc
        if not isinstance(instance, cls):
            raise ConstructionFailedError(
                self.NAME,
                f"factory returned {type(instance).__qualname__}, "
                f"expected {cls.__qualname__}",
            )
        return instance


class StandardConstructor(ConstructionStrategy):
    """Calls the class with its field values mapped onto constructor parameters."""

    NAME = "constructor"

    def construct(
        self, target: TargetType, cls: type, values: Mapping[str, Any]
    ) -> Any:
        args, kwargs = self._arguments(cls, values)
        try:
            return cls(*args, **kwargs)
        except Exception as exc:  # pylint: disable=broad-except
            raise ConstructionFailedError(
                self.NAME, f"{cls.__qualname__}() raised {type(exc).__name__}: {exc}"
            ) from exc

    def _arguments(
        self, cls: type, values: Mapping[str, Any]
    ) -> tuple[list[Any], dict[str, Any]]:
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError) as exc:
            raise ConstructionFailedError(
                self.NAME, f"signature unavailable ({exc})"
            ) from exc

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for param in signature.parameters.values():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            name = _field_for(param.name, values)
            if name is None:
                if param.default is param.empty:
                    raise ConstructionFailedError(
                        self.NAME, f"parameter '{param.name}' matches no field"
                    )
                continue
            if param.kind is param.POSITIONAL_ONLY:
                args.append(values[name])
            else:
                kwargs[param.name] = values[name]
        return args, kwargs


class FieldInjection(ConstructionStrategy):
    """Allocates a bare instance and writes every field directly."""

    NAME = "field injection"

    def __init__(self, accessor: FieldAccessor) -> None:
        self._accessor = accessor

    def construct(
        self, target: TargetType, cls: type, values: Mapping[str, Any]
    ) -> Any:
        try:
            instance = object.__new__(cls)
        except TypeError as exc:
            raise ConstructionFailedError(
                self.NAME, f"cannot allocate {cls.__qualname__} ({exc})"
            ) from exc
        for name, value in values.items():
            try:
                self._accessor.set(instance, name, value)
            except (AttributeError, TypeError) as exc:
                raise ConstructionFailedError(
                    self.NAME, f"cannot write field '{name}' ({exc})"
                ) from exc
        return instance


def _field_for(parameter: str, values: Mapping[str, Any]) -> str | None:
    for candidate in (parameter, f"_{parameter}"):
        if candidate in values:
            return candidate
    return None
