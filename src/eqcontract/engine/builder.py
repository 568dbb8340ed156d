"""Instance construction for verification runs.

`InstanceBuilder` produces instances that hold exactly the requested field
values. It walks a chain of construction strategies (user factory, class
constructor, field injection) and, after each attempt, reads every field
back; a field the constructor normalized or dropped is written directly.
Abstract classes get a synthesized concrete subclass that adds no state.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from typing import Any

from eqcontract.adapters.construction import (
    FieldInjection,
    StandardConstructor,
    SuppliedFactory,
)
from eqcontract.domain.errors import UnconstructibleTypeError
from eqcontract.domain.model import TargetType
from eqcontract.engine.fields import FieldAccessor
from eqcontract.interfaces.construction import (
    ConstructionFailedError,
    ConstructionStrategy,
)

logger = logging.getLogger(__name__)

_MISSING = object()


def _unimplemented(*args: Any, **kwargs: Any) -> Any:
    raise NotImplementedError("stand-in for an abstract method")


class InstanceBuilder:
    """Builds instances of introspected classes from field values.

    Args:
        accessor: The run's field accessor.
        suppliers: Optional user factories keyed by class. A factory is called
            with the field values as keyword arguments.
    """

    def __init__(
        self,
        accessor: FieldAccessor,
        suppliers: Mapping[type, Callable[..., Any]] | None = None,
    ) -> None:
        self._accessor = accessor
        self._suppliers = dict(suppliers or {})
        self._constructor = StandardConstructor()
        self._injection = FieldInjection(accessor)
        self._concrete: dict[type, type] = {}
        self._subclasses: dict[type, type] = {}
        self._reported: set[tuple[type, str]] = set()

    def strategies_for(self, target: TargetType) -> list[ConstructionStrategy]:
        """Return the construction strategies to try for ``target``, in order."""
        chain: list[ConstructionStrategy] = []
        if (factory := self._suppliers.get(target.cls)) is not None:
            chain.append(SuppliedFactory(factory))
        chain.extend([self._constructor, self._injection])
        return chain

    def build(
        self,
        target: TargetType,
        values: Mapping[str, Any],
        *,
        cls: type | None = None,
    ) -> Any:
        """Return a new instance of ``target`` holding ``values``.

        Every attempt receives its own deep copies of mutable values, so an
        instance never shares state with an instance built earlier.

        Args:
            target: The introspected class.
            values: One value per field of ``target``.
            cls: Class to instantiate instead of the target's own (concrete)
                class, e.g. a trivial subclass.

        Raises:
            UnconstructibleTypeError: If every construction path failed.
        """
        reasons: list[str] = []
        for strategy in self.strategies_for(target):
            if cls is not None:
                actual = cls
            elif isinstance(strategy, SuppliedFactory):
                actual = target.cls
            else:
                actual = self.concrete_type(target)
            own = {name: _fresh(value) for name, value in values.items()}
            try:
                instance = strategy.construct(target, actual, own)
                self._settle(strategy, instance, own)
            except ConstructionFailedError as exc:
                reasons.append(str(exc))
                continue
            if (actual, strategy.NAME) not in self._reported:
                self._reported.add((actual, strategy.NAME))
                logger.debug("Constructing %s via %s", actual.__qualname__, strategy.NAME)
            return instance
        raise UnconstructibleTypeError(target.cls, reasons)

    def concrete_type(self, target: TargetType) -> type:
        """Return ``target.cls`` or, for abstract classes, a stateless concrete subclass.

        Raises:
            UnconstructibleTypeError: If no concrete subclass can be created.
        """
        if not target.is_abstract:
            return target.cls
        if (cached := self._concrete.get(target.cls)) is not None:
            return cached
        base = target.cls
        namespace: dict[str, Any] = {
            name: _unimplemented for name in getattr(base, "__abstractmethods__", ())
        }
        try:
            concrete = _derive(base, f"Concrete{base.__name__}", namespace)
        except Exception as exc:  # pylint: disable=broad-except
            raise UnconstructibleTypeError(
                base, [f"cannot synthesize a concrete subclass ({exc})"]
            ) from exc
        logger.debug("Synthesized %s for abstract %s", concrete.__name__, base.__qualname__)
        self._concrete[base] = concrete
        return concrete

    def trivial_subclass(self, target: TargetType) -> type:
        """Return a subclass of the target's concrete class that adds nothing.

        Raises:
            ConstructionFailedError: If the class refuses to be subclassed.
        """
        if (cached := self._subclasses.get(target.cls)) is not None:
            return cached
        base = self.concrete_type(target)
        try:
            subclass = _derive(base, f"{base.__name__}Subclass", {})
        except Exception as exc:  # pylint: disable=broad-except
            raise ConstructionFailedError(
                "subclass", f"{base.__qualname__} cannot be subclassed ({exc})"
            ) from exc
        self._subclasses[target.cls] = subclass
        return subclass

    def _settle(
        self,
        strategy: ConstructionStrategy,
        instance: Any,
        values: Mapping[str, Any],
    ) -> None:
        for name, value in values.items():
            try:
                current = self._accessor.get(instance, name)
            except AttributeError:
                current = _MISSING
            if current is value:
                continue
            try:
                self._accessor.set(instance, name, value)
            except (AttributeError, TypeError) as exc:
                raise ConstructionFailedError(
                    strategy.NAME,
                    f"field '{name}' does not hold the requested value and "
                    f"cannot be written ({exc})",
                ) from exc


def _fresh(value: Any) -> Any:
    """Return a deep copy of ``value`` that compares equal to it, else ``value``."""
    try:
        duplicate = copy.deepcopy(value)
        if duplicate is value or bool(duplicate == value):
            return duplicate
    except Exception:  # pylint: disable=broad-except
        logger.debug("Cannot copy %r; sharing it between instances", value)
    return value


def _derive(base: type, name: str, namespace: dict[str, Any]) -> type:
    namespace = {"__module__": base.__module__, **namespace}
    if hasattr(base, "__slots__"):
        namespace["__slots__"] = ()
    return type(base)(name, (base,), namespace)
