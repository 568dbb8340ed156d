"""Construction strategy port.

A construction strategy turns a class plus a mapping of field values into an
instance that carries exactly those values. The engine tries strategies in
order and moves on when one signals `ConstructionFailedError`:

1. a user-supplied factory (only when one is registered for the class),
2. the class's own constructor,
3. field injection into a minimally initialized instance.

Adapters live in `eqcontract.adapters.construction`.
"""

import abc
from collections.abc import Mapping
from typing import Any, ClassVar

from eqcontract.domain.model import TargetType

# pylint: disable=too-few-public-methods


class ConstructionFailedError(Exception):
    """Raised by a strategy when it cannot produce the requested instance."""

    def __init__(self, strategy: str, reason: str) -> None:
        super().__init__(f"{strategy}: {reason}")
        self.strategy = strategy
        self.reason = reason


class ConstructionStrategy(abc.ABC):
    """Builds instances of a target class from field values."""

    NAME: ClassVar[str]

    @abc.abstractmethod
    def construct(
        self, target: TargetType, cls: type, values: Mapping[str, Any]
    ) -> Any:
        """Return an instance of ``cls`` holding ``values``.

        Args:
            target: The introspected target; ``cls`` is ``target.cls`` or a
                stateless subclass of it.
            cls: The concrete class to instantiate.
            values: Field name to value, one entry per field of ``target``.

        Returns:
            The new instance. The builder verifies afterwards that every
            field reads back the requested value.

        Raises:
            ConstructionFailedError: If this strategy cannot build the instance.
        """
