"""Domain-layer error definitions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from eqcontract.domain.model import Violation
    from eqcontract.engine.reporter import VerificationOutcome


def type_name(type_: Any) -> str:
    """Return a readable name for a class or a typing construct."""
    if isinstance(type_, type):
        return type_.__qualname__
    return repr(type_)


# ============================================================================
#                           General errors
# ============================================================================


class EqContractError(Exception):
    """Base class for all eqcontract errors."""


# ============================================================================
#                   Configuration / introspection errors
# ============================================================================


class ConfigurationError(EqContractError):
    """Base class for problems that prevent a verification run from starting.

    These are never reported as contract violations; they abort the run.
    """


class InvalidConfigurationError(ConfigurationError):
    """Raised when a verification option is malformed or contradictory."""


class UnresolvableTypeError(ConfigurationError):
    """Raised when no example values can be derived for a type."""

    def __init__(self, type_: Any, reason: str, field: str | None = None) -> None:
        where = f" (field '{field}')" if field else ""
        super().__init__(
            f"Cannot derive example values for {type_name(type_)}{where}: {reason}. "
            "Supply them with Configuration(prefab_values={type: (red, blue)})."
        )
        self.type_ = type_
        self.reason = reason
        self.field = field


class RecursiveDataStructureError(UnresolvableTypeError):
    """Raised when a type contains itself without a terminal value to stop at."""

    def __init__(self, chain: Sequence[Any]) -> None:
        path = " -> ".join(type_name(t) for t in chain)
        super().__init__(chain[-1], f"recursive data structure ({path})")
        self.chain = tuple(chain)


class UnconstructibleTypeError(ConfigurationError):
    """Raised when every construction path for a type failed."""

    def __init__(self, type_: type, reasons: Sequence[str]) -> None:
        detail = "; ".join(reasons) if reasons else "no construction path available"
        super().__init__(
            f"Cannot construct an instance of {type_name(type_)}: {detail}. "
            "Supply one with Configuration(instance_suppliers={type: factory})."
        )
        self.type_ = type_
        self.reasons = tuple(reasons)


# ============================================================================
#                          Verification failures
# ============================================================================


class VerificationFailure(EqContractError, AssertionError):
    """Base class for failures raised from a completed verification run."""

    def __init__(self, outcome: VerificationOutcome) -> None:
        super().__init__(outcome.message)
        self.outcome = outcome

    @property
    def violation(self) -> Violation | None:
        """The first violation of the outcome."""
        return self.outcome.first_violation


class ContractViolationError(VerificationFailure):
    """Raised when the type's own equality logic breaks the contract."""


class StrategyMismatchError(VerificationFailure):
    """Raised when a configured comparison strategy contradicts observed behavior."""
