"""eqcontract

Automatic verification of the equality contract for Python classes.
Given a class, eqcontract synthesizes example instances, derives controlled
variants of them and checks that ``__eq__``, ``__ne__`` and ``__hash__``
are reflexive, symmetric, transitive, consistent and null-safe, and that
``__hash__`` agrees with ``__eq__``.
"""

from eqcontract.config import Configuration
from eqcontract.domain.errors import (
    ConfigurationError,
    ContractViolationError,
    EqContractError,
    InvalidConfigurationError,
    RecursiveDataStructureError,
    StrategyMismatchError,
    UnconstructibleTypeError,
    UnresolvableTypeError,
    VerificationFailure,
)
from eqcontract.domain.model import Invariant, SubclassPolicy
from eqcontract.domain.strategies import (
    DECIMAL_COMPARE,
    IGNORED,
    NATURAL,
    Ignored,
    Natural,
    OrderingBased,
)
from eqcontract.engine.reporter import VerificationOutcome
from eqcontract.engine.verifier import verify

__all__ = [
    "__version__",
    "Configuration",
    "ConfigurationError",
    "ContractViolationError",
    "DECIMAL_COMPARE",
    "EqContractError",
    "IGNORED",
    "Ignored",
    "InvalidConfigurationError",
    "Invariant",
    "NATURAL",
    "Natural",
    "OrderingBased",
    "RecursiveDataStructureError",
    "StrategyMismatchError",
    "SubclassPolicy",
    "UnconstructibleTypeError",
    "UnresolvableTypeError",
    "VerificationFailure",
    "VerificationOutcome",
    "verify",
]
__version__ = "0.1.0"
