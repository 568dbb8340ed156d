"""Unit tests for eqcontract.domain.errors."""

from decimal import Decimal

import pytest

from eqcontract.domain import errors
from eqcontract.domain.model import Invariant, TargetType, Violation, ViolationKind
from eqcontract.engine.reporter import Reporter

# pylint: disable=magic-value-comparison


def _outcome(kind: ViolationKind = ViolationKind.CONTRACT):
    target = TargetType(
        cls=Decimal,
        fields=(),
        declares_eq=True,
        declares_hash=True,
        hashable=True,
        is_abstract=False,
        is_final=False,
    )
    violation = Violation(Invariant.HASH_CONSISTENCY, "hashes differ", kind=kind)
    return Reporter().report(target, [violation])


class TestTypeName:
    """Tests for the type_name helper."""

    @staticmethod
    def test_class_uses_qualname() -> None:
        """Classes are shown by their qualified name."""

        class Inner:
            pass

        assert errors.type_name(Inner).endswith("test_class_uses_qualname.<locals>.Inner")

    @staticmethod
    def test_typing_construct_uses_repr() -> None:
        """Typing constructs are shown by their repr."""
        assert errors.type_name(list[int]) == "list[int]"


class TestUnresolvableTypeError:
    """Tests for UnresolvableTypeError."""

    @staticmethod
    def test_attributes() -> None:
        """The type, the reason and the field are kept."""
        error = errors.UnresolvableTypeError(Decimal, "no candidates", field="Money.amount")
        assert error.type_ is Decimal
        assert error.reason == "no candidates"
        assert error.field == "Money.amount"

    @staticmethod
    def test_error_message() -> None:
        """The message names the type and explains how to supply values."""
        error = errors.UnresolvableTypeError(Decimal, "no candidates")
        assert str(error) == (
            "Cannot derive example values for Decimal: no candidates. "
            "Supply them with Configuration(prefab_values={type: (red, blue)})."
        )

    @staticmethod
    def test_is_a_configuration_error() -> None:
        """Unresolvable types abort the run as configuration problems."""
        assert issubclass(errors.UnresolvableTypeError, errors.ConfigurationError)


class TestRecursiveDataStructureError:
    """Tests for RecursiveDataStructureError."""

    @staticmethod
    def test_chain_in_message() -> None:
        """The recursion path is spelled out."""

        class Tree:
            pass

        error = errors.RecursiveDataStructureError([Tree, Tree])
        assert error.chain == (Tree, Tree)
        assert error.type_ is Tree
        assert "recursive data structure (" in str(error)
        assert "Tree -> " in str(error)

    @staticmethod
    def test_is_unresolvable() -> None:
        """Callers handling unresolvable types also catch recursion."""
        assert issubclass(
            errors.RecursiveDataStructureError, errors.UnresolvableTypeError
        )


class TestUnconstructibleTypeError:
    """Tests for UnconstructibleTypeError."""

    @staticmethod
    def test_attributes() -> None:
        """The type and every failed path are kept."""
        error = errors.UnconstructibleTypeError(Decimal, ["a failed", "b failed"])
        assert error.type_ is Decimal
        assert error.reasons == ("a failed", "b failed")

    @staticmethod
    def test_error_message() -> None:
        """The message joins the reasons and suggests an instance supplier."""
        error = errors.UnconstructibleTypeError(Decimal, ["a failed", "b failed"])
        assert str(error) == (
            "Cannot construct an instance of Decimal: a failed; b failed. "
            "Supply one with Configuration(instance_suppliers={type: factory})."
        )

    @staticmethod
    def test_without_reasons() -> None:
        """An empty reason list still yields a readable message."""
        error = errors.UnconstructibleTypeError(Decimal, [])
        assert "no construction path available" in str(error)


class TestVerificationFailure:
    """Tests for the failure errors raised from an outcome."""

    @staticmethod
    @pytest.mark.parametrize(
        "error_class",
        [errors.ContractViolationError, errors.StrategyMismatchError],
    )
    def test_is_assertion_error(error_class: type) -> None:
        """Failures render as ordinary test failures under pytest."""
        assert issubclass(error_class, AssertionError)
        assert issubclass(error_class, errors.VerificationFailure)

    @staticmethod
    def test_carries_outcome_and_message() -> None:
        """The error exposes the outcome and uses its message."""
        outcome = _outcome()
        error = errors.ContractViolationError(outcome)
        assert error.outcome is outcome
        assert str(error) == outcome.message

    @staticmethod
    def test_violation_property() -> None:
        """The first violation is reachable from the error."""
        outcome = _outcome(ViolationKind.STRATEGY_MISMATCH)
        error = errors.StrategyMismatchError(outcome)
        assert error.violation is outcome.first_violation
