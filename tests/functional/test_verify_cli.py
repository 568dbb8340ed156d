"""Functional tests: a developer verifies classes from the command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner, Result

from eqcontract.entrypoints.cli.main import eqcontract
from tests.fixtures import targets as fixtures

# pylint: disable=magic-value-comparison


def run(*args: str, env: dict[str, str] | None = None) -> Result:
    """Invoke ``eqcontract verify`` without touching the user's log directory."""
    targets = [
        f"{fixtures.__name__}:{arg}" if hasattr(fixtures, arg) else arg for arg in args
    ]
    return CliRunner().invoke(
        eqcontract, ["--no-flight-recorder", "verify", *targets], env=env
    )


class TestVerifyingClasses:
    """A developer checks the equality contract of their classes."""

    @staticmethod
    def test_passing_class():
        result = run("Point")

        assert result.exit_code == 0
        assert "Point: all equality contract checks passed." in result.output

    @staticmethod
    def test_several_classes_one_failing():
        """Every target is reported; one failure fails the command."""
        result = run("Point", "Asymmetric", "Identifier")

        assert result.exit_code == 1
        assert "Point: all equality contract checks passed." in result.output
        assert "Identifier: all equality contract checks passed." in result.output
        assert "Asymmetric: Significant fields: __eq__ is not symmetric" in result.output
        assert "  hint: " in result.output

    @staticmethod
    def test_skips_are_shown_as_warnings():
        result = run("MutablePoint")

        assert result.exit_code == 0
        assert (
            "MutablePoint: skipped Hash consistency: MutablePoint is unhashable"
            in result.output
        )

    @staticmethod
    def test_decimal_compare_exposes_representation_equality():
        """The same class passes by default and fails once compare() is expected."""
        assert run("DecimalByRepresentation").exit_code == 0

        result = run("DecimalByRepresentation", "--decimal-compare")
        assert result.exit_code == 1
        assert "Strategy equivalence: DECIMAL_COMPARE" in result.output
        assert "kind: comparison strategy mismatch" in result.output

    @staticmethod
    def test_decimal_compare_accepts_consistent_classes():
        result = run("DecimalByCompare", "DecimalByValue", "--decimal-compare")
        assert result.exit_code == 0

    @staticmethod
    def test_report_all():
        result = run("EitherField", "--report-all")

        assert result.exit_code == 1
        assert "EitherField: 2 equality contract violations." in result.output
        assert "1. EitherField: Insignificant fields" in result.output
        assert "2. EitherField: Transitivity" in result.output

    @staticmethod
    def test_suppress_a_check():
        result = run("EitherField", "--suppress", "insignificant_fields")

        assert result.exit_code == 1
        assert "EitherField: Transitivity:" in result.output
        assert "Insignificant fields" not in result.output

    @staticmethod
    @pytest.mark.parametrize(
        ("policy", "target", "exit_code"),
        [
            ("equal", "Point", 1),
            ("equal", "Identifier", 0),
            ("strict", "Identifier", 1),
            ("STRICT", "Point", 0),
        ],
    )
    def test_subclass_policy(policy, target, exit_code):
        result = run(target, "--subclass-policy", policy)
        assert result.exit_code == exit_code

    @staticmethod
    def test_all_fields_used():
        assert run("HashUsesMore", "--suppress", "hash_consistency").exit_code == 0

        result = run("HashUsesMore", "--all-fields-used")
        assert result.exit_code == 1
        assert "__eq__ does not use field b" in result.output

    @staticmethod
    def test_ignored_field():
        result = run("Point", "--ignore", "y")

        assert result.exit_code == 1
        assert "field y is declared insignificant (ignored)" in result.output


class TestUnverifiableInput:
    """Problems that stop verification exit with status 2."""

    @staticmethod
    def test_unknown_field():
        result = run("Point", "--ignore", "z")

        assert result.exit_code == 2
        assert "Point has no field(s) z" in result.output

    @staticmethod
    def test_recursive_type():
        result = run("Loop")

        assert result.exit_code == 2
        assert "recursive data structure (Loop -> Loop)" in result.output

    @staticmethod
    def test_unconstructible_type():
        result = run("Sealed")

        assert result.exit_code == 2
        assert "Cannot construct an instance of Sealed" in result.output

    @staticmethod
    @pytest.mark.parametrize(
        ("target", "message"),
        [
            ("tests.fixtures.targets", "is not of the form module:ClassName"),
            ("tests.fixtures.targets:Nowhere", "has no attribute 'Nowhere'"),
        ],
    )
    def test_bad_target(target, message):
        result = run(target)

        assert result.exit_code == 2
        assert message in result.output

    @staticmethod
    def test_unknown_check():
        result = run("Point", "--suppress", "symmetry")
        assert result.exit_code == 2


class TestEnvironment:
    """Options can come from EQCONTRACT_* variables; the command line wins."""

    @staticmethod
    def test_fail_fast_from_environment():
        result = run("EitherField", env={"EQCONTRACT_FAIL_FAST": "no"})
        assert "2 equality contract violations" in result.output

    @staticmethod
    def test_command_line_beats_environment():
        result = run("EitherField", "--fail-fast", env={"EQCONTRACT_FAIL_FAST": "no"})
        assert "2 equality contract violations" not in result.output
        assert result.exit_code == 1

    @staticmethod
    def test_suppressed_checks_from_environment():
        env = {"EQCONTRACT_SUPPRESSED_CHECKS": "insignificant fields, subclass"}
        result = run("EitherField", env=env)
        assert "EitherField: Transitivity:" in result.output

    @staticmethod
    def test_malformed_environment():
        result = run("Point", env={"EQCONTRACT_SUBCLASS_POLICY": "loose"})

        assert result.exit_code == 2
        assert "Unknown subclass policy: 'loose'" in result.output
