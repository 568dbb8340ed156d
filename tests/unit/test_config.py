"""Unit tests for eqcontract.config."""

from decimal import Decimal

import pytest

from eqcontract.config import Configuration
from eqcontract.domain.errors import InvalidConfigurationError
from eqcontract.domain.model import Invariant, SubclassPolicy
from eqcontract.domain.strategies import DECIMAL_COMPARE, IGNORED

# pylint: disable=magic-value-comparison


def test_defaults():
    config = Configuration()
    assert config.fail_fast is True
    assert config.all_fields_used is False
    assert config.subclass_policy is SubclassPolicy.SYMMETRIC
    assert config.ignored_fields == frozenset()
    assert config.suppressed_checks == frozenset()
    assert config.strategy_overrides == {}


def test_collections_are_normalized():
    config = Configuration(
        ignored_fields=["a", "b", "a"],
        suppressed_checks=["hash consistency", Invariant.SUBCLASS, "null-safety"],
        subclass_policy="Strict",
    )
    assert config.ignored_fields == frozenset({"a", "b"})
    assert config.suppressed_checks == {
        Invariant.HASH_CONSISTENCY,
        Invariant.SUBCLASS,
        Invariant.NULL_SAFETY,
    }
    assert config.subclass_policy is SubclassPolicy.STRICT


def test_single_check_name():
    assert Configuration(suppressed_checks="transitivity").suppressed_checks == {
        Invariant.TRANSITIVITY
    }


def test_overrides_are_copied():
    overrides = {Decimal: DECIMAL_COMPARE}
    config = Configuration(strategy_overrides=overrides)
    overrides["amount"] = IGNORED
    assert config.strategy_overrides == {Decimal: DECIMAL_COMPARE}


def test_configuration_is_frozen():
    config = Configuration()
    with pytest.raises(AttributeError):
        config.fail_fast = False  # type: ignore[misc]


def test_with_options_validates():
    config = Configuration().with_options(fail_fast=False, subclass_policy="equal")
    assert config.fail_fast is False
    assert config.subclass_policy is SubclassPolicy.EQUAL
    with pytest.raises(InvalidConfigurationError):
        config.with_options(suppressed_checks=["nope"])


@pytest.mark.parametrize(
    ("options", "message"),
    [
        ({"ignored_fields": "name"}, "not a string"),
        ({"suppressed_checks": ["symmetry"]}, "Unknown invariant: 'symmetry'"),
        ({"subclass_policy": "loose"}, "Unknown subclass policy: 'loose'"),
        ({"strategy_overrides": {Decimal: "compare"}}, "not a ComparisonStrategy"),
        (
            {"strategy_overrides": {"total": DECIMAL_COMPARE}, "ignored_fields": ["total"]},
            "both ignored and overridden",
        ),
        ({"instance_suppliers": {"Point": lambda **kw: None}}, "class -> callable"),
        ({"instance_suppliers": {Decimal: "factory"}}, "class -> callable"),
        ({"prefab_values": {int: [1, 2]}}, r"must be a \(red, blue\) tuple"),
        ({"prefab_values": {int: (1, 1)}}, "must differ"),
    ],
)
def test_invalid_options(options, message):
    with pytest.raises(InvalidConfigurationError, match=message):
        Configuration(**options)


def test_ignored_field_may_be_overridden_with_ignored():
    config = Configuration(
        strategy_overrides={"total": IGNORED}, ignored_fields=["total"]
    )
    assert config.ignored_fields == {"total"}


def test_uncomparable_prefab():
    class Grumpy:
        def __eq__(self, other):
            raise RuntimeError("no")

        __hash__ = object.__hash__

    with pytest.raises(InvalidConfigurationError, match="cannot be compared"):
        Configuration(prefab_values={Grumpy: (Grumpy(), Grumpy())})


class TestFromEnvironment:
    @staticmethod
    def test_empty_environment_gives_defaults():
        assert Configuration.from_env({}) == Configuration()

    @staticmethod
    def test_reads_every_variable():
        config = Configuration.from_env(
            {
                "EQCONTRACT_FAIL_FAST": "off",
                "EQCONTRACT_ALL_FIELDS_USED": " YES ",
                "EQCONTRACT_SUPPRESSED_CHECKS": "subclass, ,transitivity",
                "EQCONTRACT_SUBCLASS_POLICY": "equal",
            }
        )
        assert config.fail_fast is False
        assert config.all_fields_used is True
        assert config.suppressed_checks == {Invariant.SUBCLASS, Invariant.TRANSITIVITY}
        assert config.subclass_policy is SubclassPolicy.EQUAL

    @staticmethod
    def test_explicit_options_win():
        config = Configuration.from_env({"EQCONTRACT_FAIL_FAST": "0"}, fail_fast=True)
        assert config.fail_fast is True

    @staticmethod
    def test_reads_os_environ_by_default(monkeypatch):
        monkeypatch.setenv("EQCONTRACT_SUBCLASS_POLICY", "strict")
        assert Configuration.from_env().subclass_policy is SubclassPolicy.STRICT

    @staticmethod
    @pytest.mark.parametrize(
        ("name", "value"),
        [("EQCONTRACT_FAIL_FAST", "maybe"), ("EQCONTRACT_ALL_FIELDS_USED", "2")],
    )
    def test_malformed_boolean(name, value):
        with pytest.raises(InvalidConfigurationError, match=f"{name} must be a boolean"):
            Configuration.from_env({name: value})
