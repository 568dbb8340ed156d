"""Global pytest fixtures for eqcontract."""

from __future__ import annotations

import pytest

from eqcontract.config import Configuration
from eqcontract.engine.builder import InstanceBuilder
from eqcontract.engine.fields import FieldAccessor
from eqcontract.engine.registry import ComparisonStrategyRegistry
from eqcontract.engine.values import ValueFactory

# pylint: disable=redefined-outer-name

EQCONTRACT_ENV = (
    "EQCONTRACT_FAIL_FAST",
    "EQCONTRACT_SUPPRESSED_CHECKS",
    "EQCONTRACT_SUBCLASS_POLICY",
    "EQCONTRACT_ALL_FIELDS_USED",
)


@pytest.fixture(autouse=True)
def clean_eqcontract_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's EQCONTRACT_* variables out of the tests."""
    for name in EQCONTRACT_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def accessor() -> FieldAccessor:
    """A fresh field accessor (one verification run's worth of cache)."""
    return FieldAccessor()


@pytest.fixture
def builder(accessor: FieldAccessor) -> InstanceBuilder:
    """An instance builder without user suppliers."""
    return InstanceBuilder(accessor)


@pytest.fixture
def registry() -> ComparisonStrategyRegistry:
    """An empty strategy registry."""
    return ComparisonStrategyRegistry()


@pytest.fixture
def factory(
    accessor: FieldAccessor,
    builder: InstanceBuilder,
    registry: ComparisonStrategyRegistry,
) -> ValueFactory:
    """A value factory wired to the other per-run fixtures."""
    return ValueFactory(accessor, builder, registry)


@pytest.fixture
def report_all() -> Configuration:
    """Configuration that collects every violation instead of stopping early."""
    return Configuration(fail_fast=False)
