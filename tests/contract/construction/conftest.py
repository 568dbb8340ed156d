"""Fixtures for construction strategy contract tests.

Provided fixtures
-----------------
- **strategy**: Parametrized over every `ConstructionStrategy` adapter. The
  supplied-factory variant is registered for ``Point`` only, which is the
  class the success-path tests construct.
"""

from __future__ import annotations

import pytest

from eqcontract.adapters.construction import (
    FieldInjection,
    StandardConstructor,
    SuppliedFactory,
)
from eqcontract.engine.fields import FieldAccessor
from eqcontract.interfaces.construction import ConstructionStrategy
from tests.fixtures import targets


@pytest.fixture(params=["supplied factory", "constructor", "field injection"])
def strategy(request: pytest.FixtureRequest) -> ConstructionStrategy:
    """Return a fresh adapter for the requested strategy."""
    match request.param:
        case "supplied factory":
            return SuppliedFactory(lambda **values: targets.Point(**values))
        case "constructor":
            return StandardConstructor()
        case "field injection":
            return FieldInjection(FieldAccessor())
        case _:
            raise ValueError(f"unknown construction strategy: {request.param}")
