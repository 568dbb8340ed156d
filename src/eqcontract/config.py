"""Configuration of a verification run.

`Configuration` bundles every option the engine understands. It is a frozen
value validated on construction, so a malformed option is reported before
any user code runs.
"""

import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from eqcontract.domain.errors import InvalidConfigurationError
from eqcontract.domain.model import Invariant, SubclassPolicy
from eqcontract.domain.strategies import ComparisonStrategy, Ignored

ENV_FAIL_FAST = "EQCONTRACT_FAIL_FAST"  # pragma: no mutate
ENV_SUPPRESSED_CHECKS = "EQCONTRACT_SUPPRESSED_CHECKS"  # pragma: no mutate
ENV_SUBCLASS_POLICY = "EQCONTRACT_SUBCLASS_POLICY"  # pragma: no mutate
ENV_ALL_FIELDS_USED = "EQCONTRACT_ALL_FIELDS_USED"  # pragma: no mutate

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class Configuration:
    """Options of one verification run.

    Attributes:
        strategy_overrides: Comparison strategy per field name (``str`` key)
            or per type (any other key).
        fail_fast: Stop at the first violation (default) or report all.
        ignored_fields: Field names that must not influence equality.
        instance_suppliers: Factories per class, called with the field
            values as keyword arguments.
        suppressed_checks: Invariants to skip; members or their names.
        prefab_values: ``(red, blue)`` example values per type. The two
            values must not compare equal.
        subclass_policy: Expected behavior towards a trivial subclass.
        all_fields_used: Report fields that ``__eq__`` does not use.
    """

    # pylint: disable=too-many-instance-attributes

    strategy_overrides: Mapping[Any, ComparisonStrategy] = field(default_factory=dict)
    fail_fast: bool = True
    ignored_fields: Iterable[str] = frozenset()
    instance_suppliers: Mapping[type, Callable[..., Any]] = field(default_factory=dict)
    suppressed_checks: Iterable[Invariant | str] = frozenset()
    prefab_values: Mapping[Any, tuple[Any, Any]] = field(default_factory=dict)
    subclass_policy: SubclassPolicy | str = SubclassPolicy.SYMMETRIC
    all_fields_used: bool = False

    def __post_init__(self):
        if isinstance(self.ignored_fields, str):
            raise InvalidConfigurationError(
                "ignored_fields must be a collection of field names, not a string"
            )
        object.__setattr__(self, "ignored_fields", frozenset(self.ignored_fields))
        object.__setattr__(
            self, "suppressed_checks", _parse_checks(self.suppressed_checks)
        )
        object.__setattr__(
            self, "subclass_policy", _parse_policy(self.subclass_policy)
        )
        object.__setattr__(self, "strategy_overrides", dict(self.strategy_overrides))
        object.__setattr__(self, "instance_suppliers", dict(self.instance_suppliers))
        object.__setattr__(self, "prefab_values", dict(self.prefab_values))

        for scope, strategy in self.strategy_overrides.items():
            if not isinstance(strategy, ComparisonStrategy):
                raise InvalidConfigurationError(
                    f"strategy override for {scope!r} is not a ComparisonStrategy: "
                    f"{strategy!r}"
                )
            if scope in self.ignored_fields and not isinstance(strategy, Ignored):
                raise InvalidConfigurationError(
                    f"field {scope!r} is both ignored and overridden with "
                    f"{strategy.name}"
                )
        for cls, supplier in self.instance_suppliers.items():
            if not isinstance(cls, type) or not callable(supplier):
                raise InvalidConfigurationError(
                    f"instance_suppliers needs class -> callable, got {cls!r} -> "
                    f"{supplier!r}"
                )
        for type_, pair in self.prefab_values.items():
            _check_prefab(type_, pair)

    def with_options(self, **changes: Any) -> "Configuration":
        """Return a copy with ``changes`` applied (and validated)."""
        return replace(self, **changes)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **options: Any
    ) -> "Configuration":
        """Build a configuration from ``EQCONTRACT_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            **options: Explicit options; they win over the environment.

        Raises:
            InvalidConfigurationError: If a variable holds a malformed value.
        """
        environ = os.environ if environ is None else environ
        from_environment: dict[str, Any] = {}
        if (value := environ.get(ENV_FAIL_FAST)) is not None:
            from_environment["fail_fast"] = _parse_bool(ENV_FAIL_FAST, value)
        if (value := environ.get(ENV_ALL_FIELDS_USED)) is not None:
            from_environment["all_fields_used"] = _parse_bool(ENV_ALL_FIELDS_USED, value)
        if value := environ.get(ENV_SUPPRESSED_CHECKS):
            from_environment["suppressed_checks"] = [
                item for item in (part.strip() for part in value.split(",")) if item
            ]
        if value := environ.get(ENV_SUBCLASS_POLICY):
            from_environment["subclass_policy"] = value
        return cls(**{**from_environment, **options})


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise InvalidConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_checks(checks: Iterable[Invariant | str]) -> frozenset[Invariant]:
    if isinstance(checks, str):
        checks = [checks]
    try:
        return frozenset(Invariant.parse(check) for check in checks)
    except ValueError as exc:
        known = ", ".join(i.name for i in Invariant)
        raise InvalidConfigurationError(f"{exc}; known checks: {known}") from exc


def _parse_policy(policy: SubclassPolicy | str) -> SubclassPolicy:
    if isinstance(policy, SubclassPolicy):
        return policy
    try:
        return SubclassPolicy(str(policy).strip().lower())
    except ValueError:
        known = ", ".join(p.value for p in SubclassPolicy)
        raise InvalidConfigurationError(
            f"Unknown subclass policy: {policy!r}; known policies: {known}"
        ) from None


def _check_prefab(type_: Any, pair: Any) -> None:
    if not isinstance(pair, tuple) or len(pair) != 2:
        raise InvalidConfigurationError(
            f"prefab values for {type_!r} must be a (red, blue) tuple, got {pair!r}"
        )
    red, blue = pair
    try:
        equal = bool(red == blue)
    except Exception as exc:  # pylint: disable=broad-except
        raise InvalidConfigurationError(
            f"prefab values for {type_!r} cannot be compared: {exc}"
        ) from exc
    if equal:
        raise InvalidConfigurationError(
            f"prefab values for {type_!r} must differ, got {red!r} twice"
        )
