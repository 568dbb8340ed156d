"""Verification outcome and its human-readable rendering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from eqcontract.domain.errors import ContractViolationError, StrategyMismatchError
from eqcontract.domain.model import Skip, TargetType, Violation, ViolationKind

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of verifying one class.

    Attributes:
        target: The verified class.
        violations: Violations in detection order (at most one in fail-fast mode).
        skips: Checks or fields deliberately not exercised.
        message: Rendered report, suitable for an assertion message.
    """

    target: type
    violations: tuple[Violation, ...] = ()
    skips: tuple[Skip, ...] = ()
    message: str = ""

    @property
    def passed(self) -> bool:
        return not self.violations

    @property
    def first_violation(self) -> Violation | None:
        return self.violations[0] if self.violations else None

    def raise_for_failure(self) -> None:
        """Raise if any invariant was violated.

        Raises:
            StrategyMismatchError: If the first violation stems from a
                configured comparison strategy.
            ContractViolationError: For any other violation.
        """
        if (violation := self.first_violation) is None:
            return
        if violation.kind is ViolationKind.STRATEGY_MISMATCH:
            raise StrategyMismatchError(self)
        raise ContractViolationError(self)


class Reporter:
    """Turns the checker's findings into a `VerificationOutcome`."""

    def report(
        self,
        target: TargetType,
        violations: Iterable[Violation],
        skips: Iterable[Skip] = (),
    ) -> VerificationOutcome:
        """Assemble the outcome for ``target`` and render its message."""
        violations = tuple(violations)
        skips = tuple(skips)
        return VerificationOutcome(
            target=target.cls,
            violations=violations,
            skips=skips,
            message=self.render(target.name, violations, skips),
        )

    def render(
        self, name: str, violations: tuple[Violation, ...], skips: tuple[Skip, ...]
    ) -> str:
        """Render a multi-line report."""
        if not violations:
            lines = [f"{name}: all equality contract checks passed."]
        elif len(violations) == 1:
            lines = self._violation_lines(name, violations[0])
        else:
            lines = [f"{name}: {len(violations)} equality contract violations."]
            for number, violation in enumerate(violations, start=1):
                body = self._violation_lines(name, violation)
                lines.append(f"{number}. {body[0]}")
                lines.extend(f"   {line}" for line in body[1:])
        if skips:
            lines.append("Skipped:")
            lines.extend(f"  - {skip}" for skip in skips)
        return "\n".join(lines)

    @staticmethod
    def _violation_lines(name: str, violation: Violation) -> list[str]:
        lines = [f"{name}: {violation.invariant.title}: {violation.explanation}"]
        if violation.kind is ViolationKind.STRATEGY_MISMATCH:
            lines.append("  kind: comparison strategy mismatch")
        if violation.fields:
            lines.append(f"  field: {', '.join(violation.fields)}")
        if violation.expected:
            lines.append(f"  expected: {violation.expected}")
        if violation.actual:
            lines.append(f"  actual: {violation.actual}")
        lines.extend(f"  {label}: {text}" for label, text in violation.snapshots)
        if violation.hint:
            lines.append(f"  hint: {violation.hint}")
        return lines
