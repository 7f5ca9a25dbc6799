"""
Suite run report model.

The SuiteRunReport is the single output of the outcome aggregator: the
surviving violations grouped by policy domain plus the overall verdict.
It is ready for direct serialization; formatting it for humans is left to
the report consumer.
"""

from dataclasses import dataclass, field
from typing import Any

from testcategories.models.core import Violation
from testcategories.models.enums import EnforcementMode, PolicyDomain, Verdict


@dataclass(frozen=True)
class SuiteRunReport:
    """
    Final enforcement report for one suite run.

    Attributes:
        verdict: Overall outcome (PASS, WARN or FAIL).
        violations_by_domain: Reported violations per domain, in domain
            order TIMING, HERMETICITY, DISTRIBUTION. Every domain is present,
            possibly with an empty tuple.
        modes: Enforcement mode that was applied to each domain.
        dropped: Number of violations suppressed by an OFF mode.

    Examples:
        >>> report = SuiteRunReport(verdict=Verdict.PASS)
        >>> report.failed
        False
        >>> report.violations
        ()
    """

    verdict: Verdict
    violations_by_domain: dict[PolicyDomain, tuple[Violation, ...]] = field(
        default_factory=lambda: {domain: () for domain in PolicyDomain}
    )
    modes: dict[PolicyDomain, EnforcementMode] = field(
        default_factory=lambda: {domain: EnforcementMode.OFF for domain in PolicyDomain}
    )
    dropped: int = 0

    @property
    def failed(self) -> bool:
        """True if the run should be marked failed."""
        return self.verdict is Verdict.FAIL

    @property
    def violations(self) -> tuple[Violation, ...]:
        """All reported violations, flattened in domain order."""
        return tuple(
            violation
            for domain in PolicyDomain
            for violation in self.violations_by_domain.get(domain, ())
        )

    def count(self, domain: PolicyDomain | None = None) -> int:
        """Number of reported violations, optionally for one domain only."""
        if domain is None:
            return len(self.violations)
        return len(self.violations_by_domain.get(domain, ()))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "verdict": self.verdict.value,
            "failed": self.failed,
            "dropped": self.dropped,
            "modes": {domain.value: mode.value for domain, mode in self.modes.items()},
            "violations": {
                domain.value: [
                    v.to_dict() for v in self.violations_by_domain.get(domain, ())
                ]
                for domain in PolicyDomain
            },
        }
