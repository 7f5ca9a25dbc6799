"""
Core data models for test enforcement.

This module defines the immutable dataclasses passed through the
enforcement engine: test identities, capability events reported by the
interception layer, and the violations produced by the enforcers.

All dataclasses are frozen so they can be shared between worker threads
and recorded without copying.
"""

from dataclasses import dataclass
from typing import Any

from testcategories.models.enums import (
    CapabilityClass,
    PolicyDomain,
    TestSize,
    ViolationKind,
)


@dataclass(frozen=True)
class TestIdentity:
    """
    Identifies a single test case for attribution in violations.

    Attributes:
        suite: Containing suite, module or class (e.g. "tests/unit/test_io.py::TestLoad").
        name: Test function or method name.

    Examples:
        >>> str(TestIdentity("tests/test_io.py", "test_load"))
        'tests/test_io.py::test_load'
    """

    __test__ = False  # not a pytest test class

    suite: str
    name: str

    def __str__(self) -> str:
        return f"{self.suite}::{self.name}"


@dataclass(frozen=True)
class CapabilityEvent:
    """
    A single resource access observed while a test was running.

    Attributes:
        capability: Class of resource touched.
        detail: Free-form description of the access (e.g. "connect example.com:443").
    """

    capability: CapabilityClass
    detail: str = ""


@dataclass(frozen=True)
class Violation:
    """
    A single breach of a timing, hermeticity or distribution policy.

    Violations are enforcement outcomes, not errors. They are created by an
    enforcer, recorded by the outcome aggregator, and either reported or
    dropped depending on the mode configured for their domain.

    Attributes:
        kind: What kind of policy was breached.
        subject: Offending test, or None for suite-level violations.
        tier: Tier whose constraint was breached.
        measured: Measured value (seconds, access count, or proportion of the suite).
        limit: Limit that was breached (seconds, or proportion bound).
        detail: Human-readable description.
        capability: Capability class for UNAUTHORIZED_CAPABILITY violations.
        bound: "min" or "max" for DISTRIBUTION_IMBALANCE violations.

    Examples:
        >>> v = Violation(
        ...     kind=ViolationKind.TIMING_EXCEEDED,
        ...     subject=TestIdentity("tests/test_io.py", "test_load"),
        ...     tier=TestSize.SMALL,
        ...     measured=1.01,
        ...     limit=1.0,
        ...     detail="took too long",
        ... )
        >>> v.domain
        <PolicyDomain.TIMING: 'timing'>
    """

    kind: ViolationKind
    subject: TestIdentity | None
    tier: TestSize
    measured: float
    limit: float | None
    detail: str
    capability: CapabilityClass | None = None
    bound: str | None = None

    @property
    def domain(self) -> PolicyDomain:
        """Policy domain this violation is governed by."""
        return self.kind.domain

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "kind": self.kind.value,
            "domain": self.domain.value,
            "subject": str(self.subject) if self.subject is not None else None,
            "tier": self.tier.value,
            "measured": self.measured,
            "limit": self.limit,
            "capability": self.capability.value if self.capability else None,
            "bound": self.bound,
            "detail": self.detail,
        }
