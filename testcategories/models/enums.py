"""
Enumerations for test categorization and enforcement.

This module defines the closed sets of values used throughout the
enforcement engine: test sizes, capability classes, policy domains,
enforcement modes, violation kinds and suite verdicts. All enums inherit
from str so they serialize to JSON and compare equal to their raw
configuration strings.
"""

from enum import Enum


class TestSize(str, Enum):
    """
    Test size tier enumeration.

    Each test carries exactly one size. The constraints attached to each
    size (time budget, allowed capabilities) live in the tier catalog.

    Attributes:
        SMALL: Fast, hermetic unit tests (<= 1 second).
        MEDIUM: Integration tests with limited external access (<= 5 minutes).
        LARGE: End-to-end tests with full external access (<= 15 minutes).
        XLARGE: Long-running tests with no time limit.

    Examples:
        >>> TestSize.SMALL.value
        'SMALL'
        >>> TestSize("LARGE") is TestSize.LARGE
        True
    """

    __test__ = False  # not a pytest test class

    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    XLARGE = "XLARGE"


class CapabilityClass(str, Enum):
    """
    Class of external resource a test touched during execution.

    The loopback and temp variants describe the limited access medium
    tests are granted; classifying a concrete access into one of these is
    the interception layer's job.

    Examples:
        >>> CapabilityClass("database")
        <CapabilityClass.DATABASE: 'database'>
    """

    NETWORK = "network"
    LOOPBACK_NETWORK = "loopback_network"
    FILESYSTEM = "filesystem"
    TEMP_FILESYSTEM = "temp_filesystem"
    DATABASE = "database"
    SUBPROCESS = "subprocess"
    SLEEP = "sleep"


class PolicyDomain(str, Enum):
    """Policy domain an enforcement mode is scoped to."""

    TIMING = "timing"
    HERMETICITY = "hermeticity"
    DISTRIBUTION = "distribution"


class EnforcementMode(str, Enum):
    """
    Severity applied to violations of one policy domain.

    Attributes:
        OFF: Violations are dropped before reporting.
        WARN: Violations are reported but never fail the run.
        STRICT: Violations are reported and fail the run.
    """

    OFF = "OFF"
    WARN = "WARN"
    STRICT = "STRICT"


class ViolationKind(str, Enum):
    """Kind of policy breach recorded during a run."""

    TIMING_EXCEEDED = "TIMING_EXCEEDED"
    UNAUTHORIZED_CAPABILITY = "UNAUTHORIZED_CAPABILITY"
    DISTRIBUTION_IMBALANCE = "DISTRIBUTION_IMBALANCE"

    @property
    def domain(self) -> PolicyDomain:
        """Policy domain whose enforcement mode governs this kind."""
        return _KIND_DOMAINS[self]


_KIND_DOMAINS = {
    ViolationKind.TIMING_EXCEEDED: PolicyDomain.TIMING,
    ViolationKind.UNAUTHORIZED_CAPABILITY: PolicyDomain.HERMETICITY,
    ViolationKind.DISTRIBUTION_IMBALANCE: PolicyDomain.DISTRIBUTION,
}


class Verdict(str, Enum):
    """
    Overall outcome of a suite run.

    Ordered by severity: FAIL > WARN > PASS.

    Examples:
        >>> Verdict.FAIL.severity > Verdict.WARN.severity > Verdict.PASS.severity
        True
    """

    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"

    @property
    def severity(self) -> int:
        """Numeric rank used to combine verdicts."""
        return _VERDICT_SEVERITY[self]


_VERDICT_SEVERITY = {Verdict.PASS: 0, Verdict.WARN: 1, Verdict.FAIL: 2}
