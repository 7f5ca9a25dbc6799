"""Data models, enumerations and exceptions."""

from testcategories.models.core import CapabilityEvent, TestIdentity, Violation
from testcategories.models.enums import (
    CapabilityClass,
    EnforcementMode,
    PolicyDomain,
    TestSize,
    Verdict,
    ViolationKind,
)
from testcategories.models.exceptions import (
    InvalidConstraintError,
    InvalidModeError,
    LifecycleViolationError,
    TestCategoriesError,
    UnknownTierError,
)
from testcategories.models.report import SuiteRunReport

__all__ = [
    "CapabilityClass",
    "CapabilityEvent",
    "EnforcementMode",
    "InvalidConstraintError",
    "InvalidModeError",
    "LifecycleViolationError",
    "PolicyDomain",
    "SuiteRunReport",
    "TestCategoriesError",
    "TestIdentity",
    "TestSize",
    "UnknownTierError",
    "Verdict",
    "Violation",
    "ViolationKind",
]
