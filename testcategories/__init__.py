"""
Test size categorization and enforcement.

Classifies tests into SMALL, MEDIUM, LARGE and XLARGE tiers and enforces
per-test time budgets, hermeticity and the suite-wide size distribution
under configurable OFF / WARN / STRICT modes.
"""

from testcategories.config.settings import EnforcementConfig, ProportionBounds, load_config
from testcategories.core.aggregator import OutcomeAggregator
from testcategories.core.capability import check_capability
from testcategories.core.distribution import check_distribution, count_tiers
from testcategories.core.modes import resolve_mode, resolve_modes
from testcategories.core.session import EnforcementSession
from testcategories.core.tiers import TIER_CATALOG, TierSpec, resolve_tier
from testcategories.core.timing import check_timing
from testcategories.models import (
    CapabilityClass,
    CapabilityEvent,
    EnforcementMode,
    InvalidConstraintError,
    InvalidModeError,
    LifecycleViolationError,
    PolicyDomain,
    SuiteRunReport,
    TestCategoriesError,
    TestIdentity,
    TestSize,
    UnknownTierError,
    Verdict,
    Violation,
    ViolationKind,
)

__version__ = "0.1.0"

__all__ = [
    "TIER_CATALOG",
    "CapabilityClass",
    "CapabilityEvent",
    "EnforcementConfig",
    "EnforcementMode",
    "EnforcementSession",
    "InvalidConstraintError",
    "InvalidModeError",
    "LifecycleViolationError",
    "OutcomeAggregator",
    "PolicyDomain",
    "ProportionBounds",
    "SuiteRunReport",
    "TestCategoriesError",
    "TestIdentity",
    "TestSize",
    "TierSpec",
    "UnknownTierError",
    "Verdict",
    "Violation",
    "ViolationKind",
    "check_capability",
    "check_distribution",
    "check_timing",
    "count_tiers",
    "load_config",
    "resolve_mode",
    "resolve_modes",
    "resolve_tier",
]
