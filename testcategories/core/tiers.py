"""Tier catalog: time budgets and allowed capabilities per test size.

The catalog is fixed policy data, built once at import time and exposed
through a read-only mapping. Size limits follow the Google test-size
convention:

- SMALL: <= 1 second, fully hermetic
- MEDIUM: <= 5 minutes, loopback network, temp filesystem and sleep only
- LARGE: <= 15 minutes, full external access
- XLARGE: no time limit, full external access
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType

from testcategories.models.enums import CapabilityClass, TestSize
from testcategories.models.exceptions import UnknownTierError

logger = logging.getLogger(__name__)

SMALL_MAX_SECONDS = 1.0
MEDIUM_MAX_SECONDS = 5 * 60.0
LARGE_MAX_SECONDS = 15 * 60.0

_LIMITED_ACCESS = frozenset(
    {
        CapabilityClass.LOOPBACK_NETWORK,
        CapabilityClass.TEMP_FILESYSTEM,
        CapabilityClass.SLEEP,
    }
)
_FULL_ACCESS = frozenset(CapabilityClass)


@dataclass(frozen=True)
class TierSpec:
    """
    Constraints attached to one test size.

    Attributes:
        size: The test size these constraints apply to.
        max_duration_seconds: Inclusive wall-clock limit, or None if unbounded.
        allowed_capabilities: Capability classes a test of this size may use.

    Examples:
        >>> spec = resolve_tier("small")
        >>> spec.max_duration_seconds
        1.0
        >>> spec.allows(CapabilityClass.NETWORK)
        False
    """

    size: TestSize
    max_duration_seconds: float | None
    allowed_capabilities: frozenset[CapabilityClass]

    @property
    def is_unbounded(self) -> bool:
        """True if tests of this size have no time limit."""
        return self.max_duration_seconds is None

    @property
    def is_hermetic(self) -> bool:
        """True if tests of this size may not touch any external resource."""
        return not self.allowed_capabilities

    def allows(self, capability: CapabilityClass) -> bool:
        """Return True if the capability is permitted for this size."""
        return capability in self.allowed_capabilities


TIER_CATALOG = MappingProxyType(
    {
        TestSize.SMALL: TierSpec(TestSize.SMALL, SMALL_MAX_SECONDS, frozenset()),
        TestSize.MEDIUM: TierSpec(TestSize.MEDIUM, MEDIUM_MAX_SECONDS, _LIMITED_ACCESS),
        TestSize.LARGE: TierSpec(TestSize.LARGE, LARGE_MAX_SECONDS, _FULL_ACCESS),
        TestSize.XLARGE: TierSpec(TestSize.XLARGE, None, _FULL_ACCESS),
    }
)


def parse_test_size(tier: TestSize | str) -> TestSize:
    """
    Convert a tier name or TestSize into a TestSize.

    Names are matched case-insensitively.

    Raises:
        UnknownTierError: If the value does not name a known size.
    """
    if isinstance(tier, TestSize):
        return tier
    if isinstance(tier, str):
        try:
            return TestSize(tier.strip().upper())
        except ValueError:
            pass
    logger.error("Unknown test size requested: %r", tier)
    raise UnknownTierError(
        "Unknown test size",
        context={"tier": tier, "expected": ", ".join(size.value for size in TestSize)},
    )


def resolve_tier(tier: TestSize | str) -> TierSpec:
    """
    Look up the constraints for a test size.

    Args:
        tier: TestSize or its name.

    Returns:
        TierSpec from the catalog.

    Raises:
        UnknownTierError: If the tier is not SMALL, MEDIUM, LARGE or XLARGE.

    Examples:
        >>> resolve_tier(TestSize.XLARGE).is_unbounded
        True
        >>> resolve_tier("medium").max_duration_seconds
        300.0
    """
    return TIER_CATALOG[parse_test_size(tier)]
