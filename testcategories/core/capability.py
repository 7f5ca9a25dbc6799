"""Hermeticity enforcement over capability events.

The interception layer reports each resource access a test makes as a
CapabilityEvent. This module only decides whether the access was allowed
for the test's tier; it never intercepts anything itself.

Events are checked one by one and are not deduplicated, so every
unauthorized call site shows up in the report.
"""

import logging

from testcategories.core.tiers import resolve_tier
from testcategories.models.core import CapabilityEvent, TestIdentity, Violation
from testcategories.models.enums import CapabilityClass, TestSize, ViolationKind

logger = logging.getLogger(__name__)


def check_capability(
    tier: TestSize | str,
    event: CapabilityEvent,
    test: TestIdentity | None = None,
) -> Violation | None:
    """
    Check a single capability event against the tier's allowed set.

    Args:
        tier: Size of the test that made the access.
        event: Access reported by the interception layer.
        test: Identity of the test, used for attribution only.

    Returns:
        UNAUTHORIZED_CAPABILITY violation if the capability class is not
        allowed for the tier, None otherwise.

    Raises:
        UnknownTierError: If the tier is not in the catalog.
        ValueError: If the event names an unknown capability class.
    """
    spec = resolve_tier(tier)
    capability = CapabilityClass(event.capability)
    if spec.allows(capability):
        return None

    subject = str(test) if test is not None else "test"
    detail = f"{subject} used {capability.value} which is not allowed for {spec.size.value} tests"
    if event.detail:
        detail = f"{detail}: {event.detail}"
    logger.debug("Capability violation: %s", detail)
    return Violation(
        kind=ViolationKind.UNAUTHORIZED_CAPABILITY,
        subject=test,
        tier=spec.size,
        measured=1.0,
        limit=None,
        detail=detail,
        capability=capability,
    )
