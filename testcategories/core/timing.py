"""Per-test timing enforcement.

Compares a completed test's measured wall-clock duration against its
tier's time budget. The limit is inclusive: a test that takes exactly its
budget passes.
"""

import logging
import math
from datetime import timedelta

from testcategories.core.tiers import resolve_tier
from testcategories.models.core import TestIdentity, Violation
from testcategories.models.enums import TestSize, ViolationKind

logger = logging.getLogger(__name__)


def check_timing(
    tier: TestSize | str,
    measured: float | timedelta,
    test: TestIdentity | None = None,
) -> Violation | None:
    """
    Check a measured duration against the tier's time limit.

    Args:
        tier: Size of the test that ran.
        measured: Wall-clock duration in seconds (or a timedelta).
        test: Identity of the test, used for attribution only.

    Returns:
        TIMING_EXCEEDED violation if the duration is strictly greater than
        the limit, None otherwise. XLARGE tests never violate.

    Raises:
        UnknownTierError: If the tier is not in the catalog.
        ValueError: If the measured duration is negative or NaN.

    Examples:
        >>> check_timing(TestSize.SMALL, 1.0) is None
        True
        >>> check_timing(TestSize.SMALL, 1.01).limit
        1.0
    """
    spec = resolve_tier(tier)
    seconds = measured.total_seconds() if isinstance(measured, timedelta) else float(measured)
    if math.isnan(seconds):
        raise ValueError("Measured duration must be a number, got NaN")
    if seconds < 0:
        raise ValueError(f"Measured duration must be non-negative, got {seconds}")

    limit = spec.max_duration_seconds
    if limit is None or seconds <= limit:
        return None

    subject = str(test) if test is not None else "test"
    detail = (
        f"{subject} took {seconds:.3f}s, exceeding the {spec.size.value} "
        f"limit of {limit:.3f}s"
    )
    logger.debug("Timing violation: %s", detail)
    return Violation(
        kind=ViolationKind.TIMING_EXCEEDED,
        subject=test,
        tier=spec.size,
        measured=seconds,
        limit=limit,
        detail=detail,
    )
