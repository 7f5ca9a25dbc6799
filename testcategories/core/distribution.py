"""Suite-level test size distribution validation.

Checks that the mix of test sizes in a completed run stays within the
configured proportion ranges (for example at least 70% SMALL, at most 10%
LARGE). Runs exactly once per suite, after every test has completed.

Proportions and bounds are compared as exact fractions. Bounds are read
through their decimal representation, so a configured 0.3 means exactly
3/10 and a suite with 30% of a tier sits on the bound rather than above it.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from fractions import Fraction

from testcategories.config.settings import ProportionBounds
from testcategories.core.tiers import parse_test_size
from testcategories.models.core import Violation
from testcategories.models.enums import TestSize, ViolationKind
from testcategories.models.exceptions import InvalidConstraintError

logger = logging.getLogger(__name__)

BoundsLike = ProportionBounds | tuple[float, float]


def count_tiers(assignments: Iterable[TestSize | str]) -> dict[TestSize, int]:
    """
    Build a tier histogram from per-test tier assignments.

    Args:
        assignments: One tier per test, in any order.

    Returns:
        Mapping of every TestSize to its count (zero for absent sizes).

    Examples:
        >>> counts = count_tiers(["SMALL", "SMALL", "LARGE"])
        >>> counts[TestSize.SMALL], counts[TestSize.MEDIUM]
        (2, 0)
    """
    counter = Counter(parse_test_size(tier) for tier in assignments)
    return {size: counter.get(size, 0) for size in TestSize}


def _as_bounds(bounds: BoundsLike) -> ProportionBounds:
    if isinstance(bounds, ProportionBounds):
        return bounds
    if not isinstance(bounds, (tuple, list)) or len(bounds) != 2:
        raise InvalidConstraintError(
            "Distribution bounds must be a (min, max) pair",
            context={"bounds": repr(bounds)},
        )
    min_proportion, max_proportion = bounds
    return ProportionBounds.of(min_proportion, max_proportion)


def _exact(value: float) -> Fraction:
    return Fraction(str(value))


def check_distribution(
    tier_counts: Mapping[TestSize | str, int],
    constraints: Mapping[TestSize | str, BoundsLike],
) -> list[Violation]:
    """
    Validate the tier mix of a run against proportion constraints.

    Args:
        tier_counts: Number of tests observed per tier. Missing tiers count as 0.
        constraints: Allowed (min, max) proportion per tier. Tiers without a
            constraint are not checked.

    Returns:
        One DISTRIBUTION_IMBALANCE violation per constrained tier whose
        proportion falls outside its range, in TestSize order. Empty if the
        run contained no tests.

    Raises:
        UnknownTierError: If a key is not a known test size.
        InvalidConstraintError: If a tuple bound is malformed.
        ValueError: If a count is negative.

    Examples:
        >>> counts = {TestSize.SMALL: 60, TestSize.MEDIUM: 30, TestSize.LARGE: 10}
        >>> [v.bound for v in check_distribution(counts, {"SMALL": (0.7, 1.0)})]
        ['min']
    """
    counts: dict[TestSize, int] = {size: 0 for size in TestSize}
    for tier, count in tier_counts.items():
        if count < 0:
            raise ValueError(f"Tier count must be non-negative, got {count} for {tier}")
        counts[parse_test_size(tier)] += count

    resolved = {parse_test_size(tier): _as_bounds(b) for tier, b in constraints.items()}

    total = sum(counts.values())
    if total == 0:
        logger.debug("Distribution check skipped: no tests recorded")
        return []

    violations = []
    for size in TestSize:
        bounds = resolved.get(size)
        if bounds is None:
            continue

        actual = Fraction(counts[size], total)
        if actual < _exact(bounds.min_proportion):
            bound, limit = "min", bounds.min_proportion
            relation = "below the minimum"
        elif actual > _exact(bounds.max_proportion):
            bound, limit = "max", bounds.max_proportion
            relation = "above the maximum"
        else:
            continue

        detail = (
            f"{size.value} tests make up {float(actual):.2%} of the suite "
            f"({counts[size]}/{total}), {relation} of {limit:.2%}"
        )
        logger.debug("Distribution violation: %s", detail)
        violations.append(
            Violation(
                kind=ViolationKind.DISTRIBUTION_IMBALANCE,
                subject=None,
                tier=size,
                measured=float(actual),
                limit=limit,
                detail=detail,
                bound=bound,
            )
        )

    return violations
