"""
Custom exception classes for test categorization.

This module defines the exceptions raised when the enforcement engine is
misused or misconfigured. Policy breaches found while enforcing are NOT
exceptions: they are recorded as Violation data and routed through the
enforcement-mode pipeline.

All exceptions include a descriptive message and optional context data to
aid in debugging.
"""


class TestCategoriesError(Exception):
    """
    Base exception for test categorization errors.

    Attributes:
        message: Human-readable error description.
        context: Optional dictionary with additional error context.

    Examples:
        >>> str(TestCategoriesError("bad input", context={"field": "tier"}))
        'bad input (field=tier)'
    """

    __test__ = False  # not a pytest test class

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize the error.

        Args:
            message: Error description.
            context: Optional dictionary with error details.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class UnknownTierError(TestCategoriesError):
    """
    Raised when a tier outside SMALL/MEDIUM/LARGE/XLARGE is resolved.

    This is a programming error in the caller (an unrecognised marker was
    passed through) and is never recovered from.

    Examples:
        >>> raise UnknownTierError("Unknown test size", context={"tier": "HUGE"})
        Traceback (most recent call last):
        ...
        testcategories.models.exceptions.UnknownTierError: Unknown test size (tier=HUGE)
    """


class InvalidModeError(TestCategoriesError):
    """Raised when configuration supplies a mode outside OFF/WARN/STRICT."""


class InvalidConstraintError(TestCategoriesError):
    """Raised when a distribution constraint is malformed."""


class LifecycleViolationError(TestCategoriesError):
    """
    Raised when the enforcement lifecycle is driven out of order.

    Examples: finalizing a report twice, recording a violation after the
    report was finalized, or assigning two different tiers to one test.
    """
