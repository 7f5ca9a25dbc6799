"""Enforcement session: the lifecycle driver for test-framework integrations.

A session wires the enforcers to one OutcomeAggregator and keeps the tier
histogram for the run. An integration creates one session per suite run,
reports test completions and capability events as they happen (possibly
from several worker threads), and calls ``finish`` once after every worker
has joined.
"""

import logging
import threading
from datetime import timedelta

from testcategories.config.settings import EnforcementConfig
from testcategories.core.aggregator import OutcomeAggregator
from testcategories.core.capability import check_capability
from testcategories.core.distribution import check_distribution
from testcategories.core.tiers import parse_test_size
from testcategories.core.timing import check_timing
from testcategories.models.core import CapabilityEvent, TestIdentity, Violation
from testcategories.models.enums import EnforcementMode, TestSize
from testcategories.models.exceptions import LifecycleViolationError
from testcategories.models.report import SuiteRunReport

logger = logging.getLogger(__name__)


class EnforcementSession:
    """
    Drives timing, hermeticity and distribution enforcement for one run.

    Args:
        config: Validated enforcement configuration. Defaults to
            ``EnforcementConfig.default()`` (every domain OFF).

    Examples:
        >>> session = EnforcementSession(EnforcementConfig.from_modes({"timing": "warn"}))
        >>> test = TestIdentity("tests/test_io.py", "test_load")
        >>> _ = session.test_completed(test, "SMALL", 2.5)
        >>> session.finish().verdict
        <Verdict.WARN: 'WARN'>
    """

    def __init__(self, config: EnforcementConfig | None = None) -> None:
        self.config = config if config is not None else EnforcementConfig.default()
        self._modes = self.config.resolved_modes()
        self._aggregator = OutcomeAggregator()
        self._lock = threading.Lock()
        self._tiers: dict[TestIdentity, TestSize] = {}
        self._completed: set[TestIdentity] = set()
        logger.debug(
            "Enforcement session started: %s",
            ", ".join(f"{d.value}={m.value}" for d, m in self._modes.items()),
        )

    @property
    def aggregator(self) -> OutcomeAggregator:
        """Aggregator collecting this session's violations."""
        return self._aggregator

    def tier_counts(self) -> dict[TestSize, int]:
        """Snapshot of the number of registered tests per size."""
        with self._lock:
            counts = {size: 0 for size in TestSize}
            for size in self._tiers.values():
                counts[size] += 1
            return counts

    def register(self, test: TestIdentity, tier: TestSize | str) -> TestSize:
        """
        Record the size a test was resolved to.

        Registering the same test again with the same size is a no-op.

        Raises:
            UnknownTierError: If the tier is not a known size.
            LifecycleViolationError: If the test was already registered with
                a different size.
        """
        size = parse_test_size(tier)
        with self._lock:
            existing = self._tiers.setdefault(test, size)
        if existing is not size:
            raise LifecycleViolationError(
                "Test is already registered with a different size",
                context={"test": test, "registered": existing.value, "requested": size.value},
            )
        return size

    def test_completed(
        self,
        test: TestIdentity,
        tier: TestSize | str,
        duration: float | timedelta,
    ) -> Violation | None:
        """
        Handle a test completion: register it and check its duration.

        A repeated completion event for the same test is ignored, so a test
        never has more than one timing violation per run.

        Returns:
            The timing violation recorded, if any.
        """
        size = self.register(test, tier)
        with self._lock:
            if test in self._completed:
                logger.debug("Ignoring duplicate completion event for %s", test)
                return None
            self._completed.add(test)

        violation = check_timing(size, duration, test=test)
        if violation is not None:
            self._aggregator.record(violation)
        return violation

    def capability_accessed(
        self,
        test: TestIdentity,
        tier: TestSize | str,
        event: CapabilityEvent,
    ) -> Violation | None:
        """
        Handle one capability event observed while a test was running.

        Returns:
            The hermeticity violation recorded, if any.
        """
        size = self.register(test, tier)
        violation = check_capability(size, event, test=test)
        if violation is not None:
            self._aggregator.record(violation)
        return violation

    def finish(self) -> SuiteRunReport:
        """
        Validate the tier distribution and finalize the report.

        Must be called exactly once, after every test has completed.

        Raises:
            LifecycleViolationError: If the session was already finished.
        """
        if self._aggregator.is_finalized:
            raise LifecycleViolationError("Enforcement session was already finished")

        counts = self.tier_counts()
        self._aggregator.record_all(check_distribution(counts, self.config.distribution))
        report = self._aggregator.finalize(self._modes)

        for violation in report.violations:
            if report.modes[violation.domain] is EnforcementMode.STRICT:
                logger.error("%s", violation.detail)
            else:
                logger.warning("%s", violation.detail)
        return report
