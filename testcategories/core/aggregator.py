"""Outcome aggregation for a suite run.

Collects the violations produced while a suite runs and, once at the end,
applies the enforcement mode of each violation's domain to decide what
gets reported and whether the run fails:

- OFF: the violation is dropped and never surfaced
- WARN: the violation is reported, verdict at least WARN
- STRICT: the violation is reported, verdict FAIL

``record`` may be called from several worker threads at once; it is the
only shared mutable state in the engine and is guarded by a single lock.
"""

import logging
import threading

from testcategories.core.modes import ModeConfiguration, resolve_modes
from testcategories.models.core import Violation
from testcategories.models.enums import EnforcementMode, PolicyDomain, Verdict
from testcategories.models.exceptions import LifecycleViolationError
from testcategories.models.report import SuiteRunReport

logger = logging.getLogger(__name__)

_MODE_VERDICT = {
    EnforcementMode.WARN: Verdict.WARN,
    EnforcementMode.STRICT: Verdict.FAIL,
}


class OutcomeAggregator:
    """
    Thread-safe, append-only store of violations for one suite run.

    Examples:
        >>> aggregator = OutcomeAggregator()
        >>> aggregator.finalize({"timing": "warn"}).verdict
        <Verdict.PASS: 'PASS'>
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._violations: list[Violation] = []
        self._finalized = False

    @property
    def pending(self) -> int:
        """Number of violations recorded so far."""
        with self._lock:
            return len(self._violations)

    @property
    def is_finalized(self) -> bool:
        """True once finalize() has been called."""
        with self._lock:
            return self._finalized

    def record(self, violation: Violation) -> None:
        """
        Append a violation to the in-progress report.

        Raises:
            LifecycleViolationError: If the report was already finalized.
        """
        with self._lock:
            if self._finalized:
                raise LifecycleViolationError(
                    "Cannot record a violation after the report was finalized",
                    context={"kind": violation.kind.value, "tier": violation.tier.value},
                )
            self._violations.append(violation)

    def record_all(self, violations) -> None:
        """Record every violation from an iterable (None entries are skipped)."""
        for violation in violations:
            if violation is not None:
                self.record(violation)

    def finalize(self, modes_by_domain: ModeConfiguration) -> SuiteRunReport:
        """
        Apply enforcement modes and produce the final report.

        Args:
            modes_by_domain: Mode per policy domain; missing domains are OFF.

        Returns:
            SuiteRunReport with surviving violations grouped by domain.

        Raises:
            InvalidModeError: If a mode is not OFF, WARN or STRICT.
            LifecycleViolationError: If called more than once.
        """
        modes = resolve_modes(modes_by_domain)

        with self._lock:
            if self._finalized:
                raise LifecycleViolationError("Report was already finalized")
            self._finalized = True
            recorded = list(self._violations)

        grouped: dict[PolicyDomain, list[Violation]] = {domain: [] for domain in PolicyDomain}
        verdict = Verdict.PASS
        dropped = 0

        for violation in recorded:
            mode = modes[violation.domain]
            if mode is EnforcementMode.OFF:
                dropped += 1
                continue
            grouped[violation.domain].append(violation)
            outcome = _MODE_VERDICT[mode]
            if outcome.severity > verdict.severity:
                verdict = outcome

        if dropped:
            logger.debug("Dropped %d violation(s) in domains set to OFF", dropped)

        report = SuiteRunReport(
            verdict=verdict,
            violations_by_domain={domain: tuple(v) for domain, v in grouped.items()},
            modes=modes,
            dropped=dropped,
        )
        logger.info(
            "Enforcement report finalized: verdict=%s, reported=%d, dropped=%d",
            verdict.value,
            report.count(),
            dropped,
        )
        return report
