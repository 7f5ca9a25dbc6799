"""CLI command that replays recorded test results through enforcement.

The results file is a JSON object produced by a test-framework
integration::

    {
      "tests": [
        {
          "suite": "tests/unit/test_io.py",
          "name": "test_load",
          "tier": "SMALL",
          "duration": 0.42,
          "events": [{"capability": "network", "detail": "connect example.com:443"}]
        }
      ]
    }

Usage:
    test-categories evaluate --results results.json --config test-categories.json

Exit codes:
    0: Verdict PASS or WARN
    1: Verdict FAIL
    2: Invalid configuration or results file
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from testcategories.cli.configure import EXIT_INVALID_INPUT, add_config_arguments, build_config
from testcategories.config.settings import EnforcementConfig
from testcategories.core.session import EnforcementSession
from testcategories.models.core import CapabilityEvent, TestIdentity
from testcategories.models.enums import CapabilityClass
from testcategories.models.exceptions import TestCategoriesError
from testcategories.models.report import SuiteRunReport

logger = logging.getLogger(__name__)

EXIT_FAILED = 1


class ResultsFormatError(ValueError):
    """Raised when a results file does not match the expected layout."""


def load_results(path: Path) -> list[dict[str, Any]]:
    """
    Read and shape-check a results file.

    Raises:
        ResultsFormatError: If the JSON is malformed, entries lack fields, or
            durations and events have the wrong type.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ResultsFormatError(f"{path} is not valid JSON: {exc.msg}") from exc

    tests = data.get("tests") if isinstance(data, dict) else None
    if not isinstance(tests, list):
        raise ResultsFormatError(f"{path} must contain a 'tests' list")

    for index, entry in enumerate(tests):
        if not isinstance(entry, dict):
            raise ResultsFormatError(f"tests[{index}] must be an object")
        missing = [key for key in ("suite", "name", "tier", "duration") if key not in entry]
        if missing:
            raise ResultsFormatError(f"tests[{index}] is missing {', '.join(missing)}")

        duration = entry["duration"]
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise ResultsFormatError(f"tests[{index}].duration must be a number of seconds")

        events = entry.get("events", [])
        if not isinstance(events, list):
            raise ResultsFormatError(f"tests[{index}].events must be a list")
        for position, event in enumerate(events):
            if not isinstance(event, dict) or "capability" not in event:
                raise ResultsFormatError(
                    f"tests[{index}].events[{position}] must be an object with a capability"
                )
    return tests


def evaluate_results(tests: list[dict[str, Any]], config: EnforcementConfig) -> SuiteRunReport:
    """
    Run recorded results through an EnforcementSession.

    Capability events are replayed before the completion of their test,
    matching the order a live integration would report them in.

    Args:
        tests: Entries as returned by load_results().
        config: Enforcement configuration.

    Returns:
        The finalized SuiteRunReport.
    """
    session = EnforcementSession(config)
    for entry in tests:
        test = TestIdentity(suite=str(entry["suite"]), name=str(entry["name"]))
        tier = entry["tier"]
        for event in entry.get("events", []):
            session.capability_accessed(
                test,
                tier,
                CapabilityEvent(
                    capability=CapabilityClass(str(event["capability"]).lower()),
                    detail=str(event.get("detail", "")),
                ),
            )
        session.test_completed(test, tier, float(entry["duration"]))
    logger.info("Replayed %d test result(s)", len(tests))
    return session.finish()


def configure_evaluate_parser(parser: argparse.ArgumentParser) -> None:
    """Configure arguments for the 'evaluate' subcommand."""
    parser.add_argument(
        "--results",
        type=Path,
        required=True,
        help="JSON file with recorded test results",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report JSON here instead of stdout",
    )
    add_config_arguments(parser)


def run_evaluate_command(args: argparse.Namespace) -> int:
    """
    Evaluate a results file and emit the report as JSON.

    Returns:
        Exit code (0 pass/warn, 1 fail, 2 invalid input).
    """
    try:
        config = build_config(args)
        tests = load_results(args.results)
        report = evaluate_results(tests, config)
    except (TestCategoriesError, ValueError, KeyError, OSError) as exc:
        logger.error("Evaluation aborted: %s", exc)
        return EXIT_INVALID_INPUT

    payload = json.dumps(report.to_dict(), indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload + "\n", encoding="utf-8")
        logger.info("Report written to %s", args.output)
    else:
        sys.stdout.write(payload + "\n")

    logger.info("Verdict: %s (%d violation(s) reported)", report.verdict.value, report.count())
    return EXIT_FAILED if report.failed else 0
