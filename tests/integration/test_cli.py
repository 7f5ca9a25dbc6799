"""
Integration tests for the test-categories CLI.

These tests drive main() end to end with recorded result files and check
the emitted report and exit codes.
"""

import json

import pytest

from testcategories.cli.main import main

pytestmark = pytest.mark.integration


def _result(name, tier, duration, events=None):
    return {
        "suite": "tests/test_sample.py",
        "name": name,
        "tier": tier,
        "duration": duration,
        "events": events or [],
    }


@pytest.fixture()
def pyramid_results(write_json):
    """Results file with 60 SMALL, 30 MEDIUM and 10 LARGE passing tests."""
    tests = (
        [_result(f"test_s{i}", "SMALL", 0.1) for i in range(60)]
        + [_result(f"test_m{i}", "MEDIUM", 10.0) for i in range(30)]
        + [_result(f"test_l{i}", "LARGE", 60.0) for i in range(10)]
    )
    return write_json("results.json", {"tests": tests})


class TestEvaluateCommand:
    """End-to-end tests for 'evaluate'."""

    def test_warn_timing_exits_zero(self, write_json, capsys):
        """
        Given timing mode WARN,
        When one SMALL test overran its budget,
        Then the report lists it with verdict WARN and the exit code is 0.
        """
        results = write_json(
            "results.json",
            {"tests": [_result("test_fast", "SMALL", 0.2), _result("test_slow", "SMALL", 1.01)]},
        )

        exit_code = main(
            ["evaluate", "--results", str(results), "-D", "testCategories.timingMode=WARN"]
        )

        report = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert report["verdict"] == "WARN"
        (violation,) = report["violations"]["timing"]
        assert violation["subject"] == "tests/test_sample.py::test_slow"
        assert violation["measured"] == pytest.approx(1.01)

    def test_strict_hermeticity_exits_one(self, write_json, tmp_path):
        """Verify a STRICT capability violation fails the run with exit code 1."""
        results = write_json(
            "results.json",
            {
                "tests": [
                    _result(
                        "test_fetch",
                        "SMALL",
                        0.3,
                        events=[{"capability": "NETWORK", "detail": "connect example.com:443"}],
                    )
                ]
            },
        )
        config = write_json("config.json", {"modes": {"hermeticity": "strict"}})
        output = tmp_path / "out" / "report.json"

        exit_code = main(
            [
                "evaluate",
                "--results",
                str(results),
                "--config",
                str(config),
                "--output",
                str(output),
            ]
        )

        report = json.loads(output.read_text(encoding="utf-8"))
        assert exit_code == 1
        assert report["failed"] is True
        assert report["violations"]["hermeticity"][0]["capability"] == "network"

    def test_distribution_imbalance(self, pyramid_results, capsys):
        """Verify a 60/30/10 suite breaches a 70% SMALL minimum."""
        exit_code = main(
            [
                "evaluate",
                "--results",
                str(pyramid_results),
                "-D",
                "testCategories.distributionMode=STRICT",
                "-D",
                "testCategories.distribution.small.min=0.7",
            ]
        )

        report = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        (violation,) = report["violations"]["distribution"]
        assert violation["tier"] == "SMALL"
        assert violation["bound"] == "min"
        assert violation["measured"] == pytest.approx(0.6)
        assert violation["limit"] == 0.7

    def test_default_config_drops_imbalances(self, pyramid_results, capsys):
        """Verify the default configuration drops the SMALL and MEDIUM imbalances."""
        exit_code = main(["evaluate", "--results", str(pyramid_results)])

        report = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert report["verdict"] == "PASS"
        assert report["dropped"] == 2

    def test_invalid_mode_exits_two(self, pyramid_results):
        """Verify an invalid mode aborts before evaluation with exit code 2."""
        exit_code = main(
            [
                "evaluate",
                "--results",
                str(pyramid_results),
                "-D",
                "testCategories.timingMode=LOUD",
            ]
        )
        assert exit_code == 2

    @pytest.mark.parametrize(
        "payload",
        [
            {"runs": []},
            {"tests": [{"suite": "a", "name": "b", "tier": "SMALL"}]},
            {"tests": [_result("test_a", "HUGE", 0.1)]},
            {"tests": [_result("test_a", "SMALL", 0.1, events=[{"capability": "telepathy"}])]},
            {"tests": [_result("test_a", "SMALL", None)]},
            {"tests": [_result("test_a", "SMALL", "NaN")]},
            {"tests": [_result("test_a", "SMALL", 0.1, events=["network"])]},
            {"tests": [_result("test_a", "SMALL", 0.1, events={"capability": "network"})]},
            {"tests": [_result("test_a", "SMALL", 0.1, events=[{"detail": "connect"}])]},
        ],
    )
    def test_malformed_results_exit_two(self, write_json, payload):
        """Verify malformed result files are rejected with exit code 2."""
        results = write_json("results.json", payload)
        assert main(["evaluate", "--results", str(results)]) == 2


class TestConfigureCommand:
    """End-to-end tests for 'configure'."""

    def test_prints_resolved_configuration(self, write_json, capsys):
        """Verify properties override the file and the result is printed."""
        config = write_json(
            "config.json",
            {"modes": {"timing": "warn", "hermeticity": "warn"}},
        )

        exit_code = main(
            [
                "configure",
                "--config",
                str(config),
                "-D",
                "testCategories.hermeticityMode=STRICT",
            ]
        )

        printed = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert printed["modes"] == {
            "timing": "WARN",
            "hermeticity": "STRICT",
            "distribution": "OFF",
        }
        assert printed["distribution"]["SMALL"] == {"min": 0.7, "max": 1.0}

    @pytest.mark.parametrize(
        "argv",
        [
            ["configure", "-D", "testCategories.distribution.small.min=1.5"],
            ["configure", "-D", "testCategories.timingMode=maybe"],
            ["configure", "-D", "novalue"],
        ],
    )
    def test_invalid_configuration_exits_two(self, argv):
        """Verify invalid configuration is reported with exit code 2."""
        assert main(argv) == 2

    def test_missing_config_file_exits_two(self, tmp_path):
        """Verify an unreadable configuration file is reported with exit code 2."""
        assert main(["configure", "--config", str(tmp_path / "absent.json")]) == 2
