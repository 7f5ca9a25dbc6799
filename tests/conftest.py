"""
Pytest configuration and global fixtures.

This module provides shared test fixtures used across the test suite,
including test identities, enforcement configurations and recorded
result files.
"""

import json
from pathlib import Path

import pytest

from testcategories.config.settings import EnforcementConfig
from testcategories.models.core import TestIdentity


@pytest.fixture()
def make_test_id():
    """
    Provide a factory for TestIdentity values.

    Returns:
        Callable taking a test name (and optional suite) and returning a TestIdentity.

    Examples:
        >>> def test_something(make_test_id):
        ...     assert str(make_test_id("test_a")) == "tests/test_sample.py::test_a"
    """

    def _create(name: str, suite: str = "tests/test_sample.py") -> TestIdentity:
        return TestIdentity(suite=suite, name=name)

    return _create


@pytest.fixture()
def enforcement_config():
    """
    Provide an EnforcementConfig factory.

    Returns:
        Callable accepting mode keyword overrides (timing=, hermeticity=,
        distribution=) and an optional constraints mapping.

    Examples:
        >>> def test_modes(enforcement_config):
        ...     config = enforcement_config(timing="warn")
        ...     assert config.mode_for("timing").value == "WARN"
    """

    def _create(constraints=None, **modes) -> EnforcementConfig:
        return EnforcementConfig.from_modes(modes, distribution=constraints)

    return _create


@pytest.fixture()
def write_json(tmp_path):
    """
    Provide a helper that writes a JSON document into tmp_path.

    Returns:
        Callable taking (filename, payload) and returning the written Path.
    """

    def _write(filename: str, payload) -> Path:
        path = tmp_path / filename
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
