"""
Unit tests for enforcement configuration loading and validation.
"""

import pytest

from testcategories.config.settings import (
    DEFAULT_DISTRIBUTION,
    EnforcementConfig,
    ProportionBounds,
    load_config,
)
from testcategories.models.enums import EnforcementMode, PolicyDomain, TestSize
from testcategories.models.exceptions import InvalidConstraintError, InvalidModeError

pytestmark = pytest.mark.unit


class TestProportionBounds:
    """Test cases for ProportionBounds."""

    def test_aliases(self):
        """Verify min/max aliases populate the bounds."""
        bounds = ProportionBounds.model_validate({"min": 0.2, "max": 0.4})
        assert (bounds.min_proportion, bounds.max_proportion) == (0.2, 0.4)

    def test_defaults_cover_full_range(self):
        """Verify an empty bounds object allows any share."""
        bounds = ProportionBounds()
        assert (bounds.min_proportion, bounds.max_proportion) == (0.0, 1.0)

    @pytest.mark.parametrize(
        ("low", "high"),
        [(0.5, 0.4), (-0.1, 0.5), (0.0, 1.5)],
    )
    def test_invalid_bounds_raise(self, low, high):
        """Verify out-of-range or inverted bounds raise InvalidConstraintError."""
        with pytest.raises(InvalidConstraintError):
            ProportionBounds.of(low, high)


class TestEnforcementConfig:
    """Test cases for EnforcementConfig."""

    def test_default_is_all_off_with_pyramid(self):
        """Verify the default config enforces nothing and carries pyramid targets."""
        config = EnforcementConfig.default()
        assert all(mode is EnforcementMode.OFF for mode in config.resolved_modes().values())
        assert config.distribution == DEFAULT_DISTRIBUTION
        assert config.distribution[TestSize.SMALL].min_proportion == 0.70

    def test_from_dict(self):
        """Verify modes and distribution are parsed case-insensitively."""
        config = EnforcementConfig.from_dict(
            {
                "modes": {"Timing": "warn", "hermeticity": "STRICT"},
                "distribution": {"small": {"min": 0.8}, "LARGE": {"max": 0.05}},
            }
        )
        assert config.mode_for(PolicyDomain.TIMING) is EnforcementMode.WARN
        assert config.mode_for("hermeticity") is EnforcementMode.STRICT
        assert config.mode_for("distribution") is EnforcementMode.OFF
        assert set(config.distribution) == {TestSize.SMALL, TestSize.LARGE}
        assert config.distribution[TestSize.SMALL].max_proportion == 1.0

    def test_invalid_mode_raises(self):
        """Verify a bad mode string fails with InvalidModeError."""
        with pytest.raises(InvalidModeError):
            EnforcementConfig.from_dict({"modes": {"timing": "sometimes"}})

    def test_unknown_domain_raises(self):
        """Verify an unknown domain key fails with InvalidModeError."""
        with pytest.raises(InvalidModeError):
            EnforcementConfig.from_dict({"modes": {"flakiness": "warn"}})

    def test_inverted_bounds_raise(self):
        """Verify min above max fails with InvalidConstraintError."""
        with pytest.raises(InvalidConstraintError):
            EnforcementConfig.from_dict({"distribution": {"SMALL": {"min": 0.9, "max": 0.5}}})

    def test_unknown_size_raises(self):
        """Verify a constraint for an unknown size fails with InvalidConstraintError."""
        with pytest.raises(InvalidConstraintError):
            EnforcementConfig.from_dict({"distribution": {"HUGE": {"max": 0.1}}})

    def test_unsatisfiable_minimums_raise(self):
        """Verify minimum shares summing above 100% are rejected."""
        with pytest.raises(InvalidConstraintError):
            EnforcementConfig.from_dict(
                {"distribution": {"SMALL": {"min": 0.8}, "MEDIUM": {"min": 0.3}}}
            )

    def test_minimums_summing_to_exactly_one_accepted(self):
        """
        Given minimums of 0.7, 0.2 and 0.1 whose float sum is slightly above 1.0,
        When the configuration is loaded,
        Then it is accepted because the decimal shares sum to exactly 1.
        """
        config = EnforcementConfig.from_dict(
            {
                "distribution": {
                    "SMALL": {"min": 0.1},
                    "MEDIUM": {"min": 0.2},
                    "LARGE": {"min": 0.7},
                }
            }
        )
        assert config.distribution[TestSize.SMALL].min_proportion == 0.1

    def test_minimums_just_above_one_raise(self):
        """Verify a minimum sum above 1 by less than float noise is still rejected."""
        with pytest.raises(InvalidConstraintError):
            EnforcementConfig.from_dict(
                {"distribution": {"SMALL": {"min": 0.7}, "MEDIUM": {"min": 0.3000000001}}}
            )

    def test_unknown_top_level_key_raises(self):
        """Verify typos in the configuration are not silently ignored."""
        with pytest.raises(InvalidConstraintError):
            EnforcementConfig.from_dict({"mode": {"timing": "warn"}})

    def test_to_dict_round_trips(self):
        """Verify to_dict output can be loaded back into an equal config."""
        config = EnforcementConfig.from_modes({"distribution": "warn"})
        assert EnforcementConfig.from_dict(config.to_dict()) == config


class TestFromProperties:
    """Test cases for build-tool style properties."""

    def test_mode_properties(self):
        """Verify the three mode properties map onto their domains."""
        config = EnforcementConfig.from_properties(
            {
                "testCategories.timingMode": "WARN",
                "testCategories.hermeticityMode": "strict",
                "testCategories.distributionMode": "OFF",
                "user.name": "ignored",
            }
        )
        assert config.resolved_modes() == {
            PolicyDomain.TIMING: EnforcementMode.WARN,
            PolicyDomain.HERMETICITY: EnforcementMode.STRICT,
            PolicyDomain.DISTRIBUTION: EnforcementMode.OFF,
        }
        assert config.distribution == DEFAULT_DISTRIBUTION

    def test_distribution_properties_replace_defaults(self):
        """Verify distribution properties constrain only the sizes named."""
        config = EnforcementConfig.from_properties(
            {
                "testCategories.distribution.small.min": "0.8",
                "testCategories.distribution.large.max": "0.05",
            }
        )
        assert set(config.distribution) == {TestSize.SMALL, TestSize.LARGE}
        assert config.distribution[TestSize.SMALL].min_proportion == 0.8
        assert config.distribution[TestSize.LARGE].max_proportion == 0.05

    def test_invalid_mode_property(self):
        """Verify a bad mode value fails with InvalidModeError."""
        with pytest.raises(InvalidModeError):
            EnforcementConfig.from_properties({"testCategories.timingMode": "LOUD"})

    def test_unknown_mode_property(self):
        """Verify an unrecognized *Mode key fails with InvalidModeError."""
        with pytest.raises(InvalidModeError):
            EnforcementConfig.from_properties({"testCategories.coverageMode": "WARN"})

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("testCategories.distribution.small.min", "lots"),
            ("testCategories.distribution.huge.max", "0.1"),
            ("testCategories.distribution.small.avg", "0.1"),
            ("testCategories.distribution.small", "0.1"),
            ("testCategories.reportDir", "target"),
        ],
    )
    def test_malformed_distribution_property(self, key, value):
        """Verify malformed distribution properties fail with InvalidConstraintError."""
        with pytest.raises(InvalidConstraintError):
            EnforcementConfig.from_properties({key: value})


class TestLoadConfig:
    """Test cases for load_config."""

    def test_loads_json_file(self, write_json):
        """Verify a JSON configuration file is loaded and validated."""
        path = write_json("config.json", {"modes": {"timing": "strict"}})
        assert load_config(path).mode_for("timing") is EnforcementMode.STRICT

    def test_invalid_json_raises(self, tmp_path):
        """Verify a file that is not JSON fails with InvalidConstraintError."""
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidConstraintError, match="not valid JSON"):
            load_config(path)

    def test_non_object_raises(self, write_json):
        """Verify a JSON document that is not an object is rejected."""
        with pytest.raises(InvalidConstraintError, match="JSON object"):
            load_config(write_json("config.json", ["timing"]))

    def test_missing_file_raises(self, tmp_path):
        """Verify a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.json")
