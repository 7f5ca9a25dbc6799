"""
Enforcement configuration with pydantic validation.

EnforcementConfig holds everything the enforcement engine reads from the
outside world: one enforcement mode per policy domain and the allowed
proportion range per test size. It is validated completely when loaded so
misconfiguration fails before any test runs.

Three loaders are provided: plain dictionaries (parsed JSON), JSON files,
and flat build-tool style properties such as
``testCategories.hermeticityMode=STRICT``.
"""

import json
import logging
from collections.abc import Mapping
from fractions import Fraction
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from testcategories.core.modes import ModeConfiguration, resolve_mode, resolve_modes
from testcategories.core.tiers import parse_test_size
from testcategories.models.enums import EnforcementMode, PolicyDomain, TestSize
from testcategories.models.exceptions import (
    InvalidConstraintError,
    InvalidModeError,
    UnknownTierError,
)

logger = logging.getLogger(__name__)

PROPERTY_PREFIX = "testCategories."
_MODE_PROPERTIES = {
    "timingMode": PolicyDomain.TIMING,
    "hermeticityMode": PolicyDomain.HERMETICITY,
    "distributionMode": PolicyDomain.DISTRIBUTION,
}


class ProportionBounds(BaseModel):
    """
    Allowed share of a test size within a suite run.

    Accepts ``min``/``max`` as aliases so JSON configuration stays short.

    Attributes:
        min_proportion: Lowest allowed share, inclusive (0.0-1.0).
        max_proportion: Highest allowed share, inclusive (0.0-1.0).

    Examples:
        >>> ProportionBounds(min=0.7).max_proportion
        1.0
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    min_proportion: float = Field(default=0.0, ge=0.0, le=1.0, alias="min")
    max_proportion: float = Field(default=1.0, ge=0.0, le=1.0, alias="max")

    @model_validator(mode="after")
    def min_must_not_exceed_max(self) -> "ProportionBounds":
        """Validate that the range is not empty."""
        if self.min_proportion > self.max_proportion:
            raise ValueError(
                f"min ({self.min_proportion}) must not exceed max ({self.max_proportion})"
            )
        return self

    @classmethod
    def of(cls, min_proportion: float = 0.0, max_proportion: float = 1.0) -> "ProportionBounds":
        """
        Build bounds, raising InvalidConstraintError instead of ValidationError.
        """
        try:
            return cls(min_proportion=min_proportion, max_proportion=max_proportion)
        except ValidationError as exc:
            raise _constraint_error(exc) from exc


DEFAULT_DISTRIBUTION = {
    TestSize.SMALL: ProportionBounds(min_proportion=0.70, max_proportion=1.0),
    TestSize.MEDIUM: ProportionBounds(min_proportion=0.0, max_proportion=0.25),
    TestSize.LARGE: ProportionBounds(min_proportion=0.0, max_proportion=0.10),
    TestSize.XLARGE: ProportionBounds(min_proportion=0.0, max_proportion=0.05),
}


class EnforcementConfig(BaseModel):
    """
    Complete enforcement configuration.

    Attributes:
        modes: Enforcement mode per policy domain. Domains left out are OFF.
        distribution: Allowed proportion range per test size. Sizes left out
            are unconstrained. Defaults to a test pyramid of at least 70%
            SMALL, at most 25% MEDIUM, 10% LARGE and 5% XLARGE.

    Examples:
        >>> config = EnforcementConfig.from_dict({"modes": {"timing": "warn"}})
        >>> config.mode_for("timing")
        <EnforcementMode.WARN: 'WARN'>
        >>> config.mode_for("hermeticity")
        <EnforcementMode.OFF: 'OFF'>
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    modes: dict[PolicyDomain, EnforcementMode] = Field(default_factory=dict)
    distribution: dict[TestSize, ProportionBounds] = Field(
        default_factory=lambda: dict(DEFAULT_DISTRIBUTION)
    )

    @field_validator("modes", mode="before")
    @classmethod
    def parse_modes(cls, value: Any) -> Any:
        """Normalize domain names and mode strings case-insensitively."""
        if not isinstance(value, Mapping):
            return value
        return resolve_modes(value)

    @field_validator("distribution", mode="before")
    @classmethod
    def parse_distribution_keys(cls, value: Any) -> Any:
        """Normalize test size names case-insensitively."""
        if not isinstance(value, Mapping):
            return value
        try:
            return {parse_test_size(tier): bounds for tier, bounds in value.items()}
        except UnknownTierError as exc:
            raise InvalidConstraintError(
                "Distribution constraint for unknown test size", context=exc.context
            ) from exc

    @model_validator(mode="after")
    def minimums_must_be_satisfiable(self) -> "EnforcementConfig":
        """Validate that the configured minimum shares can all hold at once."""
        total_min = sum(
            (Fraction(str(bounds.min_proportion)) for bounds in self.distribution.values()),
            Fraction(0),
        )
        if total_min > 1:
            raise ValueError(f"distribution minimums sum to {float(total_min)!r}, above 1.0")
        return self

    def mode_for(self, domain: PolicyDomain | str) -> EnforcementMode:
        """Enforcement mode for one domain (OFF if not configured)."""
        return resolve_mode(domain, self.modes)

    def resolved_modes(self) -> dict[PolicyDomain, EnforcementMode]:
        """Enforcement mode for every domain."""
        return resolve_modes(self.modes)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "modes": {d.value: m.value for d, m in self.resolved_modes().items()},
            "distribution": {
                size.value: {"min": b.min_proportion, "max": b.max_proportion}
                for size, b in self.distribution.items()
            },
        }

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "EnforcementConfig":
        """
        Create EnforcementConfig from a dictionary (e.g., parsed JSON).

        Raises:
            InvalidModeError: On an unknown domain or mode.
            InvalidConstraintError: On a malformed distribution entry.
        """
        try:
            return cls.model_validate(dict(config_dict))
        except ValidationError as exc:
            if any(error["loc"] and error["loc"][0] == "modes" for error in exc.errors()):
                raise InvalidModeError(
                    "Invalid mode configuration", context={"errors": _summarize(exc)}
                ) from exc
            raise _constraint_error(exc) from exc

    @classmethod
    def from_modes(
        cls,
        modes: ModeConfiguration,
        distribution: Mapping[TestSize | str, Any] | None = None,
    ) -> "EnforcementConfig":
        """Create EnforcementConfig from a mode mapping and optional constraints."""
        config_dict: dict[str, Any] = {"modes": dict(modes)}
        if distribution is not None:
            config_dict["distribution"] = dict(distribution)
        return cls.from_dict(config_dict)

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "EnforcementConfig":
        """
        Create EnforcementConfig from flat ``testCategories.*`` properties.

        Recognized keys::

            testCategories.timingMode=WARN
            testCategories.hermeticityMode=STRICT
            testCategories.distributionMode=OFF
            testCategories.distribution.small.min=0.8
            testCategories.distribution.large.max=0.05

        Keys without the ``testCategories.`` prefix are ignored. If any
        distribution key is present, only the sizes named are constrained;
        a size given only one bound gets 0.0 or 1.0 for the other.

        Raises:
            InvalidModeError: On an unknown mode key or value.
            InvalidConstraintError: On a malformed distribution key or value.
        """
        modes: dict[str, str] = {}
        distribution: dict[TestSize, dict[str, float]] = {}

        for key, raw_value in properties.items():
            if not key.startswith(PROPERTY_PREFIX):
                continue
            name = key[len(PROPERTY_PREFIX):]
            value = str(raw_value).strip()

            if name in _MODE_PROPERTIES:
                modes[_MODE_PROPERTIES[name].value] = value
            elif name.startswith("distribution."):
                parts = name.split(".")
                if len(parts) != 3 or parts[2] not in ("min", "max"):
                    raise InvalidConstraintError(
                        "Unrecognized distribution property", context={"key": key}
                    )
                try:
                    size = parse_test_size(parts[1])
                    bound = float(value)
                except (UnknownTierError, ValueError) as exc:
                    raise InvalidConstraintError(
                        "Invalid distribution property", context={"key": key, "value": value}
                    ) from exc
                distribution.setdefault(size, {})[parts[2]] = bound
            elif name.endswith("Mode"):
                raise InvalidModeError(
                    "Unrecognized enforcement mode property", context={"key": key}
                )
            else:
                raise InvalidConstraintError("Unrecognized property", context={"key": key})

        config_dict: dict[str, Any] = {"modes": modes}
        if distribution:
            config_dict["distribution"] = distribution
        return cls.from_dict(config_dict)

    @classmethod
    def default(cls) -> "EnforcementConfig":
        """Create the default configuration: every domain OFF, pyramid constraints."""
        return cls()


def load_config(path: Path) -> EnforcementConfig:
    """
    Load EnforcementConfig from a JSON file.

    Args:
        path: Path to a JSON object with optional "modes" and "distribution" keys.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidConstraintError: If the file is not a JSON object.
        InvalidModeError / InvalidConstraintError: On invalid content.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidConstraintError(
            "Configuration file is not valid JSON", context={"path": path, "error": exc.msg}
        ) from exc
    if not isinstance(data, dict):
        raise InvalidConstraintError(
            "Configuration file must contain a JSON object", context={"path": path}
        )
    config = EnforcementConfig.from_dict(data)
    logger.info("Loaded enforcement configuration from %s", path)
    return config


def _summarize(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def _constraint_error(exc: ValidationError) -> InvalidConstraintError:
    summary = _summarize(exc)
    logger.error("Invalid distribution constraint: %s", summary)
    return InvalidConstraintError("Invalid distribution constraint", context={"errors": summary})
