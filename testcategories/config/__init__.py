"""Enforcement configuration loading and validation."""

from testcategories.config.settings import (
    DEFAULT_DISTRIBUTION,
    EnforcementConfig,
    ProportionBounds,
    load_config,
)

__all__ = ["DEFAULT_DISTRIBUTION", "EnforcementConfig", "ProportionBounds", "load_config"]
