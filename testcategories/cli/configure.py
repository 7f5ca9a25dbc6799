"""CLI command that validates enforcement configuration.

Loads configuration from a JSON file and/or ``-D key=value`` properties,
fails fast on any invalid entry, and logs the resolved modes and
distribution targets.

Usage:
    test-categories configure --config test-categories.json
    test-categories configure -D testCategories.timingMode=WARN

Exit codes:
    0: Configuration is valid
    2: Configuration is invalid or unreadable
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from testcategories.config.settings import EnforcementConfig, load_config
from testcategories.models.exceptions import TestCategoriesError

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the --config / -D options shared by every subcommand."""
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON configuration file with 'modes' and 'distribution' keys",
    )
    parser.add_argument(
        "-D",
        dest="properties",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Configuration property, e.g. -D testCategories.hermeticityMode=STRICT",
    )


def parse_properties(pairs: list[str]) -> dict[str, str]:
    """
    Split ``key=value`` strings into a dictionary.

    Raises:
        ValueError: If an entry has no '='.
    """
    properties = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        properties[key.strip()] = value.strip()
    return properties


def build_config(args: argparse.Namespace) -> EnforcementConfig:
    """
    Build configuration from parsed arguments.

    Properties override the file: when both are given, the file is loaded
    first and each property-defined mode or distribution replaces the
    file's value.
    """
    config = load_config(args.config) if args.config else EnforcementConfig.default()
    properties = parse_properties(args.properties)
    if not properties:
        return config

    overrides = EnforcementConfig.from_properties(properties)
    merged = config.to_dict()
    explicit_modes = {
        domain.value: mode.value for domain, mode in overrides.modes.items()
        if any(key.endswith(f".{domain.value}Mode") for key in properties)
    }
    merged["modes"].update(explicit_modes)
    if any(".distribution." in key for key in properties):
        merged["distribution"] = overrides.to_dict()["distribution"]
    return EnforcementConfig.from_dict(merged)


def configure_configure_parser(parser: argparse.ArgumentParser) -> None:
    """Configure arguments for the 'configure' subcommand."""
    add_config_arguments(parser)


def run_configure_command(args: argparse.Namespace) -> int:
    """
    Validate configuration and print it as JSON.

    Returns:
        Exit code (0 for valid configuration, 2 otherwise).
    """
    try:
        config = build_config(args)
    except (TestCategoriesError, ValueError, OSError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_INVALID_INPUT

    for domain, mode in config.resolved_modes().items():
        logger.info("%s mode: %s", domain.value.capitalize(), mode.value)
    for size, bounds in config.distribution.items():
        logger.info(
            "%s distribution target: %.0f%%-%.0f%%",
            size.value,
            bounds.min_proportion * 100,
            bounds.max_proportion * 100,
        )

    json.dump(config.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0
