"""Enforcement mode resolution.

Maps a policy domain plus a configuration mapping to the enforcement mode
for that domain. Every domain defaults to OFF: enforcement has to be opted
into explicitly.
"""

import logging
from collections.abc import Mapping

from testcategories.models.enums import EnforcementMode, PolicyDomain
from testcategories.models.exceptions import InvalidModeError

logger = logging.getLogger(__name__)

DEFAULT_MODE = EnforcementMode.OFF

ModeConfiguration = Mapping[PolicyDomain | str, EnforcementMode | str]


def parse_mode(value: EnforcementMode | str, domain: str | None = None) -> EnforcementMode:
    """
    Parse a mode string case-insensitively.

    Args:
        value: "off", "warn" or "strict" in any case, or an EnforcementMode.
        domain: Domain name, only used in the error context.

    Raises:
        InvalidModeError: If the value is not one of OFF, WARN, STRICT.

    Examples:
        >>> parse_mode(" Warn ")
        <EnforcementMode.WARN: 'WARN'>
    """
    if isinstance(value, EnforcementMode):
        return value
    if isinstance(value, str):
        try:
            return EnforcementMode(value.strip().upper())
        except ValueError:
            pass
    context = {"value": value, "expected": "OFF, WARN, STRICT"}
    if domain is not None:
        context["domain"] = domain
    logger.error("Invalid enforcement mode %r for domain %s", value, domain)
    raise InvalidModeError("Invalid enforcement mode", context=context)


def parse_domain(value: PolicyDomain | str) -> PolicyDomain:
    """
    Parse a policy domain name case-insensitively.

    Raises:
        InvalidModeError: If the name is not timing, hermeticity or distribution.
    """
    if isinstance(value, PolicyDomain):
        return value
    if isinstance(value, str):
        try:
            return PolicyDomain(value.strip().lower())
        except ValueError:
            pass
    logger.error("Unknown policy domain %r in mode configuration", value)
    raise InvalidModeError(
        "Unknown policy domain",
        context={
            "domain": value,
            "expected": ", ".join(domain.value for domain in PolicyDomain),
        },
    )


def resolve_mode(domain: PolicyDomain | str, configuration: ModeConfiguration) -> EnforcementMode:
    """
    Resolve the enforcement mode configured for one domain.

    Args:
        domain: Policy domain to look up.
        configuration: Mapping of domain name to mode string. Keys are
            matched case-insensitively.

    Returns:
        The configured mode, or OFF if the domain is not configured.

    Raises:
        InvalidModeError: If the configured value is not OFF, WARN or STRICT.

    Examples:
        >>> resolve_mode("timing", {"timing": "strict"})
        <EnforcementMode.STRICT: 'STRICT'>
        >>> resolve_mode(PolicyDomain.DISTRIBUTION, {})
        <EnforcementMode.OFF: 'OFF'>
    """
    target = parse_domain(domain)
    for key, value in configuration.items():
        if parse_domain(key) is target:
            return parse_mode(value, domain=target.value)
    return DEFAULT_MODE


def resolve_modes(configuration: ModeConfiguration) -> dict[PolicyDomain, EnforcementMode]:
    """
    Resolve the mode of every policy domain at once.

    Every entry is validated, including entries for unknown domains, so a
    bad configuration fails before any enforcement runs.

    Raises:
        InvalidModeError: On an unknown domain or mode.
    """
    modes = {domain: DEFAULT_MODE for domain in PolicyDomain}
    for key, value in configuration.items():
        domain = parse_domain(key)
        modes[domain] = parse_mode(value, domain=domain.value)
    return modes
