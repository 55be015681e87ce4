"""Registry of boundary domains selectable by name.

Configuration files and the CLI refer to domains by ID (``semver``, ``u8``,
...). The registry maps each ID to its value type and to the function used to
read installed values, which may accept more than the range grammar does
(installed semantic versions may carry build metadata).
"""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Callable

from .extremes import RangeExtremeParseable
from .models import INTEGER_DOMAINS, PureVersion, Version

ParseValueFunction = Callable[[str], RangeExtremeParseable]


@dataclass(slots=True, frozen=True)
class DomainHandler:
    """Binding of a domain ID to its value type and installed-value parser."""

    domain_id: str
    display_name: str
    value_type: type[RangeExtremeParseable]
    parse_value: ParseValueFunction


def _parse_installed_version(text: str) -> PureVersion:
    return Version.parse(text.strip()).pure


def _integer_handler(value_type: type) -> DomainHandler:
    kind = "signed" if value_type.SIGNED else "unsigned"
    return DomainHandler(
        domain_id=value_type.__name__.lower(),
        display_name=f"{value_type.BITS}-bit {kind} integer",
        value_type=value_type,
        parse_value=lambda text: value_type.parse(text.strip()),
    )


# Registry of known domains, keyed by domain ID.
DOMAINS: dict[str, DomainHandler] = {
    "semver": DomainHandler(
        domain_id="semver",
        display_name="Semantic version",
        value_type=PureVersion,
        parse_value=_parse_installed_version,
    ),
    **{handler.domain_id: handler for handler in map(_integer_handler, INTEGER_DOMAINS)},
}

DEFAULT_DOMAIN_ID = "semver"


class UnknownDomainError(ValueError):
    """Raised when a domain ID is not found in the registry."""


def get_domain(domain_id: str) -> DomainHandler:
    """Return the handler for the given domain ID, or raise UnknownDomainError."""
    handler = DOMAINS.get(domain_id)
    if handler is None:
        known = ", ".join(get_known_domain_ids())
        raise UnknownDomainError(f"Unknown domain '{domain_id}'. Known domains: {known}")
    return handler


def get_known_domain_ids() -> list[str]:
    """Return a sorted list of all registered domain IDs."""
    return sorted(DOMAINS.keys())
