"""Bidding area allow-list: short area codes to ENTSO-E domain identifiers."""

from __future__ import annotations

from types import MappingProxyType
from zoneinfo import ZoneInfo

from entsoe_dayahead.core.exceptions import InvalidAreaError
from entsoe_dayahead.core.models import AreaCode, DomainIdentifier

# EIC codes for the Swedish bidding zones
AREA_DOMAINS: MappingProxyType[AreaCode, DomainIdentifier] = MappingProxyType(
    {
        "SE1": "10Y1001A1001A44P",
        "SE2": "10Y1001A1001A45N",
        "SE3": "10Y1001A1001A46L",
        "SE4": "10Y1001A1001A47J",
    }
)

# Market time zone of each area; the provider's "day" is a local day
AREA_TIMEZONES: MappingProxyType[AreaCode, str] = MappingProxyType(
    {area: "Europe/Stockholm" for area in AREA_DOMAINS}
)


def resolve_area(area: str) -> DomainIdentifier:
    """Map an area code to the provider's domain identifier.

    Matching is exact and case-sensitive.

    Raises:
        InvalidAreaError: If the area is not in AREA_DOMAINS.
    """
    try:
        return AREA_DOMAINS[area]
    except KeyError:
        raise InvalidAreaError(area) from None


def area_timezone(area: str) -> ZoneInfo:
    """Market time zone for a supported area."""
    if area not in AREA_TIMEZONES:
        raise InvalidAreaError(area)
    return ZoneInfo(AREA_TIMEZONES[area])


def supported_areas() -> list[AreaCode]:
    return sorted(AREA_DOMAINS)
