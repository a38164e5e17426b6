"""Geolocation and network profile value objects.

Immutable value objects produced by the Identity Resolver. A GeoProfile is
the network/geolocation subset of a Visitor Record; every attribute is
optional because the geolocation service may omit any of them.

Usage:
    from notigram.domain.value_objects import GeoProfile, FlagInfo

    profile = GeoProfile(
        ip="8.8.8.8",
        country="United States",
        flag=FlagInfo(emoji="🇺🇸"),
    )
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True, kw_only=True)
class FlagInfo:
    """Country flag in the three representations the service returns.

    Attributes:
        img: URL of a flag image.
        emoji: Flag emoji glyph ("🇺🇸").
        emoji_unicode: Code points of the emoji ("U+1F1FA U+1F1F8").
    """

    img: str | None = None
    emoji: str | None = None
    emoji_unicode: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ConnectionInfo:
    """Network operator behind the IP.

    Attributes:
        asn: Autonomous system number.
        org: Organization name.
        isp: Internet service provider.
        domain: Operator domain.
    """

    asn: int | None = None
    org: str | None = None
    isp: str | None = None
    domain: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TimezoneInfo:
    """Timezone of the IP location.

    Attributes:
        id: IANA identifier ("America/New_York").
        abbr: Abbreviation ("EDT").
        is_dst: Whether daylight saving time is active.
        offset: UTC offset in seconds.
        utc: UTC offset string ("-04:00").
        current_time: Local time at the location (ISO string).
    """

    id: str | None = None
    abbr: str | None = None
    is_dst: bool | None = None
    offset: int | None = None
    utc: str | None = None
    current_time: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class GeoProfile:
    """Network identity and geolocation of the visitor's public IP.

    Attributes:
        ip: Public IP address.
        success: Lookup-success flag reported by the geolocation service.
        type: Address type ("IPv4", "IPv6").
        continent, continent_code: Continent name and code.
        country, country_code: Country name and ISO code.
        region, region_code: Region/state name and code.
        city: City name.
        latitude, longitude: Coordinates.
        is_eu: Whether the country is an EU member.
        postal: Postal code.
        calling_code: International calling code without "+" ("1").
        capital: Capital city of the country.
        borders: ISO codes of bordering countries.
        flag: Flag representations.
        connection: Network operator data.
        timezone: Timezone data.
    """

    ip: str | None = None
    success: bool | None = None
    type: str | None = None
    continent: str | None = None
    continent_code: str | None = None
    country: str | None = None
    country_code: str | None = None
    region: str | None = None
    region_code: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_eu: bool | None = None
    postal: str | None = None
    calling_code: str | None = None
    capital: str | None = None
    borders: tuple[str, ...] = ()
    flag: FlagInfo | None = None
    connection: ConnectionInfo | None = None
    timezone: TimezoneInfo | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the profile as a plain nested dict."""
        data = asdict(self)
        data["borders"] = list(self.borders)
        return data
