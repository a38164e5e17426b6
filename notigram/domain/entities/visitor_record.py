"""VisitorRecord entity.

The single normalized result of one visit: network identity, geolocation,
device/browser identity and page context merged into one immutable object.

Lifecycle:
    Created once per dispatch by the record merger, handed to the formatter
    and to the host callbacks, then discarded. Nothing in the pipeline keeps
    or mutates it.

Invariants:
    - Every attribute is optional; consumers must tolerate None everywhere.
    - Frozen: assigning to an attribute raises FrozenInstanceError.
"""

from dataclasses import asdict, dataclass
from typing import Any

from notigram.domain.value_objects import (
    ConnectionInfo,
    FlagInfo,
    GeoProfile,
    PageContext,
    TimezoneInfo,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class VisitorRecord:
    """Normalized, immutable description of one visitor.

    Network:
        ip, success, type

    Geolocation:
        continent, continent_code, country, country_code, region,
        region_code, city, latitude, longitude, is_eu, postal,
        calling_code, capital, borders, flag, connection, timezone

    Device:
        device, browser, os

    Page context:
        page, full_url, referrer, timestamp, user_agent
    """

    # Network
    ip: str | None = None
    success: bool | None = None
    type: str | None = None

    # Geolocation
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

    # Device
    device: str | None = None
    browser: str | None = None
    os: str | None = None

    # Page context
    page: str | None = None
    full_url: str | None = None
    referrer: str | None = None
    timestamp: str | None = None
    user_agent: str | None = None

    @classmethod
    def from_parts(
        cls,
        profile: GeoProfile | None,
        context: PageContext,
    ) -> "VisitorRecord":
        """Union a geolocation profile and a page context.

        Args:
            profile: Identity/geolocation subset, None when it is unavailable.
            context: Locally captured subset (always present).

        Returns:
            VisitorRecord with every field of both parts.
        """
        geo = profile or GeoProfile()
        return cls(
            ip=geo.ip,
            success=geo.success,
            type=geo.type,
            continent=geo.continent,
            continent_code=geo.continent_code,
            country=geo.country,
            country_code=geo.country_code,
            region=geo.region,
            region_code=geo.region_code,
            city=geo.city,
            latitude=geo.latitude,
            longitude=geo.longitude,
            is_eu=geo.is_eu,
            postal=geo.postal,
            calling_code=geo.calling_code,
            capital=geo.capital,
            borders=geo.borders,
            flag=geo.flag,
            connection=geo.connection,
            timezone=geo.timezone,
            device=context.device,
            browser=context.browser,
            os=context.os,
            page=context.page,
            full_url=context.full_url,
            referrer=context.referrer,
            timestamp=context.timestamp,
            user_agent=context.user_agent,
        )

    @property
    def has_location(self) -> bool:
        """Whether any geolocation data is present."""
        return any((self.ip, self.country, self.region, self.city))

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain nested dict (JSON-serializable)."""
        data = asdict(self)
        data["borders"] = list(self.borders)
        return data
