"""ipwho.is response mapper.

Converts ipwho.is JSON responses to GeoProfile.
Contains ipwho.is-specific knowledge about JSON structure.

ipwho.is Response Structure:
    {
        "ip": "8.8.8.8",
        "success": true,
        "type": "IPv4",
        "continent": "North America",
        "continent_code": "NA",
        "country": "United States",
        "country_code": "US",
        "region": "California",
        "region_code": "CA",
        "city": "Mountain View",
        "latitude": 37.3860517,
        "longitude": -122.0838511,
        "is_eu": false,
        "postal": "94039",
        "calling_code": "1",
        "capital": "Washington D.C.",
        "borders": "CA,MX",
        "flag": {"img": "...", "emoji": "🇺🇸", "emoji_unicode": "U+1F1FA U+1F1F8"},
        "connection": {"asn": 15169, "org": "Google LLC", "isp": "Google LLC",
                       "domain": "google.com"},
        "timezone": {"id": "America/Los_Angeles", "abbr": "PDT", "is_dst": true,
                     "offset": -25200, "utc": "-07:00",
                     "current_time": "2024-06-21T08:41:00-07:00"}
    }

Failed lookups come back with HTTP 200 and
``{"ip": "...", "success": false, "message": "Reserved range"}``.

Reference:
    - https://ipwhois.io/documentation
"""

import math
from typing import Any

import structlog

from notigram.domain.value_objects import (
    ConnectionInfo,
    FlagInfo,
    GeoProfile,
    TimezoneInfo,
)

logger = structlog.get_logger(__name__)


class IpWhoisMapper:
    """Mapper for converting ipwho.is data to GeoProfile.

    This mapper handles:
    - Tolerating missing keys and wrong value types (mapped to None)
    - Splitting the comma-separated "borders" string
    - Building the nested flag/connection/timezone value objects

    Thread-safe: No mutable state, can be shared across requests.

    Example:
        >>> mapper = IpWhoisMapper()
        >>> profile = mapper.map_profile({"ip": "8.8.8.8", "country": "United States"})
        >>> profile.country
        'United States'
    """

    def map_profile(self, data: dict[str, Any]) -> GeoProfile | None:
        """Map ipwho.is JSON to GeoProfile.

        Args:
            data: Top-level object from the ipwho.is response.

        Returns:
            GeoProfile if mapping succeeds, None if the data cannot be mapped.
        """
        try:
            return self._map_profile_internal(data)
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
            logger.warning(
                "ipwhois_profile_mapping_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def _map_profile_internal(self, data: dict[str, Any]) -> GeoProfile:
        """Internal mapping logic.

        Raises exceptions on invalid data (caught by map_profile).
        """
        return GeoProfile(
            ip=_str(data.get("ip")),
            success=_bool(data.get("success")),
            type=_str(data.get("type")),
            continent=_str(data.get("continent")),
            continent_code=_str(data.get("continent_code")),
            country=_str(data.get("country")),
            country_code=_str(data.get("country_code")),
            region=_str(data.get("region")),
            region_code=_str(data.get("region_code")),
            city=_str(data.get("city")),
            latitude=_float(data.get("latitude")),
            longitude=_float(data.get("longitude")),
            is_eu=_bool(data.get("is_eu")),
            postal=_str(data.get("postal")),
            calling_code=_str(data.get("calling_code")),
            capital=_str(data.get("capital")),
            borders=self._map_borders(data.get("borders")),
            flag=self._map_flag(data.get("flag")),
            connection=self._map_connection(data.get("connection")),
            timezone=self._map_timezone(data.get("timezone")),
        )

    def _map_borders(self, value: Any) -> tuple[str, ...]:
        """Split "CA,MX" (or a list) into a tuple of codes."""
        if isinstance(value, str):
            parts = value.split(",")
        elif isinstance(value, list):
            parts = [str(part) for part in value]
        else:
            return ()
        return tuple(part.strip() for part in parts if part.strip())

    def _map_flag(self, value: Any) -> FlagInfo | None:
        if not isinstance(value, dict):
            return None
        return FlagInfo(
            img=_str(value.get("img")),
            emoji=_str(value.get("emoji")),
            emoji_unicode=_str(value.get("emoji_unicode")),
        )

    def _map_connection(self, value: Any) -> ConnectionInfo | None:
        if not isinstance(value, dict):
            return None
        return ConnectionInfo(
            asn=_int(value.get("asn")),
            org=_str(value.get("org")),
            isp=_str(value.get("isp")),
            domain=_str(value.get("domain")),
        )

    def _map_timezone(self, value: Any) -> TimezoneInfo | None:
        if not isinstance(value, dict):
            return None
        return TimezoneInfo(
            id=_str(value.get("id")),
            abbr=_str(value.get("abbr")),
            is_dst=_bool(value.get("is_dst")),
            offset=_int(value.get("offset")),
            utc=_str(value.get("utc")),
            current_time=_str(value.get("current_time")),
        )


# --- Value coercion helpers ---


def _str(value: Any) -> str | None:
    """Non-empty string, numbers stringified, anything else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None
