"""Pytest configuration and shared test doubles.

Provides:
1. Builders for domain objects (profiles, contexts, records)
2. In-memory fakes for every domain port (IP/geo lookup, messenger, logger)
3. Settings isolation (cached settings cleared around each test)

Async tests run under pytest-asyncio in auto mode (see pyproject.toml).
"""

from datetime import datetime, timezone
from typing import Any

import pytest

from notigram.core.config import get_settings
from notigram.core.enums import ErrorCode
from notigram.core.result import Failure, Result, Success
from notigram.domain.entities import VisitorRecord
from notigram.domain.errors import NetworkFailure
from notigram.domain.value_objects import (
    AgentDescriptors,
    ConnectionInfo,
    FlagInfo,
    GeoProfile,
    PageContext,
    TimezoneInfo,
)

FIXED_NOW = datetime(2024, 6, 21, 15, 30, 0, tzinfo=timezone.utc)


# =============================================================================
# Domain object builders
# =============================================================================


def create_profile(**overrides: Any) -> GeoProfile:
    """Helper to create a fully populated GeoProfile.

    Usage:
        profile = create_profile(city=None)
    """
    values: dict[str, Any] = {
        "ip": "8.8.8.8",
        "success": True,
        "type": "IPv4",
        "continent": "North America",
        "continent_code": "NA",
        "country": "United States",
        "country_code": "US",
        "region": "California",
        "region_code": "CA",
        "city": "Mountain View",
        "latitude": 37.386,
        "longitude": -122.0838,
        "is_eu": False,
        "postal": "94039",
        "calling_code": "1",
        "capital": "Washington D.C.",
        "borders": ("CA", "MX"),
        "flag": FlagInfo(emoji="🇺🇸", img="https://cdn.ipwhois.io/flags/us.svg"),
        "connection": ConnectionInfo(
            asn=15169, org="Google LLC", isp="Google LLC", domain="google.com"
        ),
        "timezone": TimezoneInfo(
            id="America/Los_Angeles", abbr="PDT", is_dst=True, offset=-25200, utc="-07:00"
        ),
    }
    values.update(overrides)
    return GeoProfile(**values)


def create_context(**overrides: Any) -> PageContext:
    """Helper to create a PageContext."""
    values: dict[str, Any] = {
        "page": "/pricing",
        "full_url": "https://example.com/pricing?plan=pro",
        "referrer": "Direct",
        "timestamp": "2024-06-21T15:30:00+00:00",
        "user_agent": "Mozilla/5.0",
        "device": "Desktop",
        "browser": "Chrome 126.0",
        "os": "Windows 10",
    }
    values.update(overrides)
    return PageContext(**values)


def create_record(**overrides: Any) -> VisitorRecord:
    """Helper to create a complete VisitorRecord."""
    record = VisitorRecord.from_parts(create_profile(), create_context())
    if not overrides:
        return record
    data = {field: getattr(record, field) for field in record.__dataclass_fields__}
    data.update(overrides)
    return VisitorRecord(**data)


def network_failure(
    service_name: str = "ipwho.is",
    code: ErrorCode = ErrorCode.SERVICE_UNAVAILABLE,
) -> NetworkFailure:
    return NetworkFailure(
        code=code,
        message=f"{service_name} unavailable",
        service_name=service_name,
    )


# =============================================================================
# Port fakes
# =============================================================================


class FakeIpResolver:
    """IpResolver returning a fixed result and counting calls."""

    def __init__(self, result: Result[str, NetworkFailure] | None = None) -> None:
        self.result = result or Success(value="8.8.8.8")
        self.calls = 0

    async def resolve_ip(self) -> Result[str, NetworkFailure]:
        self.calls += 1
        return self.result


class FakeGeoResolver:
    """GeoResolver returning a fixed result and recording queried IPs."""

    def __init__(self, result: Result[GeoProfile, NetworkFailure] | None = None) -> None:
        self.result = result or Success(value=create_profile())
        self.queried: list[str] = []

    async def resolve_geo(self, ip_address: str) -> Result[GeoProfile, NetworkFailure]:
        self.queried.append(ip_address)
        return self.result


class FakeAgentParser:
    """AgentParser returning fixed descriptors."""

    def __init__(self, descriptors: AgentDescriptors | None = None) -> None:
        self.descriptors = descriptors or AgentDescriptors(
            browser_name="Chrome", browser_version="126.0", os_name="Windows", os_version="10"
        )

    def parse(self, user_agent: str) -> AgentDescriptors:
        return self.descriptors


class FakeMessenger:
    """BotMessenger recording every sent message."""

    def __init__(self, result: Result[int | None, NetworkFailure] | None = None) -> None:
        self.result = result or Success(value=101)
        self.sent: list[dict[str, Any]] = []

    async def send_message(
        self, *, chat_id: str, text: str, parse_mode: str | None
    ) -> Result[int | None, NetworkFailure]:
        self.sent.append({"chat_id": chat_id, "text": text, "parse_mode": parse_mode})
        return self.result


class FakeLogger:
    """LoggerProtocol collecting (level, event, context) tuples."""

    def __init__(
        self,
        records: list[tuple[str, str, dict[str, Any]]] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.records = records if records is not None else []
        self.context = context or {}

    def _log(self, level: str, message: str, **context: Any) -> None:
        self.records.append((level, message, {**self.context, **context}))

    def debug(self, message: str, /, **context: Any) -> None:
        self._log("debug", message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._log("info", message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._log("warning", message, **context)

    def error(self, message: str, /, *, error: Exception | None = None, **context: Any) -> None:
        if error is not None:
            context["error_type"] = type(error).__name__
        self._log("error", message, **context)

    def bind(self, **context: Any) -> "FakeLogger":
        return FakeLogger(self.records, {**self.context, **context})

    def events(self, level: str | None = None) -> list[str]:
        return [event for lvl, event, _ in self.records if level is None or lvl == level]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Isolate tests from cached settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_logger() -> FakeLogger:
    return FakeLogger()


@pytest.fixture
def failing_geo_resolver() -> FakeGeoResolver:
    return FakeGeoResolver(Failure(error=network_failure()))
