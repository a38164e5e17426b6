"""Domain value objects package.

Usage:
    from notigram.domain.value_objects import GeoProfile, PageEnvironment
"""

from notigram.domain.value_objects.geo_profile import (
    ConnectionInfo,
    FlagInfo,
    GeoProfile,
    TimezoneInfo,
)
from notigram.domain.value_objects.page_context import (
    AgentDescriptors,
    PageContext,
    PageEnvironment,
)

__all__ = [
    "AgentDescriptors",
    "ConnectionInfo",
    "FlagInfo",
    "GeoProfile",
    "PageContext",
    "PageEnvironment",
    "TimezoneInfo",
]
