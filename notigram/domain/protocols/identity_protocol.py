"""Identity lookup protocols for IP and geolocation resolution.

This module defines the ports the Identity Resolver depends on. The two
lookups are separate protocols because the second needs the output of the
first and implementations usually talk to different services.

Implementations:
    - IpifyClient (notigram.infrastructure.identity.ipify_client)
    - IpWhoisClient (notigram.infrastructure.identity.ipwhois_client)
"""

from typing import Protocol

from notigram.core.result import Result
from notigram.domain.errors import NetworkFailure
from notigram.domain.value_objects import GeoProfile


class IpResolver(Protocol):
    """Resolves the caller's own public IP address.

    Behavior:
        - One remote call, no retry
        - Fail-closed: any transport or shape problem is a Failure
    """

    async def resolve_ip(self) -> Result[str, NetworkFailure]:
        """Resolve the public IP address.

        Returns:
            Success(str): The IP address.
            Failure(NetworkFailure): On any remote or parse error.
        """
        ...


class GeoResolver(Protocol):
    """Resolves a geolocation/network profile for an IP address.

    Behavior:
        - One remote call, no retry
        - Fail-closed: any transport or shape problem is a Failure
    """

    async def resolve_geo(self, ip_address: str) -> Result[GeoProfile, NetworkFailure]:
        """Resolve geolocation for an IP.

        Args:
            ip_address: Public IPv4 or IPv6 address.

        Returns:
            Success(GeoProfile): Profile for the IP.
            Failure(NetworkFailure): On any remote or parse error.
        """
        ...
