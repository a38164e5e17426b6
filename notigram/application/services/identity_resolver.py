"""Identity resolution service.

Resolves the visitor's public IP, then the geolocation/network profile for
that IP. The second lookup needs the first one's answer, so they always run
in sequence.

Architecture:
    - Application service (orchestrates two domain ports)
    - All-or-nothing: a failure in either lookup is returned as-is and no
      partial profile is produced

Usage:
    resolver = IdentityResolver(ip_resolver=IpifyClient(), geo_resolver=IpWhoisClient())
    result = await resolver.resolve()
"""

from dataclasses import replace

import structlog

from notigram.core.result import Failure, Result, Success
from notigram.domain.errors import NetworkFailure
from notigram.domain.protocols import GeoResolver, IpResolver
from notigram.domain.value_objects import GeoProfile

logger = structlog.get_logger(__name__)


class IdentityResolver:
    """Two-step IP + geolocation lookup.

    Dependencies (injected via constructor):
        - IpResolver: public IP lookup
        - GeoResolver: geolocation lookup for an IP
    """

    def __init__(self, *, ip_resolver: IpResolver, geo_resolver: GeoResolver) -> None:
        self._ip_resolver = ip_resolver
        self._geo_resolver = geo_resolver

    async def resolve(self) -> Result[GeoProfile, NetworkFailure]:
        """Resolve the visitor's network identity.

        Returns:
            Success(GeoProfile): Profile for the visitor's public IP.
            Failure(NetworkFailure): From whichever lookup failed first.
        """
        ip_result = await self._ip_resolver.resolve_ip()
        if isinstance(ip_result, Failure):
            logger.warning(
                "identity_ip_lookup_failed",
                service=ip_result.error.service_name,
                error_code=ip_result.error.code.value,
            )
            return ip_result

        geo_result = await self._geo_resolver.resolve_geo(ip_result.value)
        if isinstance(geo_result, Failure):
            logger.warning(
                "identity_geo_lookup_failed",
                service=geo_result.error.service_name,
                error_code=geo_result.error.code.value,
            )
            return geo_result

        profile = geo_result.value
        # Some services omit the echo of the queried IP
        if profile.ip is None:
            profile = replace(profile, ip=ip_result.value)

        return Success(value=profile)
