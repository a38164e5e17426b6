"""ipwho.is API client.

Resolves a geolocation/network profile for an IP address.

Endpoint:
    GET https://ipwho.is/{ip} - geolocation, connection and timezone data

Reference:
    - https://ipwhois.io/documentation
"""

from notigram.core.constants import GEO_LOOKUP_URL_DEFAULT, REQUEST_TIMEOUT_DEFAULT
from notigram.core.enums import ErrorCode
from notigram.core.result import Failure, Result, Success
from notigram.domain.errors import NetworkFailure
from notigram.domain.value_objects import GeoProfile
from notigram.infrastructure.http import BaseServiceAPIClient
from notigram.infrastructure.identity.ipwhois_mapper import IpWhoisMapper


class IpWhoisClient(BaseServiceAPIClient):
    """HTTP client for the ipwho.is geolocation service.

    Implements GeoResolver protocol (structural typing). Raw JSON is mapped
    to GeoProfile by IpWhoisMapper.

    Example:
        >>> client = IpWhoisClient(base_url="https://ipwho.is", timeout=5.0)
        >>> result = await client.resolve_geo("8.8.8.8")
    """

    def __init__(
        self,
        *,
        base_url: str = GEO_LOOKUP_URL_DEFAULT,
        timeout: float = REQUEST_TIMEOUT_DEFAULT,
        mapper: IpWhoisMapper | None = None,
    ) -> None:
        """Initialize ipwho.is client.

        Args:
            base_url: ipwho.is base URL.
            timeout: HTTP request timeout in seconds.
            mapper: Response mapper (default IpWhoisMapper).
        """
        super().__init__(service_name="ipwho.is", timeout=timeout)
        self._base_url = base_url.rstrip("/")
        self._mapper = mapper or IpWhoisMapper()

    async def resolve_geo(self, ip_address: str) -> Result[GeoProfile, NetworkFailure]:
        """Resolve geolocation for an IP.

        A response with ``success: false`` is still a Success: the profile
        carries the flag and the lookup is logged as a warning.

        Args:
            ip_address: Public IPv4 or IPv6 address.

        Returns:
            Success(GeoProfile): Profile for the IP.
            Failure(NetworkFailure): On transport error, bad status or an
                unmappable body.
        """
        result = await self._execute_and_parse_object(
            method="GET",
            url=f"{self._base_url}/{ip_address}",
            operation="resolve_geo",
        )
        if isinstance(result, Failure):
            return result

        profile = self._mapper.map_profile(result.value)
        if profile is None:
            return self._failure(
                code=ErrorCode.INVALID_RESPONSE,
                message="ipwho.is response could not be mapped to a profile",
            )

        if profile.success is False:
            self._logger.warning(
                "ipwhois_lookup_unsuccessful",
                ip_address=ip_address,
                reason=result.value.get("message"),
            )

        return Success(value=profile)
