"""ipify API client.

Resolves the caller's own public IP address.

Endpoint:
    GET https://api.ipify.org?format=json -> {"ip": "203.0.113.7"}

Reference:
    - https://www.ipify.org/
"""

from notigram.core.constants import IP_LOOKUP_URL_DEFAULT, REQUEST_TIMEOUT_DEFAULT
from notigram.core.enums import ErrorCode
from notigram.core.result import Failure, Result, Success
from notigram.domain.errors import NetworkFailure
from notigram.infrastructure.http import BaseServiceAPIClient


class IpifyClient(BaseServiceAPIClient):
    """HTTP client for the ipify public IP service.

    Implements IpResolver protocol (structural typing).

    Example:
        >>> client = IpifyClient(base_url="https://api.ipify.org", timeout=5.0)
        >>> result = await client.resolve_ip()
    """

    def __init__(
        self,
        *,
        base_url: str = IP_LOOKUP_URL_DEFAULT,
        timeout: float = REQUEST_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize ipify client.

        Args:
            base_url: ipify endpoint.
            timeout: HTTP request timeout in seconds.
        """
        super().__init__(service_name="ipify", timeout=timeout)
        self._base_url = base_url.rstrip("/")

    async def resolve_ip(self) -> Result[str, NetworkFailure]:
        """Resolve the public IP address.

        Returns:
            Success(str): The IP address.
            Failure(NetworkFailure): On transport error, bad status, or a body
                without a non-empty "ip" string.
        """
        result = await self._execute_and_parse_object(
            method="GET",
            url=self._base_url,
            params={"format": "json"},
            operation="resolve_ip",
        )
        if isinstance(result, Failure):
            return result

        ip = result.value.get("ip")
        if not isinstance(ip, str) or not ip.strip():
            self._logger.warning("ipify_api_missing_ip", operation="resolve_ip")
            return self._failure(
                code=ErrorCode.INVALID_RESPONSE,
                message="ipify response did not contain an IP address",
            )

        return Success(value=ip.strip())
