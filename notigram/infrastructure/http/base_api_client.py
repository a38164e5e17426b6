"""Base API client for remote service HTTP communication.

This module provides a base class for the notifier's HTTP clients that handles:
- HTTP request execution with timeout/connection error handling
- Response status code interpretation
- JSON object parsing with error handling
- Structured logging with service context

Subclasses only need to build their URL and call the base methods.

Architecture:
    - Infrastructure layer (adapter for external APIs)
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for remote failures)
"""

from typing import Any

import httpx
import structlog

from notigram.core.constants import REQUEST_TIMEOUT_DEFAULT, RESPONSE_BODY_MAX_LENGTH
from notigram.core.enums import ErrorCode
from notigram.core.result import Failure, Result, Success
from notigram.domain.errors import NetworkFailure


class BaseServiceAPIClient:
    """Base class for remote service clients with shared HTTP handling.

    Provides common functionality for HTTP communication with external APIs:
    - Request execution with timeout/connection error handling
    - Response status code interpretation (429, 5xx, other non-200)
    - JSON parsing with type validation
    - Structured logging with service context

    Attributes:
        _service_name: Service identifier for logging and error messages.
        _timeout: HTTP request timeout in seconds.
        _logger: Structured logger with service context.

    Example:
        >>> class IpifyClient(BaseServiceAPIClient):
        ...     def __init__(self, *, base_url: str, timeout: float = 10.0):
        ...         super().__init__(service_name="ipify", timeout=timeout)
        ...         self._base_url = base_url.rstrip("/")
        ...
        ...     async def resolve_ip(self):
        ...         return await self._execute_and_parse_object(
        ...             method="GET",
        ...             url=self._base_url,
        ...             params={"format": "json"},
        ...             operation="resolve_ip",
        ...         )
    """

    def __init__(
        self,
        *,
        service_name: str,
        timeout: float = REQUEST_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize base service API client.

        Args:
            service_name: Service identifier (e.g., "ipify", "telegram").
            timeout: HTTP request timeout in seconds.
        """
        self._service_name = service_name
        self._timeout = timeout
        self._logger = structlog.get_logger(f"notigram.{service_name}_api")

    def _failure(
        self,
        *,
        code: ErrorCode,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> Failure[NetworkFailure]:
        """Build a NetworkFailure for this service."""
        details = None
        if response_body:
            details = {"response_body": response_body[:RESPONSE_BODY_MAX_LENGTH]}
        return Failure(
            error=NetworkFailure(
                code=code,
                message=message,
                service_name=self._service_name,
                status_code=status_code,
                details=details,
            )
        )

    async def _execute_request(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[httpx.Response, NetworkFailure]:
        """Execute HTTP request with error handling.

        The URL is never logged: the Bot API embeds its token in the path.

        Args:
            method: HTTP method (GET, POST).
            url: Absolute URL.
            params: Optional query parameters.
            json_data: Optional JSON body for POST requests.
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(NetworkFailure): On timeout or connection error.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json_data,
                )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                f"{self._service_name}_api_timeout",
                operation=operation,
                timeout=self._timeout,
                error=str(e),
            )
            return self._failure(
                code=ErrorCode.SERVICE_TIMEOUT,
                message=f"{self._service_name} request timed out after {self._timeout}s",
            )

        except httpx.RequestError as e:
            self._logger.warning(
                f"{self._service_name}_api_connection_error",
                operation=operation,
                error=str(e),
            )
            return self._failure(
                code=ErrorCode.SERVICE_UNAVAILABLE,
                message=f"Failed to connect to {self._service_name}: {type(e).__name__}",
            )

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[NetworkFailure] | None:
        """Check HTTP response for errors and return appropriate NetworkFailure.

        Args:
            response: HTTP response to check.
            operation: Operation name for logging.

        Returns:
            Failure(NetworkFailure) if error detected, None if response is OK.
        """
        status = response.status_code

        # Success - no error
        if status == 200:
            return None

        # Rate limiting (429)
        if status == 429:
            self._logger.warning(
                f"{self._service_name}_api_rate_limited",
                operation=operation,
            )
            return self._failure(
                code=ErrorCode.SERVICE_RATE_LIMITED,
                message=f"{self._service_name} rate limit exceeded",
                status_code=status,
                response_body=response.text,
            )

        # Server errors (5xx)
        if status >= 500:
            self._logger.warning(
                f"{self._service_name}_api_server_error",
                operation=operation,
                status_code=status,
            )
            return self._failure(
                code=ErrorCode.SERVICE_UNAVAILABLE,
                message=f"{self._service_name} server error: {status}",
                status_code=status,
                response_body=response.text,
            )

        # Anything else that is not 200
        self._logger.warning(
            f"{self._service_name}_api_unexpected_status",
            operation=operation,
            status_code=status,
        )
        return self._failure(
            code=ErrorCode.SERVICE_HTTP_ERROR,
            message=f"Unexpected response from {self._service_name}: {status}",
            status_code=status,
            response_body=response.text,
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], NetworkFailure]:
        """Parse response as JSON object with error handling.

        Args:
            response: HTTP response to parse.
            operation: Operation name for logging.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(NetworkFailure): On HTTP error or invalid JSON.
        """
        # Check for HTTP errors first
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        # Parse JSON
        try:
            data = response.json()
        except ValueError as e:
            self._logger.error(
                f"{self._service_name}_api_invalid_json",
                operation=operation,
                error=str(e),
            )
            return self._failure(
                code=ErrorCode.INVALID_RESPONSE,
                message=f"Invalid JSON response from {self._service_name}",
                status_code=response.status_code,
                response_body=response.text,
            )

        # Validate type
        if not isinstance(data, dict):
            self._logger.warning(
                f"{self._service_name}_api_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return self._failure(
                code=ErrorCode.INVALID_RESPONSE,
                message=f"Expected object response from {self._service_name}",
                status_code=response.status_code,
                response_body=response.text,
            )

        self._logger.debug(
            f"{self._service_name}_api_succeeded",
            operation=operation,
        )
        return Success(value=data)

    async def _execute_and_parse_object(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[dict[str, Any], NetworkFailure]:
        """Execute request and parse response as JSON object.

        Combines _execute_request and _parse_json_object for convenience.

        Args:
            method: HTTP method (GET, POST).
            url: Absolute URL.
            params: Optional query parameters.
            json_data: Optional JSON body for POST requests.
            operation: Operation name for logging.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(NetworkFailure): On any error.
        """
        result = await self._execute_request(
            method=method,
            url=url,
            params=params,
            json_data=json_data,
            operation=operation,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json_object(result.value, operation)
