"""Notification pipeline error types.

These errors are part of the protocol contracts in
``notigram.domain.protocols`` - they define the failure cases that resolver,
parser and messenger implementations can return, and they are what the host
application receives through ``on_error``.

Architecture:
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)
- Infrastructure adapters map httpx exceptions and bad responses to these

Usage:
    from notigram.domain.errors import NetworkFailure
    from notigram.core.result import Failure

    return Failure(error=NetworkFailure(
        code=ErrorCode.SERVICE_TIMEOUT,
        message="ipwho.is request timed out",
        service_name="ipwho.is",
    ))
"""

from dataclasses import dataclass

from notigram.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class NotificationError(DomainError):
    """Base error for anything that aborts a notification.

    Attributes:
        code: ErrorCode.
        message: Human-readable message.
        details: Additional context.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class NetworkFailure(NotificationError):
    """A remote call failed or returned an unusable response.

    Covers transport errors, timeouts, non-200 statuses, non-JSON or
    wrongly-shaped bodies, and Bot API rejections.

    Attributes:
        code: ErrorCode (SERVICE_* / INVALID_RESPONSE / MESSAGE_REJECTED).
        message: Human-readable message.
        service_name: Remote service that failed ("ipify", "ipwho.is", "telegram").
        status_code: HTTP status when a response was received.
        details: Additional context (truncated response body).
    """

    service_name: str
    status_code: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class FormatterFailure(NotificationError):
    """The message formatter raised while rendering a Visitor Record.

    Attributes:
        code: ErrorCode.FORMATTER_FAILED.
        message: Human-readable message.
        cause: Exception raised by the formatter.
    """

    cause: Exception | None = None
