"""Domain errors package.

Usage:
    from notigram.domain.errors import NetworkFailure, FormatterFailure
"""

from notigram.domain.errors.notification_error import (
    FormatterFailure,
    NetworkFailure,
    NotificationError,
)

__all__ = [
    "FormatterFailure",
    "NetworkFailure",
    "NotificationError",
]
