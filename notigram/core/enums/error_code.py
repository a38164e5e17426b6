"""Error codes for the notification pipeline (machine-readable).

Error codes follow SUBJECT_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Remote service errors (SERVICE_*)
- Response shape errors (INVALID_*, MESSAGE_REJECTED)
- Local pipeline errors (FORMATTER_FAILED, PIPELINE_FAILED)
"""

from enum import Enum


class ErrorCode(Enum):
    """Pipeline error codes (machine-readable)."""

    # Remote service errors
    SERVICE_TIMEOUT = "service_timeout"
    SERVICE_UNAVAILABLE = "service_unavailable"
    SERVICE_RATE_LIMITED = "service_rate_limited"
    SERVICE_HTTP_ERROR = "service_http_error"

    # Response shape errors
    INVALID_RESPONSE = "invalid_response"
    MESSAGE_REJECTED = "message_rejected"

    # Local pipeline errors
    FORMATTER_FAILED = "formatter_failed"
    PIPELINE_FAILED = "pipeline_failed"
