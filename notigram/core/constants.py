"""Centralized constants for internal implementation details.

This module contains constants that are fixed parts of the notifier's
behaviour, NOT environment-specific configuration. For environment-specific
settings (endpoints, timeouts, log level), use `notigram/core/config.py`.

Categories:
- Timeouts: Default timeouts for remote calls
- Message layout: Banners and default field selection
- Fallback labels: Values used when data is missing
- Limits: Truncation and safety limits
"""

# =============================================================================
# Timeouts
# =============================================================================

REQUEST_TIMEOUT_DEFAULT: float = 10.0
"""Default timeout for each remote call (IP, geolocation, bot) in seconds."""


# =============================================================================
# Remote Endpoints
# =============================================================================

IP_LOOKUP_URL_DEFAULT: str = "https://api.ipify.org"
"""Public IP resolution service (queried with ?format=json)."""

GEO_LOOKUP_URL_DEFAULT: str = "https://ipwho.is"
"""Geolocation-by-IP service (queried as /{ip})."""

BOT_API_BASE_URL_DEFAULT: str = "https://api.telegram.org"
"""Telegram Bot API base URL (queried as /bot{token}/sendMessage)."""


# =============================================================================
# Message Layout
# =============================================================================

MESSAGE_HEADER: str = "🚨 <b>New Visitor Alert</b>\n━━━━━━━━━━━━━━━\n"
"""Fixed banner opening every built-in message."""

MESSAGE_FOOTER: str = "━━━━━━━━━━━━━━━\n<i>Built with 💙 by Dycoder</i>"
"""Fixed banner closing every built-in message."""

DEFAULT_FIELDS: tuple[str, ...] = ("page", "country", "flag", "city", "device", "time")
"""Field selection used when the caller supplies none."""

HTML_PARSE_MODE: str = "HTML"
"""Bot API parse mode matching the formatter's HTML escaping."""


# =============================================================================
# Fallback Labels
# =============================================================================

DIRECT_REFERRER: str = "Direct"
"""Referrer recorded when the visit has no referrer."""

DESKTOP_DEVICE: str = "Desktop"
"""Device label when neither vendor/model nor device type is known."""


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum characters of a remote response body kept in error details."""
