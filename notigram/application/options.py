"""Per-notifier options.

NotigramOptions carries everything the host chooses for one notifier: bot
credential and chat, field selection or custom formatter, callbacks, and the
trigger behaviour (disabled, debounce). Environment-wide settings such as
endpoints and timeouts live in ``notigram.core.config.Settings`` instead.

Usage:
    options = NotigramOptions(
        bot_token="123:ABC",
        chat_id="42",
        fields=("ip", "location", "device"),
        on_error=lambda error: print(error),
        debounce_ms=500,
    )
"""

from collections.abc import Callable
from dataclasses import dataclass

from notigram.core.constants import DEFAULT_FIELDS, HTML_PARSE_MODE
from notigram.domain.entities import VisitorRecord
from notigram.domain.errors import NotificationError


@dataclass(frozen=True, kw_only=True)
class NotigramOptions:
    """Configuration of a single notifier.

    Attributes:
        bot_token: Bot API credential (required, never logged).
        chat_id: Delivery target (required).
        fields: Ordered field keys for the built-in formatter.
        custom_message: Replaces the built-in formatter entirely.
        on_success: Called with the VisitorRecord after delivery.
        on_error: Called with the NotificationError on any failure.
        disabled: Suppress the whole pipeline.
        debounce_ms: Delay between start() and the pipeline firing.
        parse_mode: Parse mode for custom_message output (None = plain text).
            Built-in output is always sent as HTML.
        send_partial_on_lookup_failure: Deliver a context-only message when
            the IP/geolocation lookup fails instead of aborting.

    Raises:
        ValueError: If bot_token or chat_id is empty or debounce_ms < 0.
    """

    bot_token: str
    chat_id: str
    fields: tuple[str, ...] = DEFAULT_FIELDS
    custom_message: Callable[[VisitorRecord], str] | None = None
    on_success: Callable[[VisitorRecord], None] | None = None
    on_error: Callable[[NotificationError], None] | None = None
    disabled: bool = False
    debounce_ms: int = 0
    parse_mode: str | None = HTML_PARSE_MODE
    send_partial_on_lookup_failure: bool = False

    def __post_init__(self) -> None:
        """Validate options after initialization.

        Raises:
            ValueError: On missing credentials or negative debounce.
        """
        if not self.bot_token or not self.bot_token.strip():
            raise ValueError("bot_token cannot be empty")
        if not str(self.chat_id).strip():
            raise ValueError("chat_id cannot be empty")
        if self.debounce_ms < 0:
            raise ValueError("debounce_ms cannot be negative")
        # Accept any iterable (lists from callers) but store a tuple
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "chat_id", str(self.chat_id))

    def __repr__(self) -> str:
        """Representation without the bot token."""
        return (
            f"NotigramOptions(chat_id={self.chat_id!r}, fields={self.fields!r}, "
            f"disabled={self.disabled}, debounce_ms={self.debounce_ms})"
        )
