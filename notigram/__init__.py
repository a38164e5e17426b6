"""Notigram - one-shot visitor notifications over a Telegram bot.

Usage:
    from notigram import NotigramOptions, PageEnvironment, create_notigram

    notifier = create_notigram(
        NotigramOptions(bot_token="123:ABC", chat_id="42", debounce_ms=500),
        environment=PageEnvironment(url="https://example.com/pricing"),
    )
    notifier.start()
    record = await notifier.wait()
"""

from notigram.application.dispatch_trigger import Notigram
from notigram.application.options import NotigramOptions
from notigram.application.services.message_formatter import format_message
from notigram.core.container import create_notigram
from notigram.domain.entities import VisitorRecord
from notigram.domain.enums import DispatchState
from notigram.domain.errors import FormatterFailure, NetworkFailure, NotificationError
from notigram.domain.value_objects import PageEnvironment

__all__ = [
    "DispatchState",
    "FormatterFailure",
    "NetworkFailure",
    "Notigram",
    "NotigramOptions",
    "NotificationError",
    "PageEnvironment",
    "VisitorRecord",
    "create_notigram",
    "format_message",
]
