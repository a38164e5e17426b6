"""Bot messenger protocol (port).

Delivers one formatted text to one chat. The bot credential belongs to the
implementation, never to the caller of send_message.

Implementations:
    - TelegramBotMessenger (notigram.infrastructure.messaging)
"""

from typing import Protocol

from notigram.core.result import Result
from notigram.domain.errors import NetworkFailure


class BotMessenger(Protocol):
    """Sends a message through a bot messaging API."""

    async def send_message(
        self,
        *,
        chat_id: str,
        text: str,
        parse_mode: str | None,
    ) -> Result[int | None, NetworkFailure]:
        """Send one message.

        Args:
            chat_id: Delivery target identifier.
            text: Message text, already escaped for ``parse_mode``.
            parse_mode: Markup mode of ``text`` ("HTML"), None for plain text.

        Returns:
            Success(int | None): Message id assigned by the API, if reported.
            Failure(NetworkFailure): On transport error or API rejection.
        """
        ...
