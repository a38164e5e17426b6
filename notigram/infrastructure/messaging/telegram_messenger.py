"""Telegram Bot API messenger.

Delivers one formatted message to one chat.

Endpoint:
    POST https://api.telegram.org/bot{token}/sendMessage
    Body: {"chat_id": ..., "text": ..., "parse_mode": "HTML"}

The Bot API answers ``{"ok": true, "result": {"message_id": ...}}`` on success
and ``{"ok": false, "error_code": 400, "description": "..."}`` on rejection
(usually with a 4xx status).

Security:
    The token is part of the URL path, so URLs are never logged and never
    copied into errors.

Reference:
    - https://core.telegram.org/bots/api#sendmessage
"""

import httpx

from notigram.core.constants import BOT_API_BASE_URL_DEFAULT, REQUEST_TIMEOUT_DEFAULT
from notigram.core.enums import ErrorCode
from notigram.core.result import Failure, Result, Success
from notigram.domain.errors import NetworkFailure
from notigram.infrastructure.http import BaseServiceAPIClient


class TelegramBotMessenger(BaseServiceAPIClient):
    """Telegram implementation of the BotMessenger protocol.

    Attributes:
        _bot_token: Bot API credential (never logged).
        _base_url: Bot API base URL.

    Example:
        >>> messenger = TelegramBotMessenger(bot_token="123:ABC")
        >>> result = await messenger.send_message(
        ...     chat_id="42", text="<b>hi</b>", parse_mode="HTML"
        ... )
    """

    def __init__(
        self,
        *,
        bot_token: str,
        base_url: str = BOT_API_BASE_URL_DEFAULT,
        timeout: float = REQUEST_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize Telegram messenger.

        Args:
            bot_token: Bot API token.
            base_url: Bot API base URL.
            timeout: HTTP request timeout in seconds.
        """
        super().__init__(service_name="telegram", timeout=timeout)
        self._bot_token = bot_token
        self._base_url = base_url.rstrip("/")

    async def send_message(
        self,
        *,
        chat_id: str,
        text: str,
        parse_mode: str | None,
    ) -> Result[int | None, NetworkFailure]:
        """Send one message through the Bot API.

        Args:
            chat_id: Target chat identifier.
            text: Message text.
            parse_mode: "HTML" for the built-in formatter, None for plain text.

        Returns:
            Success(int | None): Telegram message_id.
            Failure(NetworkFailure): On transport error, API rejection, or a
                body that is not a Bot API envelope.
        """
        payload: dict[str, str] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode

        result = await self._execute_request(
            method="POST",
            url=f"{self._base_url}/bot{self._bot_token}/sendMessage",
            json_data=payload,
            operation="send_message",
        )
        if isinstance(result, Failure):
            return result

        response = result.value
        rejection = self._check_rejection(response)
        if rejection is not None:
            return rejection

        parsed = self._parse_json_object(response, "send_message")
        if isinstance(parsed, Failure):
            return parsed

        body = parsed.value
        if body.get("ok") is not True:
            return self._rejected(body.get("description"), response.status_code)

        message = body.get("result")
        message_id = message.get("message_id") if isinstance(message, dict) else None
        self._logger.info(
            "telegram_message_sent",
            chat_id=chat_id,
            message_id=message_id,
        )
        return Success(value=message_id)

    def _check_rejection(self, response: httpx.Response) -> Failure[NetworkFailure] | None:
        """Turn a 4xx Bot API envelope into a MESSAGE_REJECTED failure.

        Other statuses fall through to the shared status handling.
        """
        if not 400 <= response.status_code < 500 or response.status_code == 429:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict) or "ok" not in body:
            return None
        return self._rejected(body.get("description"), response.status_code)

    def _rejected(
        self, description: object, status_code: int
    ) -> Failure[NetworkFailure]:
        reason = description if isinstance(description, str) else "no description"
        self._logger.warning(
            "telegram_message_rejected",
            status_code=status_code,
            description=reason,
        )
        return self._failure(
            code=ErrorCode.MESSAGE_REJECTED,
            message=f"Telegram rejected the message: {reason}",
            status_code=status_code,
        )
