"""Bot messaging adapters."""

from notigram.infrastructure.messaging.telegram_messenger import TelegramBotMessenger

__all__ = ["TelegramBotMessenger"]
