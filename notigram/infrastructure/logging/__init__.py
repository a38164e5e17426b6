"""Logging adapters implementing LoggerProtocol."""

from notigram.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
