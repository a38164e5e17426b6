"""Console logging adapter.

Writes notifier events to stdout through structlog, as colored key-value
lines in development and as one JSON object per line everywhere else.

Every event passes through ``redact_bot_tokens`` before rendering, so a
Bot API credential that ends up in a context value (an httpx error message
quoting the request URL, a host callback logging its options) is masked.

The adapter satisfies LoggerProtocol structurally; it does not inherit it.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog

# "<bot id>:<secret>" as issued by BotFather, bare or inside a "/bot" URL
_BOT_TOKEN_PATTERN = re.compile(r"(?<!\d)(\d{5,}):[A-Za-z0-9_-]{20,}")
_REDACTED = r"\1:***"


def redact_bot_tokens(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor masking Bot API tokens in string values."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _BOT_TOKEN_PATTERN.sub(_REDACTED, value)
    return event_dict


def build_processors(*, use_json: bool) -> list[Any]:
    """Processor chain: level, UTC timestamp, redaction, renderer."""
    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_bot_tokens,
        renderer,
    ]


class ConsoleAdapter:
    """stdout logger for the notifier.

    Args:
        use_json: Render JSON lines instead of colored console output.
        level: Minimum level name; unknown names fall back to INFO.
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        threshold = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
        structlog.configure(
            processors=build_processors(use_json=use_json),
            wrapper_class=structlog.make_filtering_bound_logger(threshold),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger("notigram")

    @classmethod
    def _wrap(cls, logger: Any) -> ConsoleAdapter:
        adapter = cls.__new__(cls)
        adapter._logger = logger
        return adapter

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error; an exception adds error_type and error_message."""
        if error is not None:
            context.update(error_type=type(error).__name__, error_message=str(error))
        self._logger.error(message, **context)

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a new adapter carrying ``context`` on every event."""
        return self._wrap(self._logger.bind(**context))
