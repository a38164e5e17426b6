"""Dependency factories (composition root).

Wires the real adapters behind the domain ports:
- Logging (console, human-readable or JSON)
- Public IP lookup (ipify)
- Geolocation lookup (ipwho.is)
- User agent parsing (user-agents)
- Message delivery (Telegram Bot API)

Every port can be overridden, which is how tests run the full trigger
against fakes.

Usage:
    from notigram.core.container import create_notigram

    notifier = create_notigram(
        NotigramOptions(bot_token="123:ABC", chat_id="42"),
        environment=PageEnvironment(url="https://example.com/pricing"),
    )
    async with notifier:
        ...
"""

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from notigram.core.config import Settings, get_settings

if TYPE_CHECKING:
    from notigram.application.dispatch_trigger import Notigram
    from notigram.application.options import NotigramOptions
    from notigram.domain.protocols import (
        AgentParser,
        BotMessenger,
        GeoResolver,
        IpResolver,
        LoggerProtocol,
    )
    from notigram.domain.value_objects import PageEnvironment


def get_logger(settings: Settings | None = None) -> "LoggerProtocol":
    """Return a logger configured for the current environment.

    Adapter selection:
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Args:
        settings: Settings to read from (default: cached settings).

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from notigram.infrastructure.logging import ConsoleAdapter

    settings = settings or get_settings()
    return ConsoleAdapter(use_json=settings.uses_json_logs, level=settings.log_level)


def create_notigram(
    options: "NotigramOptions",
    *,
    environment: "PageEnvironment",
    settings: Settings | None = None,
    logger: "LoggerProtocol | None" = None,
    ip_resolver: "IpResolver | None" = None,
    geo_resolver: "GeoResolver | None" = None,
    agent_parser: "AgentParser | None" = None,
    messenger: "BotMessenger | None" = None,
    clock: Callable[[], datetime] | None = None,
) -> "Notigram":
    """Build a Notigram wired with real or overridden adapters.

    Args:
        options: Per-notifier options (token, chat, fields, callbacks).
        environment: Page the visitor is on.
        settings: Endpoints and timeout (default: cached settings).
        logger: Logger override.
        ip_resolver: Public IP lookup override.
        geo_resolver: Geolocation lookup override.
        agent_parser: User agent parser override.
        messenger: Message delivery override.
        clock: Clock override for the visit timestamp.

    Returns:
        Notigram: Idle notifier; call start() or use ``async with``.
    """
    from notigram.application.dispatch_trigger import Notigram
    from notigram.application.services.context_snapshotter import ContextSnapshotter
    from notigram.application.services.identity_resolver import IdentityResolver
    from notigram.infrastructure.enrichers import UserAgentParser
    from notigram.infrastructure.identity import IpifyClient, IpWhoisClient
    from notigram.infrastructure.messaging import TelegramBotMessenger

    settings = settings or get_settings()
    timeout = settings.request_timeout

    identity_resolver = IdentityResolver(
        ip_resolver=ip_resolver
        or IpifyClient(base_url=settings.ip_lookup_url, timeout=timeout),
        geo_resolver=geo_resolver
        or IpWhoisClient(base_url=settings.geo_lookup_url, timeout=timeout),
    )

    snapshotter = (
        ContextSnapshotter(agent_parser=agent_parser or UserAgentParser(), clock=clock)
        if clock is not None
        else ContextSnapshotter(agent_parser=agent_parser or UserAgentParser())
    )

    return Notigram(
        options,
        environment=environment,
        identity_resolver=identity_resolver,
        snapshotter=snapshotter,
        messenger=messenger
        or TelegramBotMessenger(
            bot_token=options.bot_token,
            base_url=settings.bot_api_base_url,
            timeout=timeout,
        ),
        logger=logger or get_logger(settings),
    )
