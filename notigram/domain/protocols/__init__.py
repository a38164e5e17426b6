"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance
(PEP 544 structural subtyping), so tests can substitute plain fakes.

Usage:
    from notigram.domain.protocols import IpResolver, GeoResolver, BotMessenger
"""

from notigram.domain.protocols.agent_parser_protocol import AgentParser
from notigram.domain.protocols.identity_protocol import GeoResolver, IpResolver
from notigram.domain.protocols.logger_protocol import LoggerProtocol
from notigram.domain.protocols.messenger_protocol import BotMessenger

__all__ = [
    "AgentParser",
    "BotMessenger",
    "GeoResolver",
    "IpResolver",
    "LoggerProtocol",
]
