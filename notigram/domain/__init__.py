"""Domain layer - the Visitor Record and the ports around it.

Structure:
- entities/: VisitorRecord
- value_objects/: GeoProfile, PageEnvironment, PageContext, AgentDescriptors
- enums/: DispatchState, MessageField
- errors/: NotificationError hierarchy
- protocols/: IpResolver, GeoResolver, AgentParser, BotMessenger, LoggerProtocol

The domain layer has no dependency on httpx, structlog or user-agents.
"""
