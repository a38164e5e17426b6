"""Infrastructure layer - adapters for the domain protocols.

Structure:
- http/: shared httpx client base
- identity/: ipify and ipwho.is clients
- messaging/: Telegram Bot API messenger
- enrichers/: user agent parser
- logging/: structlog console adapter
"""
