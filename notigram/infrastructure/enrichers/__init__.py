"""Visitor enricher infrastructure package.

Enrichers:
    - UserAgentParser: Parses user agent strings (uses user-agents library)
"""

from notigram.infrastructure.enrichers.device_enricher import UserAgentParser

__all__ = ["UserAgentParser"]
