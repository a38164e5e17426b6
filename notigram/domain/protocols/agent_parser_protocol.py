"""User agent parser protocol (port).

The parser is an opaque collaborator: raw User-Agent string in, device,
browser and OS descriptors out. The snapshotter never inspects the string
itself.

Example:
    >>> class StaticParser:
    ...     def parse(self, user_agent: str) -> AgentDescriptors:
    ...         return AgentDescriptors(browser_name="Firefox")
"""

from typing import Protocol

from notigram.domain.value_objects import AgentDescriptors


class AgentParser(Protocol):
    """Parses user agent strings into descriptors.

    Behavior:
        - Synchronous, no I/O
        - Best-effort: unknown agents return partially empty descriptors
    """

    def parse(self, user_agent: str) -> AgentDescriptors:
        """Parse a raw User-Agent string.

        Args:
            user_agent: Raw User-Agent header value.

        Returns:
            AgentDescriptors (attributes None when unknown).
        """
        ...
