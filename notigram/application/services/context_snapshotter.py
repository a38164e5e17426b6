"""Context snapshot service.

Captures the locally available part of a Visitor Record: page path and URL,
referrer, timestamp, raw user agent, and the device/browser/OS descriptors
from the user agent parser. No network access.

The snapshotter is total: whatever the host passes in, it returns a
PageContext. Parser errors degrade to empty descriptors.
"""

from collections.abc import Callable
from datetime import datetime
from urllib.parse import urlsplit

import structlog

from notigram.core.constants import DESKTOP_DEVICE, DIRECT_REFERRER
from notigram.domain.protocols import AgentParser
from notigram.domain.value_objects import AgentDescriptors, PageContext, PageEnvironment

logger = structlog.get_logger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ContextSnapshotter:
    """Builds a PageContext from a PageEnvironment.

    Dependencies (injected via constructor):
        - AgentParser: user agent parsing
        - clock: returns the current time (defaults to local time)

    Example:
        >>> snapshotter = ContextSnapshotter(agent_parser=UserAgentParser())
        >>> context = snapshotter.snapshot(
        ...     PageEnvironment(url="https://example.com/home", user_agent="...")
        ... )
        >>> context.page
        '/home'
    """

    def __init__(
        self,
        *,
        agent_parser: AgentParser,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._agent_parser = agent_parser
        self._clock = clock

    def snapshot(self, environment: PageEnvironment) -> PageContext:
        """Capture the page context for one visit.

        Args:
            environment: Host-supplied page description.

        Returns:
            PageContext (always complete).
        """
        descriptors = self._parse_agent(environment.user_agent)

        return PageContext(
            page=page_path(environment.url),
            full_url=environment.url,
            referrer=environment.referrer or DIRECT_REFERRER,
            timestamp=self._clock().isoformat(timespec="seconds"),
            user_agent=environment.user_agent,
            device=device_label(descriptors),
            browser=join_name_version(
                descriptors.browser_name, descriptors.browser_version
            ),
            os=join_name_version(descriptors.os_name, descriptors.os_version),
        )

    def _parse_agent(self, user_agent: str) -> AgentDescriptors:
        try:
            return self._agent_parser.parse(user_agent)
        except Exception as e:
            logger.warning(
                "agent_parser_failed",
                user_agent=user_agent[:100],
                error=str(e),
                error_type=type(e).__name__,
            )
            return AgentDescriptors()


# --- Derivation helpers ---


def page_path(url: str) -> str:
    """Path component of a URL, "/" when empty or unparseable."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return "/"
    return path or "/"


def device_label(descriptors: AgentDescriptors) -> str:
    """Normalized device label.

    "<vendor> <model>" when both are known, else the device type, else
    "Desktop".
    """
    if descriptors.device_vendor and descriptors.device_model:
        return f"{descriptors.device_vendor} {descriptors.device_model}"
    return descriptors.device_type or DESKTOP_DEVICE


def join_name_version(name: str | None, version: str | None) -> str | None:
    """Join the known parts of "name version", None when both are missing."""
    parts = [part for part in (name, version) if part]
    return " ".join(parts) if parts else None
