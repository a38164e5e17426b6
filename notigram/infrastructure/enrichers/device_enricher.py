"""User agent parser implementation using the user-agents library.

Parses user agent strings to extract device, browser, and OS descriptors.
Implements the AgentParser protocol with fail-open behavior.
"""

import structlog
from user_agents import parse as parse_user_agent  # type: ignore[import-untyped]
from user_agents.parsers import UserAgent  # type: ignore[import-untyped]

from notigram.domain.value_objects import AgentDescriptors

logger = structlog.get_logger(__name__)

# ua-parser reports unknown families as "Other"
_UNKNOWN_FAMILY = "Other"


class UserAgentParser:
    """Agent parser using the user-agents library.

    Implements AgentParser protocol (structural typing).

    Behavior:
        - Fail-open: Returns empty descriptors on parse errors
        - Non-blocking: Pure string parsing (<1ms)
        - Best-effort: Unknown agents return partial data
        - Desktop agents carry no device type, so the snapshotter falls
          back to its "Desktop" label
    """

    def parse(self, user_agent: str) -> AgentDescriptors:
        """Parse user agent string into descriptors.

        Args:
            user_agent: Raw User-Agent header value.

        Returns:
            AgentDescriptors with parsed info.
            Returns empty descriptors (all None) on parse failure.
        """
        if not user_agent:
            return AgentDescriptors()

        try:
            ua: UserAgent = parse_user_agent(user_agent)

            return AgentDescriptors(
                device_vendor=_known(ua.device.brand),
                device_model=_known(ua.device.model),
                device_type=self._determine_device_type(ua),
                browser_name=_known(ua.browser.family),
                browser_version=ua.browser.version_string or None,
                os_name=_known(ua.os.family),
                os_version=ua.os.version_string or None,
            )

        except Exception as e:
            logger.warning(
                "user_agent_parse_failed",
                user_agent=user_agent[:100],
                error=str(e),
            )
            return AgentDescriptors()

    def _determine_device_type(self, ua: UserAgent) -> str | None:
        """Determine device type from parsed user agent.

        Args:
            ua: Parsed UserAgent object.

        Returns:
            "mobile", "tablet", "bot", or None for desktops and unknowns.
        """
        if ua.is_mobile:
            return "mobile"
        if ua.is_tablet:
            return "tablet"
        if ua.is_bot:
            return "bot"
        return None


def _known(value: str | None) -> str | None:
    """Drop empty and "Other" placeholder values."""
    if not value or value == _UNKNOWN_FAMILY:
        return None
    return value
