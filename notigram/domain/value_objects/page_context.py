"""Page context value objects.

PageEnvironment is what the host application hands to the notifier: the
Python-side equivalent of the browser's location, referrer and user agent.
AgentDescriptors is the output of the user-agent parser. PageContext is the
locally captured subset of a Visitor Record.
"""

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class PageEnvironment:
    """Host-supplied description of the page being visited.

    Attributes:
        url: Full URL of the visited page.
        referrer: Referring URL, None or empty for direct visits.
        user_agent: Raw User-Agent string of the visitor.

    Example:
        >>> env = PageEnvironment.from_headers(
        ...     "https://example.com/pricing",
        ...     {"user-agent": "Mozilla/5.0 ...", "referer": "https://google.com/"},
        ... )
        >>> env.referrer
        'https://google.com/'
    """

    url: str = ""
    referrer: str | None = None
    user_agent: str = ""

    @classmethod
    def from_headers(cls, url: str, headers: Mapping[str, str]) -> "PageEnvironment":
        """Build an environment from request headers.

        Header lookup is case-insensitive ("Referer" and "referer" both work).

        Args:
            url: Full URL of the request.
            headers: Request headers.

        Returns:
            PageEnvironment for the request.
        """
        lowered = {key.lower(): value for key, value in headers.items()}
        return cls(
            url=url,
            referrer=lowered.get("referer") or None,
            user_agent=lowered.get("user-agent", ""),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class AgentDescriptors:
    """Device, browser and OS descriptors parsed from a user agent.

    Any attribute may be None when the parser cannot tell.
    """

    device_vendor: str | None = None
    device_model: str | None = None
    device_type: str | None = None
    browser_name: str | None = None
    browser_version: str | None = None
    os_name: str | None = None
    os_version: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PageContext:
    """Locally captured part of a Visitor Record.

    Attributes:
        page: URL path ("/pricing").
        full_url: Full page URL.
        referrer: Referring URL or "Direct".
        timestamp: Local time of the visit (ISO string).
        user_agent: Raw User-Agent string.
        device: Normalized device label.
        browser: "name version" of the browser.
        os: "name version" of the operating system.
    """

    page: str
    full_url: str
    referrer: str
    timestamp: str
    user_agent: str
    device: str
    browser: str | None = None
    os: str | None = None
