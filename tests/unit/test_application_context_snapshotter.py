"""Unit tests for ContextSnapshotter and its derivation helpers.

Tests cover:
- Page path, referrer and timestamp capture
- Device label fallbacks
- Browser/OS joining
- Fail-open behavior when the agent parser raises
"""

import pytest

from notigram.application.services.context_snapshotter import (
    ContextSnapshotter,
    device_label,
    join_name_version,
    page_path,
)
from notigram.domain.value_objects import AgentDescriptors, PageEnvironment
from tests.conftest import FIXED_NOW, FakeAgentParser


class RaisingAgentParser:
    def parse(self, user_agent: str) -> AgentDescriptors:
        raise RuntimeError("parser exploded")


@pytest.fixture
def snapshotter() -> ContextSnapshotter:
    return ContextSnapshotter(agent_parser=FakeAgentParser(), clock=lambda: FIXED_NOW)


@pytest.mark.unit
class TestSnapshot:
    """Test ContextSnapshotter.snapshot."""

    def test_snapshot_captures_page_context(self, snapshotter: ContextSnapshotter):
        env = PageEnvironment(
            url="https://example.com/pricing?plan=pro",
            referrer="https://google.com/",
            user_agent="Mozilla/5.0",
        )

        context = snapshotter.snapshot(env)

        assert context.page == "/pricing"
        assert context.full_url == "https://example.com/pricing?plan=pro"
        assert context.referrer == "https://google.com/"
        assert context.timestamp == "2024-06-21T15:30:00+00:00"
        assert context.user_agent == "Mozilla/5.0"
        assert context.device == "Desktop"
        assert context.browser == "Chrome 126.0"
        assert context.os == "Windows 10"

    @pytest.mark.parametrize("referrer", [None, ""])
    def test_missing_referrer_is_direct(self, snapshotter: ContextSnapshotter, referrer):
        context = snapshotter.snapshot(PageEnvironment(url="https://x.io/", referrer=referrer))

        assert context.referrer == "Direct"

    def test_empty_environment_still_yields_context(self, snapshotter: ContextSnapshotter):
        """Snapshot never fails, even with nothing to go on."""
        context = snapshotter.snapshot(PageEnvironment())

        assert context.page == "/"
        assert context.full_url == ""

    def test_parser_error_degrades_to_desktop(self):
        """A raising parser yields empty descriptors, not an exception."""
        snapshotter = ContextSnapshotter(
            agent_parser=RaisingAgentParser(), clock=lambda: FIXED_NOW
        )

        context = snapshotter.snapshot(PageEnvironment(url="https://x.io/a", user_agent="ua"))

        assert context.device == "Desktop"
        assert context.browser is None
        assert context.os is None

    def test_default_clock_is_timezone_aware(self):
        """Default clock stamps local time with an offset."""
        snapshotter = ContextSnapshotter(agent_parser=FakeAgentParser())

        context = snapshotter.snapshot(PageEnvironment(url="https://x.io/"))

        assert context.timestamp[-6] in "+-"


@pytest.mark.unit
class TestDerivationHelpers:
    """Test page_path, device_label and join_name_version."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com/pricing", "/pricing"),
            ("https://example.com", "/"),
            ("https://example.com/a/b?c=d#e", "/a/b"),
            ("", "/"),
            ("/relative/path", "/relative/path"),
        ],
    )
    def test_page_path(self, url: str, expected: str):
        assert page_path(url) == expected

    def test_device_label_prefers_vendor_and_model(self):
        descriptors = AgentDescriptors(
            device_vendor="Apple", device_model="iPhone", device_type="mobile"
        )

        assert device_label(descriptors) == "Apple iPhone"

    def test_device_label_falls_back_to_type(self):
        descriptors = AgentDescriptors(device_model="Pixel", device_type="mobile")

        assert device_label(descriptors) == "mobile"

    def test_device_label_defaults_to_desktop(self):
        assert device_label(AgentDescriptors()) == "Desktop"

    def test_join_name_version(self):
        assert join_name_version("Firefox", "127.0") == "Firefox 127.0"
        assert join_name_version("Firefox", None) == "Firefox"
        assert join_name_version(None, "127.0") == "127.0"
        assert join_name_version(None, None) is None
