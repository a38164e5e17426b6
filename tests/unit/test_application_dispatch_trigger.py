"""Unit tests for the Notigram one-shot trigger.

Tests cover:
- Disabled notifiers doing nothing
- At-most-once delivery under repeated start/notify_now
- Debounce and cancel semantics
- Failure routing to on_error (lookup, formatter, delivery, unexpected)
- Partial delivery opt-in
- Callback isolation

All ports are in-memory fakes wired through create_notigram.
"""

import asyncio
from typing import Any

import pytest

from notigram.application.options import NotigramOptions
from notigram.core.container import create_notigram
from notigram.core.enums import ErrorCode
from notigram.core.result import Failure
from notigram.domain.enums import DispatchState
from notigram.domain.errors import FormatterFailure, NetworkFailure, NotificationError
from notigram.domain.value_objects import PageEnvironment
from tests.conftest import (
    FIXED_NOW,
    FakeAgentParser,
    FakeGeoResolver,
    FakeIpResolver,
    FakeLogger,
    FakeMessenger,
    network_failure,
)

BOT_TOKEN = "123456:SECRET-TOKEN"
ENVIRONMENT = PageEnvironment(
    url="https://example.com/pricing",
    referrer="https://google.com/",
    user_agent="Mozilla/5.0",
)


class Recorder:
    """Collects callback invocations."""

    def __init__(self) -> None:
        self.successes: list[Any] = []
        self.errors: list[NotificationError] = []

    def on_success(self, record: Any) -> None:
        self.successes.append(record)

    def on_error(self, error: NotificationError) -> None:
        self.errors.append(error)


class RaisingIpResolver:
    async def resolve_ip(self):
        raise RuntimeError("boom")


class GatedMessenger(FakeMessenger):
    """Messenger that blocks until released."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def send_message(self, *, chat_id: str, text: str, parse_mode: str | None):
        self.entered.set()
        await self.release.wait()
        return await super().send_message(chat_id=chat_id, text=text, parse_mode=parse_mode)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def messenger() -> FakeMessenger:
    return FakeMessenger()


@pytest.fixture
def ip_resolver() -> FakeIpResolver:
    return FakeIpResolver()


@pytest.fixture
def build(recorder: Recorder, messenger: FakeMessenger, ip_resolver: FakeIpResolver,
          fake_logger: FakeLogger):
    """Factory building a Notigram with fakes; keyword args override options."""

    def _build(*, geo_resolver=None, ip=None, msg=None, **option_overrides):
        values: dict[str, Any] = {
            "on_success": recorder.on_success,
            "on_error": recorder.on_error,
        }
        values.update(option_overrides)
        options = NotigramOptions(bot_token=BOT_TOKEN, chat_id="42", **values)
        return create_notigram(
            options,
            environment=ENVIRONMENT,
            logger=fake_logger,
            ip_resolver=ip or ip_resolver,
            geo_resolver=geo_resolver or FakeGeoResolver(),
            agent_parser=FakeAgentParser(),
            messenger=msg or messenger,
            clock=lambda: FIXED_NOW,
        )

    return _build


@pytest.mark.unit
class TestNotifyNow:
    """Test the happy path and the one-shot guard."""

    async def test_delivers_formatted_message(self, build, messenger, recorder):
        notifier = build()

        record = await notifier.notify_now()

        assert record is not None
        assert notifier.state is DispatchState.DISPATCHED
        assert len(messenger.sent) == 1
        sent = messenger.sent[0]
        assert sent["chat_id"] == "42"
        assert sent["parse_mode"] == "HTML"
        assert "🌐 <b>Page:</b> /pricing" in sent["text"]
        assert "🌍 <b>Country:</b> United States" in sent["text"]
        assert recorder.successes == [record]
        assert recorder.errors == []

    async def test_second_call_is_noop(self, build, messenger, ip_resolver):
        notifier = build()

        first = await notifier.notify_now()
        second = await notifier.notify_now()

        assert first is not None
        assert second is None
        assert len(messenger.sent) == 1
        assert ip_resolver.calls == 1

    async def test_concurrent_calls_deliver_once(self, build, messenger, recorder):
        """Guard is set before the first await, so racing calls collapse."""
        notifier = build()
        notifier.start()

        results = await asyncio.gather(
            notifier.notify_now(), notifier.notify_now(), notifier.notify_now()
        )
        notifier.start()

        assert sum(result is not None for result in results) == 1
        assert len(messenger.sent) == 1
        assert len(recorder.successes) == 1

    async def test_guard_stays_set_after_failure(self, build, messenger, failing_geo_resolver):
        notifier = build(geo_resolver=failing_geo_resolver)

        await notifier.notify_now()
        again = await notifier.notify_now()

        assert again is None
        assert notifier.has_notified is True
        assert notifier.state is DispatchState.FAILED

    async def test_token_never_logged(self, build, fake_logger):
        notifier = build()
        notifier.start()

        await notifier.wait()

        assert BOT_TOKEN not in repr(fake_logger.records)


@pytest.mark.unit
class TestDisabled:
    """Test disabled notifiers."""

    async def test_disabled_makes_no_calls(self, build, messenger, ip_resolver, recorder):
        notifier = build(disabled=True)

        notifier.start()
        result = await notifier.notify_now()

        assert result is None
        assert await notifier.wait() is None
        assert notifier.state is DispatchState.IDLE
        assert ip_resolver.calls == 0
        assert messenger.sent == []
        assert recorder.successes == recorder.errors == []


@pytest.mark.unit
class TestDebounceAndCancel:
    """Test start(), cancel() and wait()."""

    async def test_start_fires_after_debounce(self, build, messenger):
        notifier = build(debounce_ms=20)

        notifier.start()

        assert notifier.state is DispatchState.SCHEDULED
        assert messenger.sent == []
        record = await notifier.wait()
        assert record is not None
        assert len(messenger.sent) == 1

    async def test_cancel_before_debounce_prevents_delivery(
        self, build, messenger, ip_resolver, recorder
    ):
        notifier = build(debounce_ms=20)

        notifier.start()
        notifier.cancel()
        await asyncio.sleep(0.05)

        assert notifier.state is DispatchState.CANCELED
        assert ip_resolver.calls == 0
        assert messenger.sent == []
        assert recorder.errors == []
        assert await notifier.wait() is None

    async def test_notify_now_after_cancel_is_noop(self, build, messenger):
        notifier = build(debounce_ms=1000)

        notifier.start()
        notifier.cancel()

        assert await notifier.notify_now() is None
        assert messenger.sent == []

    async def test_notify_now_preempts_pending_timer(self, build, messenger):
        notifier = build(debounce_ms=20)
        notifier.start()

        await notifier.notify_now()
        await asyncio.sleep(0.05)

        assert len(messenger.sent) == 1

    async def test_cancel_does_not_abort_in_flight_delivery(self, build, recorder):
        messenger = GatedMessenger()
        notifier = build(msg=messenger)
        notifier.start()

        await messenger.entered.wait()
        notifier.cancel()
        messenger.release.set()
        record = await notifier.wait()

        assert record is not None
        assert notifier.state is DispatchState.DISPATCHED
        assert len(recorder.successes) == 1

    async def test_canceled_fired_task_settles_wait(self, build, recorder):
        """Canceling the running task (e.g. loop shutdown) never hangs wait()."""
        messenger = GatedMessenger()
        notifier = build(msg=messenger)
        notifier.start()

        await messenger.entered.wait()
        assert notifier._task is not None
        notifier._task.cancel()
        record = await asyncio.wait_for(notifier.wait(), timeout=1)

        assert record is None
        assert notifier.state is DispatchState.CANCELED
        assert notifier._task.cancelled()
        assert recorder.successes == recorder.errors == []

    async def test_task_canceled_before_first_step_settles_wait(
        self, build, ip_resolver
    ):
        notifier = build(debounce_ms=1000)
        notifier.start()
        notifier._timer.cancel()

        notifier._fire()
        notifier._task.cancel()
        record = await asyncio.wait_for(notifier.wait(), timeout=1)

        assert record is None
        assert notifier.state is DispatchState.CANCELED
        assert ip_resolver.calls == 0

    async def test_context_manager_cancels_pending_fire(self, build, messenger):
        async with build(debounce_ms=1000) as notifier:
            assert notifier.state is DispatchState.SCHEDULED

        assert notifier.state is DispatchState.CANCELED
        assert messenger.sent == []

    async def test_wait_on_idle_notifier_returns_none(self, build):
        assert await build().wait() is None


@pytest.mark.unit
class TestFailures:
    """Test failure routing to on_error."""

    async def test_geo_failure_reaches_on_error_only(
        self, build, messenger, recorder, failing_geo_resolver
    ):
        notifier = build(geo_resolver=failing_geo_resolver)

        result = await notifier.notify_now()

        assert result is None
        assert recorder.successes == []
        assert len(recorder.errors) == 1
        assert isinstance(recorder.errors[0], NetworkFailure)
        assert recorder.errors[0].service_name == "ipwho.is"
        assert messenger.sent == []
        assert notifier.state is DispatchState.FAILED

    async def test_partial_delivery_on_lookup_failure(
        self, build, messenger, recorder, fake_logger, failing_geo_resolver
    ):
        notifier = build(
            geo_resolver=failing_geo_resolver,
            send_partial_on_lookup_failure=True,
            fields=("page", "country", "device"),
        )

        record = await notifier.notify_now()

        assert record is not None
        assert record.country is None
        assert record.page == "/pricing"
        assert "Country" not in messenger.sent[0]["text"]
        assert "🌐 <b>Page:</b> /pricing" in messenger.sent[0]["text"]
        assert recorder.successes == [record]
        assert "identity_lookup_failed_sending_partial" in fake_logger.events("warning")

    async def test_delivery_failure_reaches_on_error(self, build, recorder):
        rejection = NetworkFailure(
            code=ErrorCode.MESSAGE_REJECTED,
            message="Bad Request: chat not found",
            service_name="telegram",
            status_code=400,
        )
        notifier = build(msg=FakeMessenger(Failure(error=rejection)))

        await notifier.notify_now()

        assert recorder.errors == [rejection]
        assert recorder.successes == []

    async def test_custom_formatter_error_becomes_formatter_failure(
        self, build, messenger, recorder
    ):
        def explode(record):
            raise KeyError("missing")

        notifier = build(custom_message=explode)

        await notifier.notify_now()

        assert messenger.sent == []
        assert len(recorder.errors) == 1
        error = recorder.errors[0]
        assert isinstance(error, FormatterFailure)
        assert error.code is ErrorCode.FORMATTER_FAILED
        assert isinstance(error.cause, KeyError)

    async def test_custom_formatter_empty_text_fails(self, build, messenger, recorder):
        notifier = build(custom_message=lambda record: "  ")

        await notifier.notify_now()

        assert messenger.sent == []
        assert isinstance(recorder.errors[0], FormatterFailure)

    async def test_unexpected_exception_becomes_pipeline_failure(self, build, recorder):
        notifier = build(ip=RaisingIpResolver())

        result = await notifier.notify_now()

        assert result is None
        assert recorder.errors[0].code is ErrorCode.PIPELINE_FAILED
        assert "RuntimeError" in recorder.errors[0].message
        assert notifier.state is DispatchState.FAILED


@pytest.mark.unit
class TestCustomMessageAndCallbacks:
    """Test custom formatters and callback isolation."""

    async def test_custom_message_uses_configured_parse_mode(self, build, messenger):
        notifier = build(
            custom_message=lambda record: f"Visit from {record.city} on {record.page}",
            parse_mode=None,
        )

        await notifier.notify_now()

        assert messenger.sent[0]["text"] == "Visit from Mountain View on /pricing"
        assert messenger.sent[0]["parse_mode"] is None

    async def test_raising_success_callback_is_swallowed(self, build, fake_logger):
        def bad_callback(record):
            raise ValueError("host bug")

        notifier = build(on_success=bad_callback)

        record = await notifier.notify_now()

        assert record is not None
        assert notifier.state is DispatchState.DISPATCHED
        assert "notigram_callback_failed" in fake_logger.events("error")

    async def test_async_callbacks_are_awaited(self, messenger, fake_logger):
        received: list[Any] = []

        async def on_success(record):
            await asyncio.sleep(0)
            received.append(record)

        notifier = create_notigram(
            NotigramOptions(bot_token=BOT_TOKEN, chat_id="42", on_success=on_success),
            environment=ENVIRONMENT,
            logger=fake_logger,
            ip_resolver=FakeIpResolver(),
            geo_resolver=FakeGeoResolver(),
            agent_parser=FakeAgentParser(),
            messenger=messenger,
        )

        record = await notifier.notify_now()

        assert received == [record]

    async def test_lookup_failure_logged_with_code(self, build, fake_logger):
        notifier = build(
            geo_resolver=FakeGeoResolver(
                Failure(error=network_failure("ipwho.is", ErrorCode.SERVICE_RATE_LIMITED))
            )
        )

        await notifier.notify_now()

        failures = [
            context
            for level, event, context in fake_logger.records
            if event == "visitor_notification_failed"
        ]
        assert failures[0]["error_code"] == ErrorCode.SERVICE_RATE_LIMITED.value
        assert failures[0]["chat_id"] == "42"
