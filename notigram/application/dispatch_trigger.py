"""One-shot visitor notification trigger.

Notigram is the control that runs the collect-and-notify pipeline at most
once per instance:

    start() --(debounce)--> notify_now()
        identity lookup -> page snapshot -> merge -> format -> deliver
        -> on_success(record) | on_error(error)

Lifecycle:
    IDLE -> SCHEDULED -> COLLECTING -> DISPATCHED | FAILED
    IDLE -> SCHEDULED -> CANCELED (cancel() before the delay elapsed)
    COLLECTING -> CANCELED (the host or loop shutdown cancels the fired task)

Concurrency:
    Everything runs on one asyncio event loop. The one-shot guard is a plain
    bool set before the first await in notify_now(), so a timer firing and a
    direct call can never both run the pipeline. cancel() only prevents a
    fire that has not started; it never interrupts an in-flight HTTP call.

Error handling:
    Every failure (lookup, formatter, delivery, unexpected exception) ends in
    on_error and a log line. Nothing is re-raised into the host and nothing
    is retried; the guard stays set after a failure.

Usage:
    async with create_notigram(options, environment=env) as notifier:
        ...  # host work; exiting cancels a pending fire

    # or explicitly
    notifier.start()
    record = await notifier.wait()
"""

import asyncio
import inspect
from typing import Any

from notigram.application.options import NotigramOptions
from notigram.application.services.context_snapshotter import ContextSnapshotter
from notigram.application.services.identity_resolver import IdentityResolver
from notigram.application.services.message_formatter import format_message
from notigram.application.services.record_merger import merge_visitor_record
from notigram.core.constants import HTML_PARSE_MODE
from notigram.core.enums import ErrorCode
from notigram.core.result import Failure, Result, Success
from notigram.domain.entities import VisitorRecord
from notigram.domain.enums import DispatchState
from notigram.domain.errors import FormatterFailure, NotificationError
from notigram.domain.protocols import BotMessenger, LoggerProtocol
from notigram.domain.value_objects import GeoProfile, PageEnvironment


class Notigram:
    """One-shot, debounceable, cancelable visitor notifier.

    Dependencies (injected via constructor):
        - IdentityResolver: IP + geolocation lookup
        - ContextSnapshotter: local page context
        - BotMessenger: message delivery
        - LoggerProtocol: structured logging

    Use ``notigram.core.container.create_notigram`` to get an instance wired
    with the real HTTP adapters.
    """

    def __init__(
        self,
        options: NotigramOptions,
        *,
        environment: PageEnvironment,
        identity_resolver: IdentityResolver,
        snapshotter: ContextSnapshotter,
        messenger: BotMessenger,
        logger: LoggerProtocol,
    ) -> None:
        self._options = options
        self._environment = environment
        self._identity_resolver = identity_resolver
        self._snapshotter = snapshotter
        self._messenger = messenger
        self._logger = logger.bind(chat_id=options.chat_id)

        self._state = DispatchState.IDLE
        self._has_notified = False
        self._timer: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[VisitorRecord | None] | None = None
        self._settled = asyncio.Event()
        self._record: VisitorRecord | None = None

    @property
    def state(self) -> DispatchState:
        """Current lifecycle state."""
        return self._state

    @property
    def has_notified(self) -> bool:
        """Whether the pipeline has started (the one-shot guard)."""
        return self._has_notified

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Schedule the pipeline after ``debounce_ms`` (lifecycle start).

        No-op when disabled or when already started, canceled or finished.
        Must be called from a running event loop.
        """
        if self._options.disabled:
            self._logger.debug("notigram_disabled")
            return
        if self._state is not DispatchState.IDLE:
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._options.debounce_ms / 1000, self._fire)
        self._state = DispatchState.SCHEDULED
        self._logger.debug("notigram_scheduled", debounce_ms=self._options.debounce_ms)

    def cancel(self) -> None:
        """Cancel a pending fire (lifecycle teardown).

        Only a fire that has not started is affected; an in-flight pipeline
        runs to completion.
        """
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._state is DispatchState.SCHEDULED:
            self._state = DispatchState.CANCELED
            self._settled.set()
            self._logger.debug("notigram_canceled")

    async def wait(self) -> VisitorRecord | None:
        """Wait until the notifier reaches a terminal state.

        Returns:
            The delivered VisitorRecord, or None when the notifier failed,
            was canceled, or was never started.
        """
        if self._state is DispatchState.IDLE:
            return None
        await self._settled.wait()
        return self._record

    async def __aenter__(self) -> "Notigram":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.cancel()

    def _fire(self) -> None:
        self._timer = None
        # The loop only keeps a weak reference to tasks
        self._task = asyncio.get_running_loop().create_task(self.notify_now())
        self._task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[VisitorRecord | None]) -> None:
        if not task.cancelled():
            return
        # Canceled before its first step, so notify_now never ran
        if not self._state.is_terminal:
            self._state = DispatchState.CANCELED
        self._settled.set()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def notify_now(self) -> VisitorRecord | None:
        """Run collect-and-notify immediately, at most once per instance.

        Returns:
            The delivered VisitorRecord, or None if the pipeline did not run
            or failed (the failure went to on_error).
        """
        # Guard is checked and set before the first await
        if self._options.disabled or self._has_notified:
            return None
        if self._state is DispatchState.CANCELED:
            return None
        self._has_notified = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._state = DispatchState.COLLECTING

        try:
            return await self._run_pipeline()
        except asyncio.CancelledError:
            if not self._state.is_terminal:
                self._state = DispatchState.CANCELED
            self._logger.warning("notigram_pipeline_cancelled")
            raise
        finally:
            self._settled.set()

    async def _run_pipeline(self) -> VisitorRecord | None:
        try:
            result = await self._collect_and_deliver()
        except Exception as e:
            self._logger.error("notigram_pipeline_crashed", error=e)
            result = Failure(
                error=NotificationError(
                    code=ErrorCode.PIPELINE_FAILED,
                    message=f"Unexpected pipeline error: {type(e).__name__}: {e}",
                )
            )

        if isinstance(result, Failure):
            self._state = DispatchState.FAILED
            self._logger.error(
                "visitor_notification_failed",
                error_code=result.error.code.value,
                error_detail=result.error.message,
            )
            await self._invoke("on_error", self._options.on_error, result.error)
            return None

        record = result.value
        self._record = record
        self._state = DispatchState.DISPATCHED
        self._logger.info(
            "visitor_notified",
            page=record.page,
            has_location=record.has_location,
        )
        await self._invoke("on_success", self._options.on_success, record)
        return record

    async def _collect_and_deliver(self) -> Result[VisitorRecord, NotificationError]:
        identity = await self._identity_resolver.resolve()
        profile: GeoProfile | None = None
        if isinstance(identity, Failure):
            if not self._options.send_partial_on_lookup_failure:
                return identity
            self._logger.warning(
                "identity_lookup_failed_sending_partial",
                error_code=identity.error.code.value,
                service=identity.error.service_name,
            )
        else:
            profile = identity.value

        context = self._snapshotter.snapshot(self._environment)
        record = merge_visitor_record(profile, context)

        rendered = self._render(record)
        if isinstance(rendered, Failure):
            return rendered
        text, parse_mode = rendered.value

        delivery = await self._messenger.send_message(
            chat_id=self._options.chat_id,
            text=text,
            parse_mode=parse_mode,
        )
        if isinstance(delivery, Failure):
            return delivery

        return Success(value=record)

    def _render(
        self, record: VisitorRecord
    ) -> Result[tuple[str, str | None], FormatterFailure]:
        """Render the record with the custom or built-in formatter.

        Built-in output is HTML-escaped and always paired with HTML parse
        mode; custom output uses the configured parse_mode.
        """
        custom = self._options.custom_message
        try:
            if custom is None:
                return Success(
                    value=(format_message(record, self._options.fields), HTML_PARSE_MODE)
                )
            text = custom(record)
        except Exception as e:
            return Failure(
                error=FormatterFailure(
                    code=ErrorCode.FORMATTER_FAILED,
                    message=f"Message formatter raised {type(e).__name__}: {e}",
                    cause=e,
                )
            )

        if not isinstance(text, str) or not text.strip():
            return Failure(
                error=FormatterFailure(
                    code=ErrorCode.FORMATTER_FAILED,
                    message="Custom message formatter returned no text",
                )
            )
        return Success(value=(text, self._options.parse_mode))

    async def _invoke(self, name: str, callback: Any, argument: Any) -> None:
        """Call a host callback; its exceptions are logged, never raised."""
        if callback is None:
            return
        try:
            outcome = callback(argument)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            self._logger.error("notigram_callback_failed", error=e, callback=name)
