"""
CompletionGate for Sweetener.
Exactly-once terminal signalling for one step or hook invocation, raced
against a timeout timer on the running event loop.
"""
import asyncio
from typing import Any, Optional

from sweetener.errors import StepTimeoutError
from sweetener.host import LogSink, TerminalCallback
from sweetener.lifecycle import LifecycleTracker
from sweetener.types import Signal, TimeoutSetting

TIMEOUT_MESSAGE = "Timeout of {timeout} milliseconds was exceeded, scenario will fail."


class CompletionGate:
    """
    Wraps the host runner's terminal callback so that only the first of
    success / fail / pending is delivered. Later signals, from the body or
    from the timer, are dropped.

    The gate is itself callable with `fail` and `pending` attributes, so it
    can be handed to a body in place of the raw callback.
    """

    def __init__(
        self,
        callback: TerminalCallback,
        timeout: TimeoutSetting,
        *,
        tracker: LifecycleTracker,
        log: LogSink,
        hook_kind: Optional[str] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self._callback = callback
        self._timeout = timeout
        self._tracker = tracker
        self._log = log
        self._hook_kind = hook_kind

        # Single-assignment outcome cell; the event loop serializes writers.
        self.outcome: Optional[Signal] = None
        self._abandoned = False

        loop = loop or asyncio.get_running_loop()
        self._timer: Optional[asyncio.TimerHandle] = loop.call_later(timeout.seconds, self._on_timeout)

    @property
    def settled(self) -> bool:
        return self.outcome is not None or self._abandoned

    # --- Terminal capabilities ---

    def __call__(self, *args: Any) -> None:
        self._settle(Signal.SUCCESS)

    def fail(self, reason: Any = None) -> None:
        self._settle(Signal.FAILURE, reason)

    def pending(self) -> None:
        self._settle(Signal.PENDING)

    def abandon(self) -> None:
        """Stop the timer and drop all later signals without delivering one."""
        self._cancel_timer()
        self._abandoned = True

    # --- Internals ---

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _settle(self, signal: Signal, reason: Any = None):
        self._cancel_timer()
        if self.settled:
            return
        self.outcome = signal

        if signal is Signal.SUCCESS:
            self._callback()
        elif signal is Signal.FAILURE:
            self._callback.fail(reason)
        else:
            self._callback.pending()

    def _on_timeout(self):
        self._timer = None
        if self.settled:
            return
        message = TIMEOUT_MESSAGE.format(timeout=self._timeout.describe())
        name = self._tracker.label(self._hook_kind)
        self._log.info(f'{message} In step: "{name}"', timeout_ms=self._timeout.timeout_ms, step=name)
        self.fail(StepTimeoutError(self._timeout.timeout_ms, message))
