"""
Invocation Wrapper — timeout-guarded execution of one step or hook body.

The host runner calls a wrapped body with the step arguments followed by its
terminal callback. The wrapper swaps that callback for a CompletionGate and
routes whatever the body does to the gate:

    - raises            -> gate.fail(error)
    - takes callback    -> body (or the timer) settles the gate itself
    - returns awaitable -> gate() on success, gate.fail(error) on failure
    - returns a value   -> gate() immediately

Whichever signal reaches the gate first wins; the timer armed by the gate
covers bodies that never settle.
"""

import asyncio
import functools
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Set, Tuple, Union

from sweetener.gate import CompletionGate
from sweetener.host import LogSink
from sweetener.lifecycle import LifecycleTracker
from sweetener.types import CompletionStyle, TimeoutSetting

STYLE_ATTR = "__completion_style__"

# Strong references to scheduled awaitables until they finish.
_background: Set[asyncio.Future] = set()


@dataclass
class BodyResult:
    """Outcome of calling a body inside the error boundary."""
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def completion_style(style: Union[CompletionStyle, str]):
    """
    Declare how a body completes instead of relying on arity detection.

        @completion_style(CompletionStyle.CALLBACK)
        def step(context, *rest): ...
    """
    style = CompletionStyle(style)

    def decorator(body: Callable) -> Callable:
        setattr(body, STYLE_ATTR, style)
        return body
    return decorator


def positional_arity(body: Callable) -> Tuple[int, bool]:
    """Count positional parameters; second item is True when *args is accepted."""
    try:
        params = inspect.signature(body).parameters.values()
    except (TypeError, ValueError):
        # Builtins without signatures: assume they take whatever is supplied.
        return 0, True
    count = 0
    for p in params:
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            return count, True
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count, False


def takes_callback(body: Callable, supplied: int) -> bool:
    """True when the body should receive the (gated) callback as its last argument."""
    declared = getattr(body, STYLE_ATTR, None)
    if declared is not None:
        return declared is CompletionStyle.CALLBACK
    count, variadic = positional_arity(body)
    return variadic or count >= supplied


def call_body(body: Callable, args: tuple) -> BodyResult:
    try:
        return BodyResult(value=body(*args))
    except Exception as e:
        return BodyResult(error=e)


def chain_awaitable(awaitable: Any, gate: CompletionGate) -> asyncio.Future:
    """Settle the gate when the awaitable finishes."""
    future = asyncio.ensure_future(awaitable)
    _background.add(future)

    def _done(f: asyncio.Future):
        _background.discard(f)
        if f.cancelled():
            gate.fail(asyncio.CancelledError())
            return
        error = f.exception()
        if error is not None:
            gate.fail(error)
        else:
            gate()

    future.add_done_callback(_done)
    return future


def wrap_with_timeout(
    body: Callable,
    timeout: TimeoutSetting,
    *,
    tracker: LifecycleTracker,
    log: LogSink,
    hook_kind: Optional[str] = None,
) -> Callable:
    """
    Produce the replacement function registered with the host runner.

    Args:
        body: the user-supplied step or hook body
        timeout: resolved timeout for this definition
        tracker: lifecycle names used in log lines
        log: log sink
        hook_kind: "Before" / "After" for hooks, None for steps
    """

    def wrapped(*args: Any) -> Any:
        args = list(args)
        name = tracker.label(hook_kind)
        fields = tracker.log_fields()

        log.info(f"{name} started", step=name, **fields)

        gate = CompletionGate(args[-1], timeout, tracker=tracker, log=log, hook_kind=hook_kind)
        args[-1] = gate

        with_callback = takes_callback(body, len(args))
        call_args = tuple(args) if with_callback else tuple(args[:-1])

        try:
            result = call_body(body, call_args)
        except BaseException:
            # KeyboardInterrupt, SystemExit and test-framework outcomes belong to the host runner.
            gate.abandon()
            raise
        if not result.ok:
            log.error(f"{name} failed: {result.error}", step=name, error=repr(result.error), **fields)
            gate.fail(result.error)
            return None

        log.info(f"{name} ended", step=name, **fields)

        if with_callback:
            if inspect.isawaitable(result.value):
                # The coroutine must still run; the gate drops whichever signal comes second.
                chain_awaitable(result.value, gate)
                return None
            return result.value

        if inspect.isawaitable(result.value):
            chain_awaitable(result.value, gate)
            return None

        if getattr(body, STYLE_ATTR, None) is CompletionStyle.DEFERRED:
            gate.fail(TypeError(f"{name} declared deferred completion but returned {type(result.value).__name__}"))
            return None

        gate()
        return None

    # Name and docstring only; the host runner must see the (*args) signature.
    functools.update_wrapper(wrapped, body, updated=())
    del wrapped.__wrapped__
    return wrapped
