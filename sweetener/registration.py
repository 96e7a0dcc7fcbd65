"""
Registration adapters: wrap the host runner's step and hook entry points so
every definition made through them is timeout-guarded.
"""
from typing import Any, Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from sweetener.config import load_options, resolve_timeout
from sweetener.host import HostRunner, LogSink
from sweetener.lifecycle import LifecycleTracker
from sweetener.logger import LOGGER_NAME, configure_logger, get_logger
from sweetener.types import GlobalOptions
from sweetener.wrapper import wrap_with_timeout


def wrap_scenario_step(
    define_step: Callable[[str, Callable], Any],
    options: GlobalOptions,
    tracker: LifecycleTracker,
    log: LogSink,
) -> Callable:
    """Adapter for Given/When/Then: step(pattern_or_patterns, body, timeout=None)."""

    def step(pattern: Any, body: Callable, timeout: Any = None) -> None:
        setting = resolve_timeout(timeout, options.timeout_ms)
        patterns: Sequence[str] = pattern if isinstance(pattern, (list, tuple)) else [pattern]
        for p in patterns:
            define_step(p, wrap_with_timeout(body, setting, tracker=tracker, log=log))

    return step


def wrap_hook(
    define_hook: Callable[..., Any],
    options: GlobalOptions,
    tracker: LifecycleTracker,
    log: LogSink,
    kind: str,
) -> Callable:
    """
    Adapter for Before/After: hook(*selectors, body, timeout).
    The timeout is the trailing non-callable positional argument or the
    `timeout` keyword. Selectors are forwarded untouched.
    """

    def hook(*args: Any, timeout: Any = None) -> Any:
        args = list(args)
        if args and not callable(args[-1]):
            if timeout is not None:
                raise TypeError(f"{kind} hook got a timeout both positionally and as a keyword")
            timeout = args.pop()
        if not args or not callable(args[-1]):
            raise TypeError(f"{kind} hook requires a callable body")
        body = args.pop()

        setting = resolve_timeout(timeout, options.timeout_ms)
        wrapped = wrap_with_timeout(body, setting, tracker=tracker, log=log, hook_kind=kind)
        return define_hook(*args, wrapped)

    return hook


class StepDefinitions(BaseModel):
    """Timeout-guarded registration functions returned by sweeten()."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    given: Callable
    when: Callable
    then: Callable
    before: Callable
    after: Callable
    tracker: LifecycleTracker
    options: GlobalOptions


def sweeten(runner: HostRunner, options: Optional[GlobalOptions] = None, **overrides: Any) -> StepDefinitions:
    """
    Wire the supervision layer to a host runner.

    Registers lifecycle notifications for name tracking and returns the
    wrapped Given/When/Then/Before/After entry points.
    """
    if options is not None and overrides:
        raise TypeError(f"sweeten() takes options or keyword overrides, not both: {sorted(overrides)}")
    options = options or load_options(**overrides)

    if options.logger is not None:
        log = options.logger
    else:
        configure_logger(options.log_file, options.log_level, options.json_logs)
        log = get_logger(LOGGER_NAME)

    tracker = LifecycleTracker()
    runner.before_feature(tracker.on_feature)
    runner.before_scenario(tracker.on_scenario)
    runner.before_step(tracker.on_step)

    step = wrap_scenario_step(runner.define_step, options, tracker, log)
    return StepDefinitions(
        given=step,
        when=step,
        then=step,
        before=wrap_hook(runner.before, options, tracker, log, "Before"),
        after=wrap_hook(runner.after, options, tracker, log, "After"),
        tracker=tracker,
        options=options,
    )
