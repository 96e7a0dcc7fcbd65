"""
Interfaces consumed from the host test runner.
"""
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class TerminalCallback(Protocol):
    """Completion handler passed by the host runner as a body's last argument."""

    def __call__(self, *args: Any) -> Any: ...

    def fail(self, reason: Any = None) -> Any: ...

    def pending(self) -> Any: ...


class LogSink(Protocol):
    def info(self, event: str, **fields: Any) -> Any: ...

    def error(self, event: str, **fields: Any) -> Any: ...


# Lifecycle notifications receive an event carrying a name and a callback to proceed.
Notification = Callable[[Any, Callable[[], Any]], Any]


class HostRunner(Protocol):
    def define_step(self, pattern: str, fn: Callable[..., Any]) -> Any: ...

    def before(self, *args: Any) -> Any: ...

    def after(self, *args: Any) -> Any: ...

    def before_feature(self, fn: Notification) -> Any: ...

    def before_scenario(self, fn: Notification) -> Any: ...

    def before_step(self, fn: Notification) -> Any: ...
