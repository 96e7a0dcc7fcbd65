"""
Error taxonomy for the step supervision layer.

Only ConfigurationError ever propagates to callers. Body errors, awaitable
failures and timeouts are delivered to the host runner as failure signals.
"""
from typing import Any, Optional, Union


class SweetenerError(Exception):
    pass


class ConfigurationError(SweetenerError, ValueError):
    """Invalid timeout supplied at wiring or registration time."""

    def __init__(self, value: Any, message: Optional[str] = None):
        self.value = value
        super().__init__(message or f"The step timeout must be a number, {value!r} is not a number!")


class StepTimeoutError(SweetenerError, TimeoutError):
    """Failure reason synthesized when the timer fires before the body settles."""

    def __init__(self, timeout_ms: Union[int, float], message: str):
        self.timeout_ms = timeout_ms
        super().__init__(message)
