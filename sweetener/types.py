import math
from enum import Enum
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

DEFAULT_TIMEOUT_MS = 1000

def is_valid_timeout(value: Union[int, float]) -> bool:
    return math.isfinite(value) and value >= 0

# --- Enums ---
class Signal(str, Enum):
    """Terminal signals a step or hook can deliver to the host runner."""
    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"

class CompletionStyle(str, Enum):
    SYNCHRONOUS = "synchronous"  # returns a plain value, never sees the callback
    CALLBACK = "callback"        # receives the gated callback and calls it
    DEFERRED = "deferred"        # returns an awaitable

# --- Configuration Models ---
class TimeoutSetting(BaseModel):
    """
    Per-definition timeout budget.
    Strict numeric: bools and numeric strings are rejected rather than coerced.
    """
    model_config = ConfigDict(frozen=True)

    timeout_ms: Union[StrictInt, StrictFloat]

    @field_validator('timeout_ms')
    @classmethod
    def finite_non_negative(cls, v: Union[int, float]) -> Union[int, float]:
        # call_later fires NaN and negative delays immediately.
        if not is_valid_timeout(v):
            raise ValueError("timeout_ms must be a finite, non-negative number")
        return v

    @property
    def seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def describe(self) -> str:
        # 10 -> "10", 10.0 -> "10", 2.5 -> "2.5"
        value = self.timeout_ms
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value)

class GlobalOptions(BaseModel):
    """
    Process-wide options fixed when the layer is wired to the host runner.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    timeout_ms: Union[StrictInt, StrictFloat] = DEFAULT_TIMEOUT_MS
    logger: Optional[Any] = Field(None, description="Log sink replacing the default file logger")

    log_file: str = "sweetener.log"
    log_level: str = "info"
    json_logs: bool = False

    @field_validator('timeout_ms', mode='before')
    @classmethod
    def default_non_numeric_timeout(cls, v: Any) -> Any:
        # Wiring-time options fall back to the default instead of failing.
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not is_valid_timeout(v):
            return DEFAULT_TIMEOUT_MS
        return v

    def default_timeout(self) -> TimeoutSetting:
        return TimeoutSetting(timeout_ms=self.timeout_ms)

# --- Lifecycle State ---
class LifecycleNames(BaseModel):
    """Names of the feature, scenario and step currently executing."""
    feature_name: str = ""
    scenario_name: str = ""
    step_name: str = ""
