"""
Timeout resolution and wiring-time options for Sweetener.
"""
import os
from collections.abc import Mapping
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from sweetener.errors import ConfigurationError
from sweetener.types import GlobalOptions, TimeoutSetting


def resolve_timeout(per_call: Any, default_ms: float) -> TimeoutSetting:
    """
    Resolve the effective timeout for one step or hook definition.

    `per_call` may be None (use the default), a TimeoutSetting, a mapping
    with a `timeout_ms` key, or a bare number. Anything non-numeric, negative,
    infinite or NaN raises ConfigurationError so misconfiguration surfaces
    before any body runs.
    """
    if per_call is None:
        return TimeoutSetting(timeout_ms=default_ms)
    if isinstance(per_call, TimeoutSetting):
        return per_call

    if isinstance(per_call, Mapping):
        value = per_call.get("timeout_ms")
    else:
        value = per_call

    try:
        return TimeoutSetting(timeout_ms=value)
    except ValidationError:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            raise ConfigurationError(
                value, f"The step timeout must be finite and non-negative, {value!r} is not!"
            ) from None
        raise ConfigurationError(value) from None


def load_options(env_file: Optional[str] = None, **overrides: Any) -> GlobalOptions:
    """
    Build GlobalOptions from explicit overrides, falling back to the environment.

    Environment: SWEETENER_TIMEOUT_MS, SWEETENER_LOG_FILE, SWEETENER_LOG_LEVEL,
    LOG_FORMAT ("console" or "json"). A .env file (the given path, else the
    nearest one at or above the working directory) is loaded first.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    values: dict = {}
    raw_timeout = os.getenv("SWEETENER_TIMEOUT_MS")
    if raw_timeout is not None:
        try:
            values["timeout_ms"] = float(raw_timeout) if "." in raw_timeout else int(raw_timeout)
        except ValueError:
            raise ConfigurationError(raw_timeout) from None

    log_file = os.getenv("SWEETENER_LOG_FILE")
    if log_file:
        values["log_file"] = log_file
    log_level = os.getenv("SWEETENER_LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level.lower()
    values["json_logs"] = os.getenv("LOG_FORMAT", "console").lower() == "json"

    values.update({k: v for k, v in overrides.items() if v is not None})
    return GlobalOptions(**values)
