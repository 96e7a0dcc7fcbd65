"""
Lifecycle name tracking.

The host runner notifies us before each feature, scenario and step begins.
Notifications are serialized by the runner and always precede the unit of
work they name, so the tracker needs no locking.
"""
from typing import Any, Callable, Optional

from sweetener.types import LifecycleNames


def _event_name(event: Any) -> str:
    if isinstance(event, str):
        return event
    return str(getattr(event, "name", ""))


class LifecycleTracker:
    """
    Explicit context object holding the names of the running feature,
    scenario and step. Passed into every wrapped body; read when logging.
    """

    def __init__(self, names: Optional[LifecycleNames] = None):
        self.names = names or LifecycleNames()

    # --- Notification handlers (registered with the host runner) ---

    def on_feature(self, event: Any, callback: Callable[[], Any]):
        self.names.feature_name = _event_name(event)
        return callback()

    def on_scenario(self, event: Any, callback: Callable[[], Any]):
        self.names.scenario_name = _event_name(event)
        return callback()

    def on_step(self, event: Any, callback: Callable[[], Any]):
        self.names.step_name = _event_name(event)
        return callback()

    # --- Readers ---

    def label(self, hook_kind: Optional[str] = None) -> str:
        """Name used in log lines: the hook kind for hooks, else the step name."""
        return hook_kind if hook_kind else self.names.step_name

    def log_fields(self) -> dict:
        return {
            "feature": self.names.feature_name,
            "scenario": self.names.scenario_name,
        }
