"""Lifecycle name tracking."""
from unittest.mock import MagicMock

from sweetener.lifecycle import LifecycleTracker
from tests.fakes.fake_runner import NamedEvent


def test_handlers_record_names_and_proceed():
    tracker = LifecycleTracker()
    proceed = MagicMock(return_value="next")

    assert tracker.on_feature(NamedEvent("Checkout"), proceed) == "next"
    tracker.on_scenario(NamedEvent("Pay by card"), proceed)
    tracker.on_step(NamedEvent("the card is charged"), proceed)

    assert proceed.call_count == 3
    assert tracker.names.feature_name == "Checkout"
    assert tracker.names.scenario_name == "Pay by card"
    assert tracker.names.step_name == "the card is charged"


def test_string_events_are_names():
    tracker = LifecycleTracker()
    tracker.on_step("a step", lambda: None)
    assert tracker.names.step_name == "a step"


def test_initial_names_are_empty():
    names = LifecycleTracker().names
    assert (names.feature_name, names.scenario_name, names.step_name) == ("", "", "")


def test_label_prefers_hook_kind(tracker):
    assert tracker.label() == "the card is charged"
    assert tracker.label("Before") == "Before"


def test_log_fields(tracker):
    assert tracker.log_fields() == {"feature": "Checkout", "scenario": "Pay by card"}


def test_trackers_are_independent():
    a, b = LifecycleTracker(), LifecycleTracker()
    a.on_step("only a", lambda: None)
    assert b.names.step_name == ""
