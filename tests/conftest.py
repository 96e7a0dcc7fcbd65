"""
Shared fixtures for supervision tests.
"""
import os
import sys

import pytest

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sweetener.lifecycle import LifecycleTracker
from sweetener.types import GlobalOptions, LifecycleNames
from tests.fakes.fake_log import RecordingLog
from tests.fakes.fake_runner import FakeRunner


@pytest.fixture
def log():
    return RecordingLog()


@pytest.fixture
def tracker():
    """Tracker pre-populated as if the runner had announced a step."""
    return LifecycleTracker(LifecycleNames(
        feature_name="Checkout",
        scenario_name="Pay by card",
        step_name="the card is charged",
    ))


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def options(log):
    return GlobalOptions(logger=log)
