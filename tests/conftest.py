"""Shared pytest fixtures for Workout Timer tests."""

import os
import sys

import pytest

# Must be set before the first QApplication is created.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from workouttimer.timer.engine import TimerEngine  # noqa: E402

from helpers import FakeClock, RecordingNotifier  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def engine(qapp, notifier, clock):
    """Fresh 60 s TimerEngine on a fake clock with a recording notifier."""
    return TimerEngine(parent=None, notifier=notifier, clock=clock)


@pytest.fixture
def short_engine(qapp, notifier, clock):
    """Fresh 2 s TimerEngine."""
    return TimerEngine(parent=None, notifier=notifier, clock=clock, duration=2)
