"""
Pytest configuration and fixtures
"""

import os

os.environ.setdefault("LOG_DIR", "")

import pytest
from datetime import datetime, timedelta
from study_tracker.main import StudyTracker
from study_tracker.services.storage import Storage
from study_tracker.services.task_store import TaskStore
from study_tracker.services.session_store import SessionStore
from study_tracker.services.settings_store import SettingsStore
from study_tracker.services.focus_timer import FocusTimer


class FakeClock:
    """Settable clock returning a fixed local time"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Collects call_later requests; fire() runs the next live one"""

    def __init__(self):
        self.pending = []

    def call_later(self, delay, callback):
        handle = FakeHandle(callback)
        self.pending.append(handle)
        return handle

    @property
    def live(self):
        return [h for h in self.pending if not h.cancelled]

    def fire(self) -> bool:
        while self.pending:
            handle = self.pending.pop(0)
            if not handle.cancelled:
                handle.callback()
                return True
        return False


@pytest.fixture
def clock():
    """Clock fixed at noon local time"""
    return FakeClock(datetime(2026, 10, 19, 12, 0, 0).astimezone())


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def storage(tmp_path):
    """Storage in a temporary directory"""
    return Storage(data_dir=str(tmp_path / "data"))


@pytest.fixture
def task_store(storage, clock):
    return TaskStore(storage, clock=clock)


@pytest.fixture
def session_store(storage, clock):
    return SessionStore(storage, clock=clock)


@pytest.fixture
def settings_store(storage, clock):
    return SettingsStore(storage, clock=clock, default_focus_duration=25)


@pytest.fixture
def timer(settings_store, session_store, task_store, scheduler):
    """Focus timer driven by the fake scheduler"""
    def first_incomplete():
        task = task_store.first_incomplete()
        return task.id if task else None

    return FocusTimer(settings_store, session_store, linked_task_provider=first_incomplete, scheduler=scheduler)


@pytest.fixture
def tracker(storage, clock, scheduler):
    """Tracker with mocked time and ticks"""
    tracker = StudyTracker(storage=storage, clock=clock, scheduler=scheduler)
    tracker.settings_store.set_focus_duration(25)
    return tracker
