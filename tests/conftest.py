"""Shared fixtures: a millisecond fake clock and a scheduler driven by it."""

import os
from datetime import datetime, timedelta

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from BackEnd.core.settings import Settings
from BackEnd.services.cycle_controller import SessionCycleController
from BackEnd.services.timer_engine import TimerEngine

BASE_TIME = datetime(2026, 10, 17, 9, 0, 0)


class FakeClock:
    """Integer milliseconds so elapsed-time arithmetic stays exact."""

    def __init__(self, start_ms=1_000_000):
        self.ms = start_ms

    def __call__(self):
        return self.ms / 1000

    def jump(self, seconds):
        """Move time forward without running any scheduled callbacks."""
        self.ms += int(round(seconds * 1000))

    def now(self):
        return BASE_TIME + timedelta(milliseconds=self.ms)


class FakeHandle:
    def __init__(self, due, callback, interval=None):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.active = True

    def cancel(self):
        self.active = False


class FakeScheduler:
    def __init__(self, clock):
        self.clock = clock
        self.handles = []

    def call_every(self, interval_ms, callback):
        handle = FakeHandle(self.clock.ms + int(interval_ms), callback, int(interval_ms))
        self.handles.append(handle)
        return handle

    def call_later(self, delay_ms, callback):
        handle = FakeHandle(self.clock.ms + int(delay_ms), callback)
        self.handles.append(handle)
        return handle

    @property
    def active_periodic(self):
        return [h for h in self.handles if h.active and h.interval is not None]

    def advance(self, seconds):
        """Move the clock forward, firing callbacks in due order like an event loop."""
        target = self.clock.ms + int(round(seconds * 1000))
        while True:
            due = [h for h in self.handles if h.active and h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            if handle.due > self.clock.ms:
                self.clock.ms = handle.due
            if handle.interval is None:
                handle.active = False
            else:
                # Overdue timers coalesce instead of catching up.
                handle.due = max(handle.due + handle.interval, self.clock.ms + handle.interval)
            handle.callback()
        self.clock.ms = target
        self.handles = [h for h in self.handles if h.active]


@pytest.fixture(scope="session", autouse=True)
def qapp():
    return QApplication.instance() or QApplication([])


@pytest.fixture(autouse=True)
def data_home(tmp_path, monkeypatch):
    monkeypatch.setenv("POMODORO_TRAY_HOME", str(tmp_path / "home"))
    return tmp_path / "home"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return FakeScheduler(clock)


@pytest.fixture
def make_engine(clock, scheduler):
    def _make(minutes=1):
        return TimerEngine(minutes=minutes, clock=clock, scheduler=scheduler)
    return _make


class ListStore:
    def __init__(self):
        self.records = []

    def append(self, record):
        self.records.append(record)

    def query_all(self):
        return list(self.records)


@pytest.fixture
def store():
    return ListStore()


@pytest.fixture
def make_controller(clock, scheduler, store, make_engine):
    def _make(settings=None, minutes=25, **overrides):
        if settings is None and overrides:
            settings = Settings(**overrides)
        engine = make_engine(minutes)
        return SessionCycleController(engine, store=store, settings=settings, scheduler=scheduler, now=clock.now)
    return _make
