"""Pytest configuration and shared fixtures."""

import os
import tempfile
from typing import Callable, List

import pytest

from freefall_app.persistence.storage import MemoryStorage
from freefall_app.utils.time import Clock, Scheduler, TickHandle


class FakeClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class ManualTickHandle(TickHandle):
    """Tick handle recorded by ManualScheduler."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Scheduler whose ticks fire only when the test calls fire()."""

    def __init__(self):
        self.handles: List[ManualTickHandle] = []

    def call_every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        handle = ManualTickHandle(interval, callback)
        self.handles.append(handle)
        return handle

    @property
    def active(self) -> List[ManualTickHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire(self) -> None:
        """Fire every active tick once."""
        for handle in self.active:
            handle.callback()

    def fire_stale(self) -> None:
        """Fire every tick ever installed, as a leaked callback would."""
        for handle in self.handles:
            handle.callback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def db_path():
    """Path to a fresh SQLite file, removed after the test."""
    temp_dir = tempfile.mkdtemp()
    path = os.path.join(temp_dir, "test_freefall.db")
    yield path
    import shutil
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_history_payload() -> str:
    """Persisted history as written by an earlier session."""
    return (
        '[{"depth": 19.6, "elapsedTime": 2.0, "name": "Well"},'
        ' {"depth": 4.9, "elapsedTime": 1.0, "name": "Measurement"}]'
    )
