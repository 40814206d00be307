# tests/conftest.py
# Pytest configuration w/ isolation fixtures for deterministic engine runs

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication

from BackEnd.core.kv_store import MemoryKeyValueStore
from BackEnd.core.settings import TimerSettings
from BackEnd.repos.snapshot_repo import SnapshotRepository
from BackEnd.services.timer_service import TimerService
from tests.test_support.doubles import FakeClock, RecorderSpy


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    # QTimer needs an application object; tests drive polling by hand
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def isolate_data_dir(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    monkeypatch.setenv("STUDYCYCLE_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def snapshots(store, clock):
    return SnapshotRepository(store, clock)


@pytest.fixture
def recorder():
    return RecorderSpy()


@pytest.fixture
def settings():
    # the 1500/300/900/4 cycle, breaks auto-start, focus does not
    return TimerSettings(
        work_duration_seconds=1500,
        break_duration_seconds=300,
        long_break_duration_seconds=900,
        sessions_until_long_break=4,
        auto_start_breaks=True,
        auto_start_next_focus=False,
    )


@pytest.fixture
def make_service(settings, snapshots, recorder, clock):
    created = []

    def _make(settings_override=None, foreground=None):
        service = TimerService(
            settings_override or settings, snapshots, recorder, clock=clock, foreground=foreground)
        created.append(service)
        return service

    yield _make
    for service in created:
        service.pause()
