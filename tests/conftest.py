import os
from pathlib import Path
import sys

import pytest

# Headless test runs: give Kivy fixed metrics so importing KivyMD does not
# try to open a window to query the screen DPI.
os.environ.setdefault("KIVY_DPI", "96")
os.environ.setdefault("KIVY_METRICS_DENSITY", "1")
os.environ.setdefault("KIVY_NO_ARGS", "1")

sys.path.append(str(Path(__file__).resolve().parents[1]))

from liftbook.repository import SessionRepository
from liftbook.storage import SQLiteStorage
from liftbook.workout_session import SessionManager
from helpers import FakeClock, FakeNow


@pytest.fixture
def storage(tmp_path: Path) -> SQLiteStorage:
    return SQLiteStorage(tmp_path / "liftbook.db")


@pytest.fixture
def repository(storage) -> SessionRepository:
    return SessionRepository(storage)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def now() -> FakeNow:
    return FakeNow()


@pytest.fixture
def manager(repository, clock, now) -> SessionManager:
    return SessionManager(repository, clock=clock, now=now)
