"""Fakes and builders shared by the test modules."""

from datetime import datetime, timedelta, timezone

from liftbook.models import CompletedSet, ExerciseProgress, WorkoutSession
from liftbook.storage import SQLiteStorage, StorageAdapter

NOW = datetime(2025, 8, 22, 14, 37, 5, tzinfo=timezone.utc)


class FakeEvent:
    def __init__(self, callback, interval):
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeClock:
    """Stand-in for ``kivy.clock.Clock`` recording scheduled events."""

    def __init__(self):
        self.events: list[FakeEvent] = []

    def schedule_interval(self, callback, interval):
        event = FakeEvent(callback, interval)
        self.events.append(event)
        return event


class FakeNow:
    """Callable returning a controllable current time."""

    def __init__(self, value: datetime = NOW):
        self.value = value

    def __call__(self) -> datetime:
        return self.value

    def advance(self, **kwargs) -> None:
        self.value += timedelta(**kwargs)


def make_session(session_id, date, day_type="Day1", completed=False, duration=None, sets=None):
    """Build a session; ``sets`` maps exercise ids to ``(weight, reps)`` lists."""
    exercises = [
        ExerciseProgress(
            exercise_id,
            [CompletedSet(weight=w, reps=r, timestamp=date.timestamp()) for w, r in values],
        )
        for exercise_id, values in (sets or {}).items()
    ]
    return WorkoutSession(
        id=session_id,
        date=date,
        day_type=day_type,
        exercises=exercises,
        duration=duration,
        completed=completed,
    )


class BrokenStorage(StorageAdapter):
    """Adapter whose every operation fails."""

    def read(self, key):
        raise OSError("disk unavailable")

    def write(self, key, value):
        raise OSError("disk full")

    def remove(self, key):
        raise OSError("read-only")


class FlakyStorage(SQLiteStorage):
    """SQLite adapter whose next ``failing_reads`` reads raise."""

    def __init__(self, db_path, failing_reads=0):
        super().__init__(db_path)
        self.failing_reads = failing_reads

    def read(self, key):
        if self.failing_reads:
            self.failing_reads -= 1
            raise OSError("database is locked")
        return super().read(key)
