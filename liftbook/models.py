"""Data model for workout sessions and user settings.

All records serialise to plain JSON-compatible dictionaries via ``to_dict``
and are rebuilt with ``from_dict``.  Dates are stored as ISO-8601 strings.
``from_dict`` raises ``KeyError``, ``TypeError`` or ``ValueError`` when a
required field is missing or malformed; callers reading from storage decide
how to recover.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from liftbook import DAY_TYPES, DEFAULT_BODY_WEIGHT, DEFAULT_WEEK_STARTS_WITH_DAY1
from liftbook.utils import from_iso, to_iso


@dataclass
class CompletedSet:
    """One logged set of an exercise."""

    weight: float
    reps: int
    completed: bool = True
    timestamp: float = 0.0

    def to_dict(self) -> dict:
        return {
            "weight": self.weight,
            "reps": self.reps,
            "completed": self.completed,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CompletedSet":
        return cls(
            weight=float(data["weight"]),
            reps=int(data["reps"]),
            completed=bool(data.get("completed", True)),
            timestamp=float(data.get("timestamp", 0.0)),
        )


@dataclass
class ExerciseProgress:
    """Sets logged for one exercise within a session."""

    exercise_id: str
    completed_sets: list[CompletedSet] = field(default_factory=list)

    def completed_count(self) -> int:
        """Return how many logged sets are flagged as completed."""

        return sum(1 for s in self.completed_sets if s.completed)

    def is_complete(self, target_sets: int) -> bool:
        """Return ``True`` once ``target_sets`` completed sets were logged."""

        return self.completed_count() >= target_sets

    def last_set(self) -> CompletedSet | None:
        return self.completed_sets[-1] if self.completed_sets else None

    def to_dict(self) -> dict:
        return {
            "exercise_id": self.exercise_id,
            "completed_sets": [s.to_dict() for s in self.completed_sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseProgress":
        return cls(
            exercise_id=str(data["exercise_id"]),
            completed_sets=[
                CompletedSet.from_dict(s) for s in data.get("completed_sets", [])
            ],
        )


@dataclass
class WorkoutSession:
    """A single workout attempt.

    ``id``, ``date`` and ``day_type`` are fixed when the session starts.
    ``exercises`` holds one :class:`ExerciseProgress` per exercise of the
    day's plan in plan order.  ``duration`` is the elapsed time in whole
    minutes as of the last save.
    """

    id: str
    date: datetime
    day_type: str
    exercises: list[ExerciseProgress] = field(default_factory=list)
    body_weight: float | None = None
    duration: int | None = None
    notes: str | None = None
    completed: bool = False

    def progress_for(self, exercise_id: str) -> ExerciseProgress | None:
        """Return the progress entry for ``exercise_id`` if present."""

        for progress in self.exercises:
            if progress.exercise_id == exercise_id:
                return progress
        return None

    def to_dict(self) -> dict:
        """Return a JSON-serialisable representation of the session."""

        return {
            "id": self.id,
            "date": to_iso(self.date),
            "day_type": self.day_type,
            "exercises": [e.to_dict() for e in self.exercises],
            "body_weight": self.body_weight,
            "duration": self.duration,
            "notes": self.notes,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSession":
        """Reconstruct a :class:`WorkoutSession` from ``data``."""

        day_type = data["day_type"]
        if day_type not in DAY_TYPES:
            raise ValueError(f"Unknown day type '{day_type}'")
        date = from_iso(data["date"])
        if date is None:
            raise ValueError("Session date missing")
        duration = data.get("duration")
        body_weight = data.get("body_weight")
        return cls(
            id=str(data["id"]),
            date=date,
            day_type=day_type,
            exercises=[ExerciseProgress.from_dict(e) for e in data.get("exercises", [])],
            body_weight=float(body_weight) if body_weight is not None else None,
            duration=int(duration) if duration is not None else None,
            notes=data.get("notes"),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class UserSettings:
    """Profile settings; a single record per device."""

    body_weight: float = DEFAULT_BODY_WEIGHT
    week_starts_with_day1: bool = DEFAULT_WEEK_STARTS_WITH_DAY1
    last_workout_date: datetime | None = None
    last_workout_type: str | None = None

    def to_dict(self) -> dict:
        data = {
            "body_weight": self.body_weight,
            "week_starts_with_day1": self.week_starts_with_day1,
        }
        if self.last_workout_date is not None:
            data["last_workout_date"] = to_iso(self.last_workout_date)
        if self.last_workout_type is not None:
            data["last_workout_type"] = self.last_workout_type
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UserSettings":
        last_type = data.get("last_workout_type")
        if last_type is not None and last_type not in DAY_TYPES:
            raise ValueError(f"Unknown day type '{last_type}'")
        return cls(
            body_weight=float(data.get("body_weight", DEFAULT_BODY_WEIGHT)),
            week_starts_with_day1=bool(
                data.get("week_starts_with_day1", DEFAULT_WEEK_STARTS_WITH_DAY1)
            ),
            last_workout_date=from_iso(data.get("last_workout_date")),
            last_workout_type=last_type,
        )
