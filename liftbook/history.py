"""Read-only queries over stored workout sessions."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta
from typing import Iterable

from liftbook import DAY1, DAY2, DAY_TYPES
from liftbook.models import WorkoutSession
from liftbook.plan import get_day_plan, other_day
from liftbook.utils import ensure_aware, utcnow

PERIODS = ("week", "month", "all")

# Days without training after which the plan restarts at the week start day
WEEK_RESET_DAYS = 3


def _newest_first(sessions: Iterable[WorkoutSession]) -> list[WorkoutSession]:
    return sorted(sessions, key=lambda s: s.date, reverse=True)


def last_set_for(sessions: Iterable[WorkoutSession], exercise_id: str) -> dict | None:
    """Return ``{"weight", "reps"}`` of the most recent set for ``exercise_id``.

    The newest session (by date) that logged any set for the exercise is
    used, and within it the final set.  Storage order is not relied upon.
    """

    for session in _newest_first(sessions):
        progress = session.progress_for(exercise_id)
        last = progress.last_set() if progress else None
        if last is not None:
            return {"weight": last.weight, "reps": last.reps}
    return None


def last_sets_for_day(sessions: Iterable[WorkoutSession], day_type: str) -> dict:
    """Map each exercise id of ``day_type`` to its :func:`last_set_for` value.

    Exercises never performed are left out.
    """

    sessions = _newest_first(sessions)
    result = {}
    for exercise in get_day_plan(day_type):
        last = last_set_for(sessions, exercise.id)
        if last is not None:
            result[exercise.id] = last
    return result


def _one_month_before(now: datetime) -> datetime:
    year, month = (now.year - 1, 12) if now.month == 1 else (now.year, now.month - 1)
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def period_cutoff(period: str, now: datetime | None = None) -> datetime | None:
    """Return the earliest date included in ``period`` or ``None`` for all."""

    now = ensure_aware(now or utcnow())
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return _one_month_before(now)
    if period == "all":
        return None
    raise ValueError(f"Unknown period '{period}'")


def sessions_within(
    sessions: Iterable[WorkoutSession], period: str, now: datetime | None = None
) -> list[WorkoutSession]:
    """Return the sessions dated inside the trailing ``period``."""

    cutoff = period_cutoff(period, now)
    if cutoff is None:
        return list(sessions)
    return [s for s in sessions if s.date >= cutoff]


def weekly_completed_count(
    sessions: Iterable[WorkoutSession], now: datetime | None = None
) -> int:
    """Count sessions from the last seven days.

    Every session in range counts, whether or not it was finished.
    """

    return len(sessions_within(sessions, "week", now))


def next_suggested_day(
    last_date: datetime | None,
    last_type: str | None,
    week_starts_with_day1: bool = True,
    now: datetime | None = None,
) -> str:
    """Suggest which day to train next.

    Without a previous workout, or when more than :data:`WEEK_RESET_DAYS`
    whole days have passed since it, the configured week start day is
    returned.  Otherwise the days alternate.
    """

    week_start = DAY1 if week_starts_with_day1 else DAY2
    if last_date is None or last_type not in DAY_TYPES:
        return week_start
    now = ensure_aware(now or utcnow())
    days_since = (now - ensure_aware(last_date)).days
    if days_since > WEEK_RESET_DAYS:
        return week_start
    return other_day(last_type)


def aggregate_stats(sessions: Iterable[WorkoutSession]) -> dict:
    """Summarise finished sessions.

    Returns ``total_workouts``, ``total_time`` and ``avg_time`` (minutes) and
    ``count_by_day_type``.  Unfinished sessions are ignored.
    """

    completed = [s for s in sessions if s.completed]
    total_workouts = len(completed)
    total_time = sum(s.duration or 0 for s in completed)
    avg_time = total_time / total_workouts if total_workouts else 0
    count_by_day_type = {day: 0 for day in DAY_TYPES}
    for session in completed:
        count_by_day_type[session.day_type] += 1
    return {
        "total_workouts": total_workouts,
        "total_time": total_time,
        "avg_time": avg_time,
        "count_by_day_type": count_by_day_type,
    }


def completed_workout_count(sessions: Iterable[WorkoutSession]) -> int:
    return sum(1 for s in sessions if s.completed)


def recent_sessions(sessions: Iterable[WorkoutSession], limit: int) -> list[WorkoutSession]:
    return _newest_first(sessions)[:limit]


def completed_exercise_count(session: WorkoutSession) -> int:
    """Return how many exercises of ``session`` reached their target sets."""

    targets = {e.id: e.target_sets for e in get_day_plan(session.day_type)}
    return sum(
        1
        for progress in session.exercises
        if progress.exercise_id in targets
        and progress.is_complete(targets[progress.exercise_id])
    )


def session_progress(session: WorkoutSession) -> float:
    """Percentage of logged sets flagged as completed."""

    logged = sum(len(p.completed_sets) for p in session.exercises)
    if not logged:
        return 0.0
    done = sum(p.completed_count() for p in session.exercises)
    return done / logged * 100


def format_duration(seconds: int) -> str:
    """Format a stopwatch value as ``m:ss`` or ``h:mm:ss``."""

    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_minutes(minutes: float) -> str:
    """Format a minute count as ``Xh Ym`` or ``Ym``."""

    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_date(value: datetime) -> str:
    """Return ``value`` in local time as e.g. ``Mon, Aug 11, 2025``."""

    return ensure_aware(value).astimezone().strftime("%a, %b %d, %Y")
