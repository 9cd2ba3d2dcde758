"""Lifecycle of the workout currently being performed.

:class:`SessionManager` owns at most one in-progress
:class:`~liftbook.models.WorkoutSession`.  Every set that is recorded or
removed is saved straight away through the
:class:`~liftbook.repository.SessionRepository` so progress survives a crash.
While a workout is running a repeating clock event reports the elapsed time
to the presentation layer; the event is cancelled whenever the workout
finishes, is cancelled or is replaced by a new one.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from liftbook import TIMER_INTERVAL
from liftbook.history import last_sets_for_day
from liftbook.models import CompletedSet, ExerciseProgress, WorkoutSession
from liftbook.plan import get_day_plan
from liftbook.repository import SessionRepository
from liftbook.utils import utcnow

NOT_STARTED = "not_started"
IN_PROGRESS = "in_progress"
FINISHED = "finished"


def generate_session_id() -> str:
    """Return a new unique session identifier."""

    return uuid.uuid4().hex


class SessionManager:
    """Create, update and finish workout sessions.

    ``clock`` must provide ``schedule_interval(callback, interval)`` returning
    an event with ``cancel()``, like :data:`kivy.clock.Clock` which is used
    when no clock is given.  ``now`` returns the current aware datetime.
    """

    def __init__(
        self,
        repository: SessionRepository,
        *,
        clock=None,
        now: Callable = utcnow,
        on_tick: Callable[[int], None] | None = None,
    ) -> None:
        self.repository = repository
        self._clock = clock
        self._now = now
        self.on_tick = on_tick
        self.state = NOT_STARTED
        self.session: WorkoutSession | None = None
        # presentation hint: last weight/reps per exercise id
        self.last_sets: dict[str, dict] = {}
        self._targets: dict[str, int] = {}
        self._event = None

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    @property
    def clock(self):
        if self._clock is None:
            from kivy.clock import Clock

            self._clock = Clock
        return self._clock

    def _start_timer(self) -> None:
        self._stop_timer()
        self._event = self.clock.schedule_interval(self._tick, TIMER_INTERVAL)

    def _stop_timer(self) -> None:
        if self._event is not None:
            self._event.cancel()
            self._event = None

    @property
    def timer_running(self) -> bool:
        return self._event is not None

    def _tick(self, dt) -> None:
        if self.on_tick:
            self.on_tick(self.elapsed_seconds())

    def elapsed_seconds(self) -> int:
        """Whole seconds since the current session started."""

        if self.session is None:
            return 0
        return max(0, int((self._now() - self.session.date).total_seconds()))

    def elapsed_minutes(self) -> int:
        return self.elapsed_seconds() // 60

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, day_type: str) -> WorkoutSession:
        """Begin a new session for ``day_type``.

        Raises :class:`ValueError` if ``day_type`` is not in the plan.  A
        session already in progress is abandoned without being saved again.
        """

        plan = get_day_plan(day_type)
        self._stop_timer()
        self.last_sets = last_sets_for_day(self.repository.list_sessions(), day_type)
        self._targets = {exercise.id: exercise.target_sets for exercise in plan}
        self.session = WorkoutSession(
            id=generate_session_id(),
            date=self._now(),
            day_type=day_type,
            exercises=[ExerciseProgress(exercise.id) for exercise in plan],
            completed=False,
        )
        self.state = IN_PROGRESS
        self._start_timer()
        logging.info("Started %s workout %s", day_type, self.session.id)
        return self.session

    def _active_progress(self, exercise_id: str) -> ExerciseProgress | None:
        if self.state != IN_PROGRESS or self.session is None:
            return None
        return self.session.progress_for(exercise_id)

    def save_progress(self) -> bool:
        """Upsert the current session with a freshly computed duration."""

        if self.session is None:
            return False
        self.session.duration = self.elapsed_minutes()
        return self.repository.upsert_session(self.session)

    def record_set(
        self, exercise_id: str, set_index: int, weight: float, reps: int
    ) -> bool:
        """Log a set at ``set_index`` and save the session.

        ``set_index`` equal to the number of logged sets appends, an existing
        index is overwritten.  Returns ``False`` without changes when there is
        no active session, the exercise is unknown or the index is past the
        end.  ``weight`` and ``reps`` are expected to be validated already.
        """

        progress = self._active_progress(exercise_id)
        if progress is None:
            return False
        sets = progress.completed_sets
        if set_index < 0 or set_index > len(sets):
            return False
        new_set = CompletedSet(
            weight=weight, reps=reps, completed=True, timestamp=self._now().timestamp()
        )
        if set_index == len(sets):
            sets.append(new_set)
        else:
            sets[set_index] = new_set
        self.save_progress()
        return True

    def remove_set(self, exercise_id: str, set_index: int) -> bool:
        """Delete the set at ``set_index``; later sets move up one place."""

        progress = self._active_progress(exercise_id)
        if progress is None:
            return False
        if not 0 <= set_index < len(progress.completed_sets):
            return False
        del progress.completed_sets[set_index]
        self.save_progress()
        return True

    def finish(self) -> WorkoutSession | None:
        """Mark the session completed, save it and remember it in settings."""

        if self.state != IN_PROGRESS or self.session is None:
            return None
        self._stop_timer()
        self.session.completed = True
        self.save_progress()
        self.repository.update_settings(
            last_workout_date=self.session.date,
            last_workout_type=self.session.day_type,
        )
        self.state = FINISHED
        logging.info(
            "Finished %s workout %s in %s min",
            self.session.day_type,
            self.session.id,
            self.session.duration,
        )
        return self.session

    def cancel(self) -> None:
        """Abandon the current session.

        Nothing is written; sets saved by earlier :meth:`record_set` or
        :meth:`remove_set` calls stay in storage as an unfinished session.
        """

        if self.state != IN_PROGRESS:
            return
        self._stop_timer()
        logging.info("Cancelled workout %s", self.session.id if self.session else None)
        self.session = None
        self.last_sets = {}
        self._targets = {}
        self.state = NOT_STARTED

    # ------------------------------------------------------------------
    # Queries for the presentation layer
    # ------------------------------------------------------------------

    def is_exercise_complete(self, exercise_id: str) -> bool:
        """Return ``True`` once the exercise reached its target set count."""

        if self.session is None or exercise_id not in self._targets:
            return False
        progress = self.session.progress_for(exercise_id)
        return progress is not None and progress.is_complete(self._targets[exercise_id])

    def completed_exercise_count(self) -> int:
        return sum(1 for exercise_id in self._targets if self.is_exercise_complete(exercise_id))

    def total_exercise_count(self) -> int:
        return len(self._targets)
