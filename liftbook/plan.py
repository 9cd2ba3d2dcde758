"""Static two-day workout plan.

The catalog is compiled into the application and never changes at runtime.
Each day maps to an ordered tuple of :class:`ExerciseDefinition` entries;
sessions are built from this order so the position of an exercise in a
session always matches its position here.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from liftbook import DAY1, DAY2, DAY_TYPES


@dataclass(frozen=True)
class ExerciseDefinition:
    """A single planned exercise."""

    id: str
    name: str
    target_sets: int
    target_reps: int
    is_superset: bool = False
    superset_with: tuple[str, ...] = ()
    notes: str | None = None


DAY_TITLES = MappingProxyType(
    {
        DAY1: "Chest, Triceps, Quads/Glutes",
        DAY2: "Back, Shoulders, Biceps, Abs",
    }
)


WORKOUT_PLAN = MappingProxyType(
    {
        DAY1: (
            ExerciseDefinition("hip-thrusts", "Barbell Hip Thrusts", 4, 30),
            ExerciseDefinition(
                "chest-press",
                "Dumbbell Chest Press",
                3,
                15,
                is_superset=True,
                superset_with=("goblet-squat",),
            ),
            ExerciseDefinition(
                "goblet-squat",
                "Goblet Squat",
                3,
                20,
                is_superset=True,
                superset_with=("chest-press",),
            ),
            ExerciseDefinition(
                "glute-kickbacks",
                "Cable Glute Kickbacks",
                3,
                25,
                notes="20-30 per leg",
            ),
            ExerciseDefinition(
                "chest-fly",
                "Chest Fly",
                3,
                15,
                is_superset=True,
                superset_with=("step-ups",),
            ),
            ExerciseDefinition(
                "step-ups",
                "Step-Ups",
                3,
                15,
                is_superset=True,
                superset_with=("chest-fly",),
                notes="15 each leg",
            ),
            ExerciseDefinition(
                "overhead-triceps", "Seated Overhead Triceps Extension", 3, 15
            ),
            ExerciseDefinition("triceps-pushdown", "Cable Triceps Pushdown", 3, 15),
        ),
        DAY2: (
            ExerciseDefinition(
                "lat-pulldown",
                "Lat Pulldown",
                3,
                15,
                is_superset=True,
                superset_with=("seated-row",),
            ),
            ExerciseDefinition(
                "seated-row",
                "Seated Row",
                3,
                15,
                is_superset=True,
                superset_with=("lat-pulldown",),
            ),
            ExerciseDefinition(
                "lateral-raises",
                "Dumbbell Lateral Raises",
                3,
                20,
                is_superset=True,
                superset_with=("upright-row",),
            ),
            ExerciseDefinition(
                "upright-row",
                "Upright Row",
                3,
                20,
                is_superset=True,
                superset_with=("lateral-raises",),
            ),
            ExerciseDefinition("romanian-deadlifts", "Romanian Deadlifts", 3, 20),
            ExerciseDefinition(
                "incline-curls",
                "Incline Dumbbell Curls",
                3,
                17,
                notes="15-20 reps",
            ),
            ExerciseDefinition(
                "abs-circuit",
                "Lower Abs Circuit",
                3,
                1,
                notes=(
                    "Hanging leg raises (x15), Russian Twist, "
                    "Side V ups (x20/side), Side plank dips (x10/side)"
                ),
            ),
        ),
    }
)


def is_day_type(value) -> bool:
    """Return ``True`` if ``value`` names a day in the catalog."""

    return value in DAY_TYPES


def get_day_plan(day_type: str) -> tuple[ExerciseDefinition, ...]:
    """Return the ordered exercises for ``day_type``."""

    if not is_day_type(day_type):
        raise ValueError(f"Unknown day type '{day_type}'")
    return WORKOUT_PLAN[day_type]


def get_exercise(exercise_id: str) -> ExerciseDefinition | None:
    """Look up an exercise by id across both days."""

    for exercises in WORKOUT_PLAN.values():
        for exercise in exercises:
            if exercise.id == exercise_id:
                return exercise
    return None


def other_day(day_type: str) -> str:
    """Return the day-type that is not ``day_type``."""

    return DAY2 if day_type == DAY1 else DAY1


def validate_plan(plan=WORKOUT_PLAN) -> list[str]:
    """Return a list of consistency problems found in ``plan``.

    Ids must be unique within a day, targets must be positive and superset
    pairings must point at an exercise of the same day that links back.
    """

    errors: list[str] = []
    for day_type, exercises in plan.items():
        by_id = {}
        for exercise in exercises:
            if exercise.id in by_id:
                errors.append(f"{day_type}: duplicate exercise id '{exercise.id}'")
            by_id[exercise.id] = exercise
            if exercise.target_sets <= 0 or exercise.target_reps <= 0:
                errors.append(f"{day_type}: '{exercise.id}' needs positive targets")
        for exercise in exercises:
            if exercise.superset_with and not exercise.is_superset:
                errors.append(
                    f"{day_type}: '{exercise.id}' links a superset but is not flagged"
                )
            for partner_id in exercise.superset_with:
                partner = by_id.get(partner_id)
                if partner is None:
                    errors.append(
                        f"{day_type}: '{exercise.id}' pairs with unknown '{partner_id}'"
                    )
                elif exercise.id not in partner.superset_with:
                    errors.append(
                        f"{day_type}: superset '{exercise.id}' <-> '{partner_id}' "
                        "is not symmetric"
                    )
    return errors
