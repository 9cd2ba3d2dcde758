import pytest

from liftbook import DAY1, DAY2
from liftbook.plan import (
    WORKOUT_PLAN,
    ExerciseDefinition,
    get_day_plan,
    get_exercise,
    other_day,
    validate_plan,
)


def test_catalog_is_consistent():
    assert validate_plan() == []


def test_day_plans_keep_order():
    day1 = [e.id for e in get_day_plan(DAY1)]
    assert day1[0] == "hip-thrusts"
    assert day1[-1] == "triceps-pushdown"
    assert len(day1) == 8
    assert len(get_day_plan(DAY2)) == 7


def test_unknown_day_rejected():
    with pytest.raises(ValueError):
        get_day_plan("Day3")


def test_superset_pairs_are_symmetric():
    chest_press = get_exercise("chest-press")
    squat = get_exercise("goblet-squat")
    assert chest_press.superset_with == ("goblet-squat",)
    assert squat.superset_with == ("chest-press",)


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        WORKOUT_PLAN["Day3"] = ()
    with pytest.raises(AttributeError):
        get_exercise("step-ups").target_sets = 5


def test_other_day():
    assert other_day(DAY1) == DAY2
    assert other_day(DAY2) == DAY1


def test_validate_plan_reports_broken_pairing():
    plan = {
        DAY1: (
            ExerciseDefinition("a", "A", 3, 10, is_superset=True, superset_with=("b",)),
            ExerciseDefinition("b", "B", 3, 10, is_superset=True),
            ExerciseDefinition("a", "A again", 0, 10),
        )
    }
    errors = validate_plan(plan)
    assert any("duplicate" in e for e in errors)
    assert any("not symmetric" in e for e in errors)
    assert any("positive targets" in e for e in errors)
