import importlib.util
import os
from types import SimpleNamespace

import pytest

from liftbook import DAY1
from liftbook.workout_session import IN_PROGRESS, NOT_STARTED

os.environ["KIVY_WINDOW"] = "mock"
# Skip tests entirely if Kivy (and KivyMD) are not installed
kivy_available = (
    importlib.util.find_spec("kivy") is not None
    and importlib.util.find_spec("kivymd") is not None
)

if kivy_available:
    os.environ.setdefault("KIVY_NO_ARGS", "1")
    os.environ.setdefault("KIVY_UNITTEST", "1")

    from kivy.app import App
    from ui.screens.workout_screen import WorkoutScreen

    @pytest.fixture
    def screen(monkeypatch, manager):
        """Workout screen without widgets, talking to ``manager``."""

        monkeypatch.setattr(
            App, "get_running_app", lambda: SimpleNamespace(session_manager=manager)
        )
        screen = WorkoutScreen.__new__(WorkoutScreen)
        screen.cards = {}
        screen.header = None
        screen._dialog = None
        screen.went_home = False
        screen._go_home = lambda: setattr(screen, "went_home", True)
        screen._build = lambda: None
        return screen


@pytest.mark.skipif(not kivy_available, reason="Kivy and KivyMD are required")
def test_complete_set_appends_parsed_values(screen, manager):
    manager.start(DAY1)
    screen.complete_set("hip-thrusts", "95.5", "30")
    screen.complete_set("hip-thrusts", "", "")
    sets = manager.session.progress_for("hip-thrusts").completed_sets
    assert [(s.weight, s.reps) for s in sets] == [(95.5, 30), (0.0, 0)]


@pytest.mark.skipif(not kivy_available, reason="Kivy and KivyMD are required")
def test_complete_set_rejects_negative_input(screen, manager):
    messages = []
    screen._show_message = lambda title, text: messages.append((title, text))
    manager.start(DAY1)
    screen.complete_set("hip-thrusts", "-10", "12")
    assert messages == [("Invalid Input", "Please enter valid positive numbers.")]
    assert manager.session.progress_for("hip-thrusts").completed_sets == []
    assert manager.repository.list_sessions() == []


@pytest.mark.skipif(not kivy_available, reason="Kivy and KivyMD are required")
def test_remove_set_from_screen(screen, manager):
    manager.start(DAY1)
    for weight in ("100", "105", "110"):
        screen.complete_set("hip-thrusts", weight, "30")
    screen.remove_set("hip-thrusts", 0)
    sets = manager.session.progress_for("hip-thrusts").completed_sets
    assert [s.weight for s in sets] == [105.0, 110.0]


@pytest.mark.skipif(not kivy_available, reason="Kivy and KivyMD are required")
def test_enter_without_day_redirects_home(screen, manager):
    screen.day_type = None
    screen.on_pre_enter()
    assert screen.went_home
    assert manager.state == NOT_STARTED


@pytest.mark.skipif(not kivy_available, reason="Kivy and KivyMD are required")
def test_enter_with_unknown_day_redirects_home(screen, manager):
    screen.day_type = "Day3"
    screen.on_pre_enter()
    assert screen.went_home
    assert manager.state == NOT_STARTED


@pytest.mark.skipif(not kivy_available, reason="Kivy and KivyMD are required")
def test_enter_with_day_starts_workout(screen, manager):
    screen.day_type = DAY1
    screen.on_pre_enter()
    assert not screen.went_home
    assert manager.state == IN_PROGRESS
    assert manager.on_tick == screen._on_tick


@pytest.mark.skipif(not kivy_available, reason="Kivy and KivyMD are required")
def test_complete_set_rejects_non_numeric_input(screen, manager):
    messages = []
    screen._show_message = lambda title, text: messages.append((title, text))
    manager.start(DAY1)
    screen.complete_set("hip-thrusts", "abc", "ten")
    assert messages == [("Invalid Input", "Please enter valid positive numbers.")]
    assert manager.session.progress_for("hip-thrusts").completed_sets == []
    assert manager.repository.list_sessions() == []


@pytest.mark.skipif(not kivy_available, reason="Kivy and KivyMD are required")
def test_complete_set_after_cancel_is_ignored(screen, manager):
    manager.start(DAY1)
    manager.cancel()
    screen.complete_set("hip-thrusts", "100", "30")
    assert manager.session is None
    assert manager.repository.list_sessions() == []
