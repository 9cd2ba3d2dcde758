"""UI screen modules for Liftbook."""

from .home_screen import HomeScreen
from .progress_screen import ProgressScreen
from .settings_screen import SettingsScreen
from .workout_screen import WorkoutScreen

__all__ = [
    "HomeScreen",
    "ProgressScreen",
    "SettingsScreen",
    "WorkoutScreen",
]
