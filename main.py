from __future__ import annotations

from kivymd.app import MDApp
from kivy.uix.screenmanager import ScreenManager, NoTransition
import logging

from liftbook import DEFAULT_DB_PATH
from liftbook.repository import SessionRepository
from liftbook.storage import SQLiteStorage
from liftbook.workout_session import SessionManager
from ui.screens import HomeScreen, ProgressScreen, SettingsScreen, WorkoutScreen


class LiftbookApp(MDApp):
    """Application root wiring storage, the session manager and screens."""

    repository: SessionRepository | None = None
    session_manager: SessionManager | None = None

    def build(self):
        logging.info("Using workout store at %s", DEFAULT_DB_PATH)
        self.repository = SessionRepository(SQLiteStorage(DEFAULT_DB_PATH))
        self.session_manager = SessionManager(self.repository)

        root = ScreenManager(transition=NoTransition())
        root.add_widget(HomeScreen(name="home"))
        root.add_widget(WorkoutScreen(name="workout"))
        root.add_widget(ProgressScreen(name="progress"))
        root.add_widget(SettingsScreen(name="settings"))
        root.current = "home"
        return root

    def on_stop(self):
        # an unfinished workout keeps whatever was auto-saved
        if self.session_manager:
            self.session_manager.cancel()


if __name__ == "__main__":
    LiftbookApp().run()
