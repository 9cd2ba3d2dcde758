"""Landing screen suggesting which day to train."""

from __future__ import annotations

from kivy.metrics import dp
from kivymd.app import MDApp
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDFlatButton, MDRaisedButton
from kivymd.uix.label import MDLabel
from kivymd.uix.list import MDList, TwoLineListItem
from kivymd.uix.screen import MDScreen

from liftbook import DAY_TYPES
from liftbook.history import (
    format_date,
    format_minutes,
    next_suggested_day,
    recent_sessions,
    weekly_completed_count,
)
from liftbook.plan import DAY_TITLES

RECENT_LIMIT = 3


class HomeScreen(MDScreen):
    """Quick start buttons, weekly count and the latest sessions."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        root = MDBoxLayout(orientation="vertical", padding=dp(16), spacing=dp(12))
        root.add_widget(MDLabel(text="Liftbook", font_style="H4", size_hint_y=None, height=dp(48)))
        self.day_buttons = MDBoxLayout(orientation="vertical", size_hint_y=None, spacing=dp(8))
        self.day_buttons.bind(minimum_height=self.day_buttons.setter("height"))
        root.add_widget(self.day_buttons)
        self.weekly_label = MDLabel(size_hint_y=None, height=dp(32))
        root.add_widget(self.weekly_label)
        self.recent_list = MDList()
        root.add_widget(self.recent_list)
        nav = MDBoxLayout(size_hint_y=None, height=dp(48), spacing=dp(8))
        nav.add_widget(MDFlatButton(text="Progress", on_release=lambda *_: self._goto("progress")))
        nav.add_widget(MDFlatButton(text="Settings", on_release=lambda *_: self._goto("settings")))
        root.add_widget(nav)
        self.add_widget(root)

    def on_pre_enter(self, *args):
        self.populate()
        return super().on_pre_enter(*args)

    def populate(self) -> None:
        repository = MDApp.get_running_app().repository
        settings = repository.get_settings()
        sessions = repository.list_sessions()
        suggested = next_suggested_day(
            settings.last_workout_date,
            settings.last_workout_type,
            settings.week_starts_with_day1,
        )

        self.day_buttons.clear_widgets()
        for day_type in DAY_TYPES:
            label = f"{day_type}: {DAY_TITLES[day_type]}"
            if day_type == suggested:
                label += "  (SUGGESTED)"
            self.day_buttons.add_widget(
                MDRaisedButton(
                    text=label,
                    on_release=lambda *_, d=day_type: self.start_workout(d),
                )
            )

        self.weekly_label.text = f"This week: {weekly_completed_count(sessions)} workouts"

        self.recent_list.clear_widgets()
        for session in recent_sessions(sessions, RECENT_LIMIT):
            self.recent_list.add_widget(
                TwoLineListItem(
                    text=f"{session.day_type} - {DAY_TITLES[session.day_type]}",
                    secondary_text=(
                        f"{format_date(session.date)}  "
                        f"{format_minutes(session.duration or 0)}"
                    ),
                )
            )

    def start_workout(self, day_type: str) -> None:
        workout = self.manager.get_screen("workout")
        workout.day_type = day_type
        self.manager.current = "workout"

    def _goto(self, name: str) -> None:
        self.manager.current = name
