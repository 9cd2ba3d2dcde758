"""History and statistics for a selectable period."""

from __future__ import annotations

import logging

from kivy.metrics import dp
from kivy.properties import StringProperty
from kivy.uix.scrollview import ScrollView
from kivymd.app import MDApp
from kivymd.toast import toast
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDFlatButton, MDRaisedButton
from kivymd.uix.label import MDLabel
from kivymd.uix.list import MDList, TwoLineListItem
from kivymd.uix.screen import MDScreen

from liftbook import DAY1, DAY2, DEFAULT_EXPORT_DIR
from liftbook.history import (
    PERIODS,
    aggregate_stats,
    format_date,
    format_minutes,
    recent_sessions,
    sessions_within,
)
from liftbook.plan import DAY_TITLES

HISTORY_LIMIT = 10


class ProgressScreen(MDScreen):
    """Show totals and the latest workouts within ``selected_period``."""

    selected_period = StringProperty("month")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        root = MDBoxLayout(orientation="vertical", padding=dp(16), spacing=dp(8))
        header = MDBoxLayout(size_hint_y=None, height=dp(48))
        header.add_widget(MDLabel(text="Progress", font_style="H5"))
        header.add_widget(MDFlatButton(text="Export", on_release=lambda *_: self.export_data()))
        root.add_widget(header)

        periods = MDBoxLayout(size_hint_y=None, height=dp(48), spacing=dp(8))
        for period in PERIODS:
            periods.add_widget(
                MDRaisedButton(
                    text=period.title(),
                    on_release=lambda *_, p=period: setattr(self, "selected_period", p),
                )
            )
        root.add_widget(periods)

        self.stats_label = MDLabel(size_hint_y=None, height=dp(96))
        root.add_widget(self.stats_label)
        scroll = ScrollView()
        self.history_list = MDList()
        scroll.add_widget(self.history_list)
        root.add_widget(scroll)
        root.add_widget(
            MDFlatButton(text="Back", on_release=lambda *_: setattr(self.manager, "current", "home"))
        )
        self.add_widget(root)

    def on_selected_period(self, *_):
        self.populate()

    def on_pre_enter(self, *args):
        self.populate()
        return super().on_pre_enter(*args)

    def populate(self) -> None:
        sessions = sessions_within(
            MDApp.get_running_app().repository.list_sessions(), self.selected_period
        )
        stats = aggregate_stats(sessions)
        counts = stats["count_by_day_type"]
        self.stats_label.text = (
            f"Workouts: {stats['total_workouts']}\n"
            f"Total time: {format_minutes(stats['total_time'])}\n"
            f"Average: {format_minutes(stats['avg_time'])}\n"
            f"Day 1: {counts[DAY1]}   Day 2: {counts[DAY2]}"
        )
        self.history_list.clear_widgets()
        for session in recent_sessions(sessions, HISTORY_LIMIT):
            status = "" if session.completed else "  (incomplete)"
            self.history_list.add_widget(
                TwoLineListItem(
                    text=f"{DAY_TITLES[session.day_type]}{status}",
                    secondary_text=(
                        f"{format_date(session.date)}  "
                        f"{format_minutes(session.duration or 0)}"
                    ),
                )
            )

    def export_data(self) -> None:
        repository = MDApp.get_running_app().repository
        try:
            path = repository.export_to_file(DEFAULT_EXPORT_DIR)
        except PermissionError:
            logging.exception("Export failed: permission denied")
            toast("Export failed: permission denied")
            return
        except OSError as exc:
            logging.exception("Export failed")
            toast(f"Export failed: {exc}")
            return
        toast(f"Exported to {path}")
