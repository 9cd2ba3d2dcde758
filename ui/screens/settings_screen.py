"""Profile settings, export and data reset."""

from __future__ import annotations

import logging

from kivy.metrics import dp
from kivymd.app import MDApp
from kivymd.toast import toast
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDFlatButton, MDRaisedButton
from kivymd.uix.dialog import MDDialog
from kivymd.uix.label import MDLabel
from kivymd.uix.screen import MDScreen
from kivymd.uix.selectioncontrol import MDSwitch
from kivymd.uix.textfield import MDTextField

from liftbook import DEFAULT_EXPORT_DIR
from liftbook.history import completed_workout_count
from ui.validation import parse_body_weight


class SettingsScreen(MDScreen):
    """Edit body weight and week start; export or clear stored data."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        root = MDBoxLayout(orientation="vertical", padding=dp(16), spacing=dp(12))
        root.add_widget(MDLabel(text="Settings", font_style="H5", size_hint_y=None, height=dp(48)))

        weight_row = MDBoxLayout(size_hint_y=None, height=dp(56), spacing=dp(8))
        self.weight_field = MDTextField(hint_text="Body weight (lbs)", input_filter="float")
        weight_row.add_widget(self.weight_field)
        weight_row.add_widget(MDRaisedButton(text="Save", on_release=lambda *_: self.save_weight()))
        root.add_widget(weight_row)

        week_row = MDBoxLayout(size_hint_y=None, height=dp(48))
        week_row.add_widget(MDLabel(text="Week starts with Day 1"))
        self.week_switch = MDSwitch()
        self.week_switch.bind(active=self.on_week_toggle)
        week_row.add_widget(self.week_switch)
        root.add_widget(week_row)

        self.total_label = MDLabel(size_hint_y=None, height=dp(32))
        root.add_widget(self.total_label)

        root.add_widget(MDRaisedButton(text="Export data", on_release=lambda *_: self.export_data()))
        root.add_widget(MDFlatButton(text="Clear all data", on_release=lambda *_: self.confirm_clear()))
        root.add_widget(MDBoxLayout())
        root.add_widget(
            MDFlatButton(text="Back", on_release=lambda *_: setattr(self.manager, "current", "home"))
        )
        self.add_widget(root)
        self._populating = False

    @property
    def repository(self):
        return MDApp.get_running_app().repository

    def on_pre_enter(self, *args):
        self.populate()
        return super().on_pre_enter(*args)

    def populate(self) -> None:
        settings = self.repository.get_settings()
        self._populating = True
        self.weight_field.text = f"{settings.body_weight:g}"
        self.week_switch.active = settings.week_starts_with_day1
        self._populating = False
        total = completed_workout_count(self.repository.list_sessions())
        self.total_label.text = f"Completed workouts: {total}"

    def save_weight(self) -> None:
        try:
            weight = parse_body_weight(self.weight_field.text)
        except ValueError as exc:
            self._alert("Invalid Weight", str(exc))
            return
        self.repository.update_settings(body_weight=weight)
        toast("Body weight saved")

    def on_week_toggle(self, switch, value: bool) -> None:
        if self._populating:
            return
        self.repository.update_settings(week_starts_with_day1=bool(value))

    def export_data(self) -> None:
        try:
            path = self.repository.export_to_file(DEFAULT_EXPORT_DIR)
        except PermissionError:
            logging.exception("Export failed: permission denied")
            toast("Export failed: permission denied")
            return
        except OSError as exc:
            logging.exception("Export failed")
            toast(f"Export failed: {exc}")
            return
        toast(f"Exported to {path}")

    def confirm_clear(self) -> None:
        def cancel(*_):
            dialog.dismiss()

        def clear(*_):
            dialog.dismiss()
            self.repository.clear_all()
            self.populate()
            toast("All data has been cleared.")

        dialog = MDDialog(
            title="Clear All Data",
            text=(
                "Are you sure you want to clear all workout data? "
                "This action cannot be undone."
            ),
            buttons=[
                MDFlatButton(text="Cancel", on_release=cancel),
                MDRaisedButton(text="Clear Data", on_release=clear),
            ],
        )
        dialog.open()

    def _alert(self, title: str, text: str) -> None:
        def close(*_):
            dialog.dismiss()

        dialog = MDDialog(
            title=title,
            text=text,
            buttons=[MDRaisedButton(text="OK", on_release=close)],
        )
        dialog.open()
