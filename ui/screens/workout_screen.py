"""Screen shown while a workout is in progress."""

from __future__ import annotations

import logging

from kivy.metrics import dp
from kivy.uix.scrollview import ScrollView
from kivymd.app import MDApp
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDFlatButton, MDRaisedButton
from kivymd.uix.dialog import MDDialog
from kivymd.uix.screen import MDScreen

from liftbook.plan import get_day_plan
from ui.exercise_card import ExerciseCard, WorkoutHeader
from ui.validation import parse_set_input


class WorkoutScreen(MDScreen):
    """Log sets for the day chosen on the home screen.

    ``day_type`` must be set before the screen is entered; without it the
    user is sent back home.
    """

    day_type: str | None = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.cards: dict[str, ExerciseCard] = {}
        self.header: WorkoutHeader | None = None
        self._dialog = None

    @property
    def session_manager(self):
        return MDApp.get_running_app().session_manager

    def on_pre_enter(self, *args):
        if not self.day_type:
            self._go_home()
            return super().on_pre_enter(*args)
        try:
            self.session_manager.start(self.day_type)
        except ValueError:
            logging.exception("Cannot start workout for %s", self.day_type)
            self._go_home()
            return super().on_pre_enter(*args)
        self.session_manager.on_tick = self._on_tick
        self._build()
        return super().on_pre_enter(*args)

    def on_leave(self, *args):
        self.session_manager.on_tick = None
        self.day_type = None
        return super().on_leave(*args)

    def _build(self) -> None:
        core = self.session_manager
        self.clear_widgets()
        self.cards = {}
        root = MDBoxLayout(orientation="vertical")
        plan = get_day_plan(self.day_type)
        self.header = WorkoutHeader(self.day_type, len(plan))
        root.add_widget(self.header)

        scroll = ScrollView()
        body = MDBoxLayout(orientation="vertical", size_hint_y=None, spacing=dp(8), padding=dp(8))
        body.bind(minimum_height=body.setter("height"))
        for exercise in plan:
            card = ExerciseCard(
                exercise,
                last_set=core.last_sets.get(exercise.id),
                on_complete=lambda w, r, ex_id=exercise.id: self.complete_set(ex_id, w, r),
                on_remove=lambda idx, ex_id=exercise.id: self.remove_set(ex_id, idx),
            )
            self.cards[exercise.id] = card
            body.add_widget(card)
        scroll.add_widget(body)
        root.add_widget(scroll)

        actions = MDBoxLayout(size_hint_y=None, height=dp(56), spacing=dp(8), padding=dp(8))
        actions.add_widget(MDFlatButton(text="Cancel", on_release=lambda *_: self.confirm_cancel()))
        actions.add_widget(MDRaisedButton(text="Finish", on_release=lambda *_: self.finish()))
        root.add_widget(actions)
        self.add_widget(root)
        self._refresh_all()

    def _refresh_all(self) -> None:
        core = self.session_manager
        if core.session is None:
            return
        for progress in core.session.exercises:
            card = self.cards.get(progress.exercise_id)
            if card:
                card.refresh(
                    progress.completed_sets,
                    core.is_exercise_complete(progress.exercise_id),
                )
        self._on_tick(core.elapsed_seconds())

    def _on_tick(self, elapsed: int) -> None:
        if self.header:
            self.header.update(elapsed, self.session_manager.completed_exercise_count())

    def complete_set(self, exercise_id: str, weight_text: str, reps_text: str) -> None:
        try:
            weight, reps = parse_set_input(weight_text, reps_text)
        except ValueError as exc:
            self._show_message("Invalid Input", str(exc))
            return
        session = self.session_manager.session
        if session is None:
            return
        progress = session.progress_for(exercise_id)
        if progress is None:
            return
        self.session_manager.record_set(exercise_id, len(progress.completed_sets), weight, reps)
        self._refresh_all()

    def remove_set(self, exercise_id: str, set_index: int) -> None:
        self.session_manager.remove_set(exercise_id, set_index)
        self._refresh_all()

    def finish(self) -> None:
        session = self.session_manager.finish()
        if session is None:
            return

        def go(screen_name):
            dialog.dismiss()
            self.manager.current = screen_name

        dialog = MDDialog(
            title="Workout Complete!",
            text=(
                f"Great job! You completed your {session.day_type} workout "
                f"in {session.duration} minutes."
            ),
            buttons=[
                MDFlatButton(text="View Progress", on_release=lambda *_: go("progress")),
                MDRaisedButton(text="Go Home", on_release=lambda *_: go("home")),
            ],
        )
        dialog.open()

    def confirm_cancel(self) -> None:
        def keep(*_):
            dialog.dismiss()

        def cancel(*_):
            dialog.dismiss()
            self.session_manager.cancel()
            self._go_home()

        dialog = MDDialog(
            title="Cancel Workout",
            text="Are you sure you want to cancel? Your progress will be lost.",
            buttons=[
                MDFlatButton(text="Keep Going", on_release=keep),
                MDRaisedButton(text="Cancel Workout", on_release=cancel),
            ],
        )
        dialog.open()

    def _show_message(self, title: str, text: str) -> None:
        def close(*_):
            self._dialog.dismiss()

        self._dialog = MDDialog(
            title=title,
            text=text,
            buttons=[MDRaisedButton(text="OK", on_release=close)],
        )
        self._dialog.open()

    def _go_home(self) -> None:
        if self.manager:
            self.manager.current = "home"
