from kivy.metrics import dp
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDFlatButton, MDRaisedButton
from kivymd.uix.card import MDCard
from kivymd.uix.label import MDLabel
from kivymd.uix.textfield import MDTextField

from liftbook.history import format_duration
from liftbook.plan import DAY_TITLES


def _fmt_weight(weight: float) -> str:
    return f"{weight:g}"


class WorkoutHeader(MDBoxLayout):
    """Title, stopwatch and completed exercise count for a running workout."""

    def __init__(self, day_type: str, total_exercises: int, **kwargs):
        super().__init__(
            orientation="vertical",
            size_hint_y=None,
            height=dp(72),
            padding=(dp(16), dp(8)),
            **kwargs,
        )
        self.total_exercises = total_exercises
        self.title_label = MDLabel(
            text=f"{DAY_TITLES[day_type]}  [{day_type}]", font_style="H6"
        )
        self.stats_label = MDLabel(theme_text_color="Secondary")
        self.add_widget(self.title_label)
        self.add_widget(self.stats_label)
        self.update(0, 0)

    def update(self, elapsed_seconds: int, completed_exercises: int) -> None:
        self.stats_label.text = (
            f"{format_duration(elapsed_seconds)}   "
            f"{completed_exercises}/{self.total_exercises} exercises"
        )


class ExerciseCard(MDCard):
    """Card for logging the sets of one planned exercise.

    ``on_complete(weight_text, reps_text)`` is called when the user logs a
    set and ``on_remove(set_index)`` when a logged set is deleted.  Parsing
    of the text fields is left to the caller.
    """

    def __init__(self, exercise, last_set=None, on_complete=None, on_remove=None, **kwargs):
        super().__init__(
            orientation="vertical",
            size_hint_y=None,
            padding=dp(12),
            spacing=dp(6),
            **kwargs,
        )
        self.bind(minimum_height=self.setter("height"))
        self.exercise = exercise
        self.on_complete = on_complete
        self.on_remove = on_remove

        title = exercise.name + ("  SUPERSET" if exercise.is_superset else "")
        self.add_widget(self._label(title, font_style="Subtitle1"))
        self.add_widget(
            self._label(
                f"Target: {exercise.target_sets} sets x {exercise.target_reps} reps",
                theme_text_color="Secondary",
            )
        )
        if exercise.notes:
            self.add_widget(self._label(exercise.notes, theme_text_color="Hint"))
        if last_set:
            self.add_widget(
                self._label(
                    f"Last: {_fmt_weight(last_set['weight'])}lbs x {last_set['reps']} reps",
                    theme_text_color="Secondary",
                )
            )

        self.sets_box = MDBoxLayout(orientation="vertical", size_hint_y=None, spacing=dp(4))
        self.sets_box.bind(minimum_height=self.sets_box.setter("height"))
        self.add_widget(self.sets_box)

        row = MDBoxLayout(orientation="horizontal", size_hint_y=None, height=dp(56), spacing=dp(8))
        self.weight_field = MDTextField(
            hint_text="Weight (lbs)",
            text=_fmt_weight(last_set["weight"]) if last_set else "0",
            input_filter="float",
        )
        self.reps_field = MDTextField(
            hint_text="Reps", text=str(exercise.target_reps), input_filter="int"
        )
        row.add_widget(self.weight_field)
        row.add_widget(self.reps_field)
        row.add_widget(
            MDRaisedButton(text="Log set", on_release=lambda *_: self._complete())
        )
        self.add_widget(row)

    @staticmethod
    def _label(text: str, **kwargs) -> MDLabel:
        label = MDLabel(text=text, size_hint_y=None, **kwargs)
        label.bind(texture_size=lambda inst, size: setattr(inst, "height", size[1]))
        return label

    def _complete(self) -> None:
        if self.on_complete:
            self.on_complete(self.weight_field.text, self.reps_field.text)

    def refresh(self, completed_sets, is_complete: bool) -> None:
        """Redraw the logged sets and completion state."""

        self.sets_box.clear_widgets()
        for idx, completed_set in enumerate(completed_sets):
            row = MDBoxLayout(orientation="horizontal", size_hint_y=None, height=dp(36))
            row.add_widget(
                MDLabel(
                    text=(
                        f"Set {idx + 1}: {_fmt_weight(completed_set.weight)}lbs"
                        f" x {completed_set.reps} reps"
                    )
                )
            )
            row.add_widget(
                MDFlatButton(
                    text="Remove",
                    on_release=lambda *_, i=idx: self.on_remove and self.on_remove(i),
                )
            )
            self.sets_box.add_widget(row)
        self.md_bg_color = (0.86, 0.99, 0.91, 1) if is_complete else (1, 1, 1, 1)
