"""Parsing of numeric text entered by the user.

The core trusts the values it receives, so everything typed on screen goes
through these helpers first.  Invalid input raises :class:`ValueError` with a
message suitable for showing to the user.
"""

from __future__ import annotations

import math


def _to_float(text: str) -> float | None:
    """Return ``text`` as a finite float or ``None``."""

    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_set_input(weight_text: str, reps_text: str) -> tuple[float, int]:
    """Return ``(weight, reps)`` parsed from the exercise card fields.

    Blank fields count as ``0``.  Text that is not a number and negative
    values are rejected.  Reps are truncated to a whole number.
    """

    weight = _field_value(weight_text)
    reps = int(_field_value(reps_text))
    if weight < 0 or reps < 0:
        raise ValueError("Please enter valid positive numbers.")
    return weight, reps


def _field_value(text: str) -> float:
    if not str(text or "").strip():
        return 0.0
    value = _to_float(text)
    if value is None:
        raise ValueError("Please enter valid positive numbers.")
    return value


def parse_body_weight(text: str) -> float:
    """Return the body weight typed in settings; it must be positive."""

    weight = _to_float(text)
    if weight is None or weight <= 0:
        raise ValueError("Please enter a valid weight.")
    return weight
