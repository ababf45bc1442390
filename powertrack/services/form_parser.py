"""
Utilities for parsing the metrics and exercise forms.

Forms arrive either as ``request.form`` or as a decoded JSON body; both are
plain mappings here. Numbers may use a decimal comma ("72,5").
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional

from powertrack.errors import ValidationError
from powertrack.models.records import DAYS, ExerciseEntry, MetricsUpdate

# form name -> accepted aliases (the web client sends camelCase)
METRIC_ALIASES = {
    "calories": ("calories",),
    "water_intake": ("water_intake", "waterIntake"),
    "weight": ("weight",),
}

# sets/reps must fit a SQLite INTEGER
MAX_COUNT = 2**31 - 1


def _blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _to_float(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError("boolean is not a number")
    try:
        if isinstance(raw, (int, float)):
            value = float(raw)
        else:
            value = float(str(raw).replace(",", ".").strip())
    except OverflowError:
        raise ValueError("number too large")
    if value != value or value in (float("inf"), float("-inf")):
        raise ValueError("not a finite number")
    return value


def _to_int(raw: Any) -> int:
    value = _to_float(raw)
    if not value.is_integer():
        raise ValueError("not a whole number")
    return int(value)


def _require_mapping(form: Any) -> Mapping[str, Any]:
    """JSON bodies may be lists or scalars; only objects are forms."""
    if not isinstance(form, Mapping):
        raise ValidationError({"body": "expected an object"})
    return form


def _lookup(form: Mapping[str, Any], names) -> Any:
    for name in names:
        if name in form:
            return form.get(name)
    return None


def parse_metrics_form(form: Mapping[str, Any]) -> MetricsUpdate:
    """Calories, water intake (ml) and weight (kg); each optional, none negative."""
    form = _require_mapping(form)
    values: Dict[str, Optional[float]] = {}
    errors: Dict[str, str] = {}

    for field, names in METRIC_ALIASES.items():
        raw = _lookup(form, names)
        if _blank(raw):
            values[field] = None
            continue
        try:
            value = _to_float(raw)
        except (TypeError, ValueError):
            errors[field] = "must be a number"
            continue
        if value < 0:
            errors[field] = "cannot be negative"
            continue
        values[field] = value

    if errors:
        raise ValidationError(errors)
    return MetricsUpdate(**values)


def parse_exercise_form(form: Mapping[str, Any]) -> ExerciseEntry:
    """
    Builds an unsaved ExerciseEntry.
    Defaults as in the add-exercise dialog: 3 sets, 10 reps, 0 kg.
    """
    form = _require_mapping(form)
    errors: Dict[str, str] = {}

    name = str(form.get("name") or "").strip()
    if len(name) < 2:
        errors["name"] = "must be at least 2 characters"

    def number(field: str, default, convert, minimum, message, maximum=None):
        raw = form.get(field)
        if _blank(raw):
            return default
        try:
            value = convert(raw)
        except (TypeError, ValueError):
            errors[field] = "must be a whole number" if convert is _to_int else "must be a number"
            return default
        if value < minimum:
            errors[field] = message
        elif maximum is not None and value > maximum:
            errors[field] = f"must be at most {maximum}"
        return value

    sets = number("sets", 3, _to_int, 1, "must have at least 1 set", MAX_COUNT)
    reps = number("reps", 10, _to_int, 1, "must have at least 1 rep", MAX_COUNT)
    weight = number("weight", 0.0, _to_float, 0, "cannot be negative")

    notes = str(form.get("notes") or "").strip() or None

    if errors:
        raise ValidationError(errors)
    return ExerciseEntry(name=name, sets=sets, reps=reps, weight=weight, notes=notes)


def parse_day(value: Optional[str]) -> str:
    """'monday' / 'MONDAY' -> 'Monday'."""
    normalized = (value or "").strip().capitalize()
    if normalized not in DAYS:
        raise ValidationError({"day": f"unknown weekday {value!r}"})
    return normalized


def parse_date(value: Optional[str], default: date) -> date:
    if _blank(value):
        return default
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError({"date": "expected YYYY-MM-DD"})
