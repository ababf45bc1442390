from __future__ import annotations

from flask import Blueprint, current_app, g

from powertrack.db import get_db
from powertrack.models.workout import add_exercise, list_exercises, weekly_schedule
from powertrack.services.form_parser import parse_day, parse_exercise_form

from . import form_data, load_user

bp = Blueprint("schedule", __name__, url_prefix="/schedule")
bp.before_request(load_user)


@bp.get("")
def week():
    """All seven days with their planned exercises."""
    schedule = weekly_schedule(get_db(), g.user_id)
    return {
        "days": [
            {"day": day, "exercises": [e.to_dict() for e in exercises]}
            for day, exercises in schedule.items()
        ]
    }


@bp.get("/<day>")
def day_view(day: str):
    day = parse_day(day)
    exercises = list_exercises(get_db(), g.user_id, day)
    return {"day": day, "exercises": [e.to_dict() for e in exercises]}


@bp.post("/<day>/exercises")
def create_exercise(day: str):
    """Add an exercise to the day's workout (workout is created on first use)."""
    day = parse_day(day)
    entry = parse_exercise_form(form_data())

    saved = add_exercise(get_db(), g.user_id, day, entry)
    current_app.logger.info(
        "exercise %s added to %s for user %s", saved.id, day, g.user_id
    )
    return saved.to_dict(), 201
