from __future__ import annotations

"""
Demo data for PowerTrack.

Adds a typical weekly schedule and a week of daily metrics for one user.

Usage:
    flask --app powertrack init-db
    flask --app powertrack seed-demo --user demo

Running it twice does not duplicate anything: exercises are only added to
days that have none, metrics go through the reconciler like a form submit.
"""

from datetime import timedelta

import click
from flask import current_app
from flask.cli import with_appcontext

from powertrack.db import get_db, init_db
from powertrack.models.completed import apply_action, find_completed_workout
from powertrack.models.records import DAYS, ExerciseEntry, MetricsUpdate, WorkoutKey
from powertrack.models.workout import add_exercise, list_exercises
from powertrack.services.reconciler import reconcile

# day -> (name, sets, reps, weight kg)
SCHEDULE: dict[str, list[tuple[str, int, int, float]]] = {
    "Monday": [("Bench Press", 4, 8, 60.0), ("Incline Dumbbell Press", 3, 10, 22.5)],
    "Tuesday": [("Back Squat", 5, 5, 80.0), ("Leg Press", 3, 12, 120.0)],
    "Thursday": [("Barbell Row", 4, 8, 55.0), ("Lat Pulldown", 3, 10, 50.0)],
    "Friday": [("Overhead Press", 4, 6, 40.0), ("Lateral Raise", 3, 15, 8.0)],
    "Saturday": [("Deadlift", 3, 5, 100.0), ("Plank", 3, 1, 0.0)],
}


def seed_schedule(db, user_id: str) -> int:
    added = 0
    for day, exercises in SCHEDULE.items():
        if list_exercises(db, user_id, day):
            continue
        for name, sets, reps, weight in exercises:
            add_exercise(db, user_id, day, ExerciseEntry(name=name, sets=sets, reps=reps, weight=weight))
            added += 1
    return added


def seed_metrics(db, user_id: str, days: int = 7) -> int:
    today = current_app.config["CLOCK"]().date()
    saved = 0
    for offset in range(days):
        day_date = today - timedelta(days=offset)
        key = WorkoutKey(user_id, DAYS[day_date.weekday()], day_date)
        incoming = MetricsUpdate(
            calories=2000.0 + 50 * offset,
            water_intake=2000.0 + 100 * (offset % 3),
            weight=round(80.0 + 0.2 * offset, 1),
        )
        apply_action(db, reconcile(key, incoming, find_completed_workout(db, key)))
        saved += 1
    return saved


@click.command("seed-demo")
@click.option("--user", "user_id", default="demo", show_default=True, help="User id to seed.")
@click.option("--days", default=7, show_default=True, help="Days of metrics to add.")
@with_appcontext
def seed_demo_command(user_id: str, days: int) -> None:
    """Fill the database with a demo schedule and recent metrics."""
    init_db()
    db = get_db()
    exercises = seed_schedule(db, user_id)
    metrics = seed_metrics(db, user_id, days)
    click.echo(f"Seeded {exercises} exercises and {metrics} days of metrics for '{user_id}'.")
