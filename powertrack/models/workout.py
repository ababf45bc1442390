from __future__ import annotations

import sqlite3
from typing import Dict, List, Optional

from powertrack.errors import StoreError
from powertrack.models.records import DAYS, ExerciseEntry, WorkoutRecord


def find_workout(db: sqlite3.Connection, user_id: str, day: str) -> Optional[WorkoutRecord]:
    try:
        row = db.execute(
            "SELECT id, user_id, day FROM workouts WHERE user_id = ? AND day = ?",
            (user_id, day),
        ).fetchone()
    except sqlite3.Error as exc:
        raise StoreError("could not read workouts", exc) from exc
    return WorkoutRecord.from_row(row) if row else None


def get_or_create_workout(db: sqlite3.Connection, user_id: str, day: str) -> WorkoutRecord:
    """Planned workout for (user, day); created on first use, never duplicated."""
    workout = find_workout(db, user_id, day)
    if workout is not None:
        return workout
    # OR IGNORE: a concurrent insert for the same (user, day) is fine, re-read below
    db.execute(
        "INSERT OR IGNORE INTO workouts (user_id, day) VALUES (?, ?)",
        (user_id, day),
    )
    return find_workout(db, user_id, day)


def add_exercise(db: sqlite3.Connection, user_id: str, day: str, entry: ExerciseEntry) -> ExerciseEntry:
    """Stores an exercise under the user's workout for ``day`` and commits."""
    try:
        workout = get_or_create_workout(db, user_id, day)
        cur = db.execute(
            """
            INSERT INTO exercises (workout_id, name, sets, reps, weight, notes)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (workout.id, entry.name, entry.sets, entry.reps, entry.weight, entry.notes),
        )
        db.commit()
    except sqlite3.Error as exc:
        db.rollback()
        raise StoreError("could not save exercise", exc) from exc

    return ExerciseEntry(
        id=cur.lastrowid,
        workout_id=workout.id,
        name=entry.name,
        sets=entry.sets,
        reps=entry.reps,
        weight=entry.weight,
        notes=entry.notes,
    )


def list_exercises(db: sqlite3.Connection, user_id: str, day: str) -> List[ExerciseEntry]:
    """Exercises planned for ``day``; empty if the day has no workout yet."""
    try:
        rows = db.execute(
            """
            SELECT e.id, e.workout_id, e.name, e.sets, e.reps, e.weight, e.notes
              FROM exercises e
              JOIN workouts w ON w.id = e.workout_id
             WHERE w.user_id = ? AND w.day = ?
             ORDER BY e.id
            """,
            (user_id, day),
        ).fetchall()
    except sqlite3.Error as exc:
        raise StoreError("could not read exercises", exc) from exc
    return [ExerciseEntry.from_row(r) for r in rows]


def weekly_schedule(db: sqlite3.Connection, user_id: str) -> Dict[str, List[ExerciseEntry]]:
    """Montag..Sonntag -> exercises, every day present even when empty."""
    schedule: Dict[str, List[ExerciseEntry]] = {day: [] for day in DAYS}
    try:
        rows = db.execute(
            """
            SELECT w.day, e.id, e.workout_id, e.name, e.sets, e.reps, e.weight, e.notes
              FROM exercises e
              JOIN workouts w ON w.id = e.workout_id
             WHERE w.user_id = ?
             ORDER BY e.id
            """,
            (user_id,),
        ).fetchall()
    except sqlite3.Error as exc:
        raise StoreError("could not read exercises", exc) from exc
    for row in rows:
        if row["day"] in schedule:
            schedule[row["day"]].append(ExerciseEntry.from_row(row))
    return schedule
