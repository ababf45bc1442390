from __future__ import annotations

import sqlite3
from typing import List, Optional

from powertrack.clock import utcnow
from powertrack.errors import StoreError
from powertrack.models.records import CompletedWorkout, WorkoutKey
from powertrack.services.reconciler import Action, Create, Update, pick_existing

_COLUMNS = "id, user_id, day, date, calories, water_intake, weight"


def _utcnow_iso() -> str:
    """UTC timestamp ISO (seconds)."""
    return utcnow().replace(tzinfo=None).isoformat(timespec="seconds")


def find_completed_workouts(db: sqlite3.Connection, key: WorkoutKey) -> List[CompletedWorkout]:
    """All rows for the exact (user, day, date) key; normally zero or one."""
    try:
        rows = db.execute(
            f"""
            SELECT {_COLUMNS}
              FROM completed_workouts
             WHERE user_id = ? AND day = ? AND date = ?
             ORDER BY id
            """,
            (key.user_id, key.day, key.date.isoformat()),
        ).fetchall()
    except sqlite3.Error as exc:
        raise StoreError("could not read completed workouts", exc) from exc
    return [CompletedWorkout.from_row(r) for r in rows]


def find_completed_workout(db: sqlite3.Connection, key: WorkoutKey) -> Optional[CompletedWorkout]:
    return pick_existing(find_completed_workouts(db, key))


def get_completed_workout(db: sqlite3.Connection, record_id: int) -> Optional[CompletedWorkout]:
    try:
        row = db.execute(
            f"SELECT {_COLUMNS} FROM completed_workouts WHERE id = ?",
            (record_id,),
        ).fetchone()
    except sqlite3.Error as exc:
        raise StoreError("could not read completed workouts", exc) from exc
    return CompletedWorkout.from_row(row) if row else None


def list_completed_workouts(db: sqlite3.Connection, user_id: str) -> List[CompletedWorkout]:
    """Every completed workout of a user, oldest first (date, then insertion)."""
    try:
        rows = db.execute(
            f"""
            SELECT {_COLUMNS}
              FROM completed_workouts
             WHERE user_id = ?
             ORDER BY date, id
            """,
            (user_id,),
        ).fetchall()
    except sqlite3.Error as exc:
        raise StoreError("could not read completed workouts", exc) from exc
    return [CompletedWorkout.from_row(r) for r in rows]


def apply_action(db: sqlite3.Connection, action: Action) -> int:
    """
    Executes a reconciler decision and commits.
    Returns the id of the created or updated row.

    A Create that collides with the UNIQUE(user_id, day, date) constraint
    means another request inserted the row first; the caller may retry,
    which then takes the Update path.
    """
    try:
        if isinstance(action, Create):
            cur = db.execute(
                """
                INSERT INTO completed_workouts
                    (user_id, day, date, calories, water_intake, weight, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    action.key.user_id,
                    action.key.day,
                    action.key.date.isoformat(),
                    action.calories,
                    action.water_intake,
                    action.weight,
                    _utcnow_iso(),
                ),
            )
            record_id = cur.lastrowid
        elif isinstance(action, Update):
            cur = db.execute(
                """
                UPDATE completed_workouts
                   SET calories     = ?,
                       water_intake = ?,
                       weight       = ?,
                       updated_at   = ?
                 WHERE id = ?
                """,
                (
                    action.calories,
                    action.water_intake,
                    action.weight,
                    _utcnow_iso(),
                    action.record_id,
                ),
            )
            if cur.rowcount == 0:
                raise StoreError(f"completed workout {action.record_id} no longer exists")
            record_id = action.record_id
        else:
            raise TypeError(f"unsupported action {action!r}")
        db.commit()
    except sqlite3.IntegrityError as exc:
        db.rollback()
        raise StoreError("completed workout was saved concurrently, please retry", exc) from exc
    except sqlite3.Error as exc:
        db.rollback()
        raise StoreError("could not save completed workout", exc) from exc
    return record_id
