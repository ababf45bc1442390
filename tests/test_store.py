from datetime import date

import pytest

from powertrack.errors import DuplicateRecordError, StoreError
from powertrack.models.completed import (
    apply_action,
    find_completed_workout,
    find_completed_workouts,
    get_completed_workout,
    list_completed_workouts,
)
from powertrack.models.records import DAYS, ExerciseEntry, MetricsUpdate, WorkoutKey
from powertrack.models.workout import (
    add_exercise,
    get_or_create_workout,
    list_exercises,
    weekly_schedule,
)
from powertrack.services.reconciler import Create, Update, reconcile

KEY = WorkoutKey("user-1", "Monday", date(2026, 10, 19))


def _save(db, key, **metrics):
    existing = find_completed_workout(db, key)
    return apply_action(db, reconcile(key, MetricsUpdate(**metrics), existing))


def test_create_then_merge(db):
    first_id = _save(db, KEY, calories=2000, weight=80)
    second_id = _save(db, KEY, weight=79.5)

    assert first_id == second_id
    record = get_completed_workout(db, first_id)
    assert record.calories == 2000
    assert record.water_intake is None
    assert record.weight == 79.5
    assert record.date == KEY.date


def test_lookup_is_exact_on_key(db):
    _save(db, KEY, calories=1)

    assert find_completed_workout(db, WorkoutKey("user-2", "Monday", KEY.date)) is None
    assert find_completed_workout(db, WorkoutKey("user-1", "Tuesday", KEY.date)) is None
    assert find_completed_workout(db, WorkoutKey("user-1", "Monday", date(2026, 10, 12))) is None
    assert find_completed_workout(db, KEY).calories == 1


def test_unique_constraint_blocks_second_create(db):
    apply_action(db, Create(key=KEY, calories=100))

    with pytest.raises(StoreError):
        apply_action(db, Create(key=KEY, calories=200))

    rows = find_completed_workouts(db, KEY)
    assert [r.calories for r in rows] == [100]


def test_duplicates_are_reported(db):
    # a database created before the UNIQUE constraint existed
    db.executescript(
        """
        DROP TABLE completed_workouts;
        CREATE TABLE completed_workouts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT, day TEXT, date TEXT,
            calories REAL, water_intake REAL, weight REAL,
            created_at TEXT, updated_at TEXT
        );
        """
    )
    apply_action(db, Create(key=KEY, calories=100))
    apply_action(db, Create(key=KEY, calories=200))

    with pytest.raises(DuplicateRecordError):
        find_completed_workout(db, KEY)


def test_update_of_missing_row_fails(db):
    with pytest.raises(StoreError):
        apply_action(db, Update(record_id=999, calories=1))


def test_list_completed_workouts_is_per_user_and_ordered(db):
    _save(db, WorkoutKey("user-1", "Wednesday", date(2026, 10, 14)), calories=3)
    _save(db, KEY, calories=1)
    _save(db, WorkoutKey("user-1", "Sunday", date(2026, 10, 11)), calories=2)
    _save(db, WorkoutKey("user-2", "Monday", KEY.date), calories=99)

    records = list_completed_workouts(db, "user-1")

    assert [r.date.isoformat() for r in records] == ["2026-10-11", "2026-10-14", "2026-10-19"]


def test_workout_is_created_once_per_day(db):
    first = get_or_create_workout(db, "user-1", "Monday")
    second = get_or_create_workout(db, "user-1", "Monday")
    other = get_or_create_workout(db, "user-2", "Monday")

    assert first == second
    assert other.id != first.id


def test_add_and_list_exercises(db):
    assert list_exercises(db, "user-1", "Friday") == []

    saved = add_exercise(db, "user-1", "Friday", ExerciseEntry(name="Deadlift", sets=3, reps=5, weight=120))
    add_exercise(db, "user-1", "Friday", ExerciseEntry(name="Row", sets=3, reps=10, weight=50, notes="slow"))

    exercises = list_exercises(db, "user-1", "Friday")
    assert [e.name for e in exercises] == ["Deadlift", "Row"]
    assert exercises[0] == saved
    assert exercises[1].notes == "slow"
    assert len({e.workout_id for e in exercises}) == 1


def test_weekly_schedule_has_all_days(db):
    add_exercise(db, "user-1", "Tuesday", ExerciseEntry(name="Squat", sets=5, reps=5, weight=100))
    add_exercise(db, "user-2", "Tuesday", ExerciseEntry(name="Curl", sets=3, reps=12, weight=10))

    schedule = weekly_schedule(db, "user-1")

    assert list(schedule) == list(DAYS)
    assert [e.name for e in schedule["Tuesday"]] == ["Squat"]
    assert schedule["Monday"] == []


def test_read_failures_become_store_errors(db):
    db.executescript("DROP TABLE exercises; DROP TABLE completed_workouts;")

    with pytest.raises(StoreError):
        list_exercises(db, "user-1", "Monday")
    with pytest.raises(StoreError):
        weekly_schedule(db, "user-1")
    with pytest.raises(StoreError):
        get_completed_workout(db, 1)

    db.executescript("DROP TABLE workouts;")
    with pytest.raises(StoreError):
        get_or_create_workout(db, "user-1", "Monday")
