from datetime import date

import pytest

from powertrack.errors import DuplicateRecordError
from powertrack.models.records import CompletedWorkout, MetricsUpdate, WorkoutKey
from powertrack.services.reconciler import (
    Create,
    Update,
    changed_fields,
    pick_existing,
    reconcile,
)

KEY = WorkoutKey("user-1", "Monday", date(2026, 10, 19))


def _existing(**metrics):
    return CompletedWorkout(id=5, user_id="user-1", day="Monday", date=date(2026, 10, 19), **metrics)


def test_no_existing_record_creates_with_incoming_fields():
    action = reconcile(KEY, MetricsUpdate(calories=1800, weight=81.5), None)

    assert action == Create(key=KEY, calories=1800, water_intake=None, weight=81.5)
    assert action.kind == "created"


def test_empty_update_without_existing_creates_blank_record():
    action = reconcile(KEY, MetricsUpdate(), None)

    assert isinstance(action, Create)
    assert (action.calories, action.water_intake, action.weight) == (None, None, None)


def test_partial_update_keeps_stored_values():
    existing = _existing(calories=2100, water_intake=1500, weight=80)

    action = reconcile(KEY, MetricsUpdate(weight=79.4), existing)

    assert action == Update(record_id=5, calories=2100, water_intake=1500, weight=79.4)
    assert action.kind == "updated"


def test_all_absent_is_a_noop_merge():
    existing = _existing(calories=2100, water_intake=None, weight=80)

    action = reconcile(KEY, MetricsUpdate(), existing)

    assert action == Update(record_id=5, calories=2100, water_intake=None, weight=80)
    assert changed_fields(action, existing) == []


def test_zero_replaces_stored_value():
    existing = _existing(calories=300, water_intake=250, weight=12)

    action = reconcile(KEY, MetricsUpdate(calories=0, water_intake=0, weight=0), existing)

    assert (action.calories, action.water_intake, action.weight) == (0, 0, 0)


def test_reconcile_is_idempotent():
    existing = _existing(calories=2100, water_intake=None, weight=80)
    incoming = MetricsUpdate(water_intake=2500)

    first = reconcile(KEY, incoming, existing)
    stored = _existing(
        calories=first.calories, water_intake=first.water_intake, weight=first.weight
    )
    second = reconcile(KEY, incoming, stored)

    assert second == first
    assert changed_fields(second, stored) == []


def test_reconcile_does_not_mutate_inputs():
    existing = _existing(calories=2100)
    incoming = MetricsUpdate(weight=70)

    reconcile(KEY, incoming, existing)

    assert existing.weight is None
    assert incoming.calories is None


def test_changed_fields_for_create_lists_provided_fields():
    action = reconcile(KEY, MetricsUpdate(calories=0, weight=70), None)

    assert changed_fields(action, None) == ["calories", "weight"]


def test_pick_existing():
    assert pick_existing([]) is None
    row = _existing(calories=1)
    assert pick_existing([row]) is row


def test_pick_existing_rejects_duplicates():
    rows = [_existing(calories=1), CompletedWorkout(6, "user-1", "Monday", date(2026, 10, 19))]

    with pytest.raises(DuplicateRecordError) as excinfo:
        pick_existing(rows)

    assert excinfo.value.count == 2
    assert excinfo.value.key == KEY
