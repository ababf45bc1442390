# -*- coding: utf-8 -*-
"""
Service: Reconciler
Decides whether saving daily metrics creates a new completed workout or
merges into the existing one for the same (user, day, date).

The merge is per field: a value that was not submitted (``None``) keeps the
stored one, a submitted value replaces it. ``0`` counts as submitted.
Nothing here touches the database; ``models.completed.apply_action`` does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from powertrack.errors import DuplicateRecordError
from powertrack.models.records import CompletedWorkout, MetricsUpdate, WorkoutKey

METRIC_FIELDS = ("calories", "water_intake", "weight")


@dataclass(frozen=True)
class Create:
    key: WorkoutKey
    calories: Optional[float] = None
    water_intake: Optional[float] = None
    weight: Optional[float] = None

    kind = "created"


@dataclass(frozen=True)
class Update:
    record_id: int
    calories: Optional[float] = None
    water_intake: Optional[float] = None
    weight: Optional[float] = None

    kind = "updated"


Action = Union[Create, Update]


def _merge(incoming: Optional[float], current: Optional[float]) -> Optional[float]:
    # "is None", nicht truthiness: 0 kcal ist ein echter Wert
    return current if incoming is None else incoming


def pick_existing(rows: Sequence[CompletedWorkout]) -> Optional[CompletedWorkout]:
    """
    Lookup step before ``reconcile``.
    More than one row means the (user, day, date) uniqueness was violated
    somewhere upstream; that is reported instead of silently taking the first.
    """
    if not rows:
        return None
    if len(rows) > 1:
        raise DuplicateRecordError(rows[0].key, len(rows))
    return rows[0]


def reconcile(
    key: WorkoutKey,
    incoming: MetricsUpdate,
    existing: Optional[CompletedWorkout],
) -> Action:
    """Return the Create or Update to apply for ``incoming``."""
    if existing is None:
        return Create(
            key=key,
            calories=incoming.calories,
            water_intake=incoming.water_intake,
            weight=incoming.weight,
        )

    merged = {
        field: _merge(getattr(incoming, field), getattr(existing, field))
        for field in METRIC_FIELDS
    }
    return Update(record_id=existing.id, **merged)


def changed_fields(action: Action, existing: Optional[CompletedWorkout]) -> list:
    """Names of metric fields the action would change (all set ones for Create)."""
    if existing is None or isinstance(action, Create):
        return [f for f in METRIC_FIELDS if getattr(action, f) is not None]
    return [f for f in METRIC_FIELDS if getattr(action, f) != getattr(existing, f)]
