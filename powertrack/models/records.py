"""
Plain record types for workouts, exercises and completed workouts.

Rows come out of sqlite3 as ``sqlite3.Row``; ``from_row`` turns them into
these frozen dataclasses so services never touch the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, Optional

DAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@dataclass(frozen=True)
class WorkoutKey:
    """Logical identity of a completed workout."""

    user_id: str
    day: str
    date: date


@dataclass(frozen=True)
class MetricsUpdate:
    """Partial daily metrics; ``None`` means the field was not provided."""

    calories: Optional[float] = None
    water_intake: Optional[float] = None
    weight: Optional[float] = None


@dataclass(frozen=True)
class WorkoutRecord:
    id: int
    user_id: str
    day: str

    @classmethod
    def from_row(cls, row) -> "WorkoutRecord":
        return cls(id=row["id"], user_id=row["user_id"], day=row["day"])


@dataclass(frozen=True)
class ExerciseEntry:
    name: str
    sets: int
    reps: int
    weight: float
    notes: Optional[str] = None
    id: Optional[int] = None
    workout_id: Optional[int] = None

    @classmethod
    def from_row(cls, row) -> "ExerciseEntry":
        return cls(
            id=row["id"],
            workout_id=row["workout_id"],
            name=row["name"],
            sets=row["sets"],
            reps=row["reps"],
            weight=row["weight"],
            notes=row["notes"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CompletedWorkout:
    id: int
    user_id: str
    day: str
    date: date
    calories: Optional[float] = None
    water_intake: Optional[float] = None
    weight: Optional[float] = None

    @property
    def key(self) -> WorkoutKey:
        return WorkoutKey(self.user_id, self.day, self.date)

    @classmethod
    def from_row(cls, row) -> "CompletedWorkout":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            day=row["day"],
            date=date.fromisoformat(row["date"]),
            calories=row["calories"],
            water_intake=row["water_intake"],
            weight=row["weight"],
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data
