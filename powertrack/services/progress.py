# -*- coding: utf-8 -*-
"""
Service: Progress
Weekly summary over a user's completed workouts, as of a given instant.

  - completed_this_week: records dated within the trailing window (inclusive)
  - goal_percentage:     completed / weekly goal, clamped to 0..100
  - avg_calories / avg_water_intake: mean over in-window records that have
    the value, ``None`` if none do
  - latest_weight:       weight of the newest in-window record that has one;
                         on equal dates the later record in input order wins

Negative metric values never reach the store through the forms, but if one
does it is ignored here rather than skewing the numbers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from powertrack.models.records import CompletedWorkout

WEEKLY_GOAL = 7
WINDOW_DAYS = 7


@dataclass(frozen=True)
class ProgressSummary:
    completed_this_week: int
    goal_percentage: int
    avg_calories: Optional[float]
    avg_water_intake: Optional[float]
    latest_weight: Optional[float]
    window_start: date
    window_end: date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completed_this_week": self.completed_this_week,
            "goal_percentage": self.goal_percentage,
            "avg_calories": self.avg_calories,
            "avg_water_intake": self.avg_water_intake,
            "latest_weight": self.latest_weight,
            "window_start": self.window_start.isoformat(),
            "window_end": self.window_end.isoformat(),
        }


def _valid(value: Optional[float]) -> bool:
    return value is not None and value >= 0


def _average(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def goal_percentage(completed: int, goal: int = WEEKLY_GOAL) -> int:
    """Share of the weekly goal reached, in whole percent (half rounds up)."""
    goal = max(goal, 1)
    ratio = min(max(completed, 0) / goal, 1.0)
    return int(math.floor(ratio * 100 + 0.5))


def in_window(records: Iterable[CompletedWorkout], start: date, end: date) -> List[CompletedWorkout]:
    return [r for r in records if start <= r.date <= end]


def aggregate(
    records: Iterable[CompletedWorkout],
    now: datetime,
    goal: int = WEEKLY_GOAL,
    window_days: int = WINDOW_DAYS,
) -> ProgressSummary:
    window_end = now.date()
    window_start = (now - timedelta(days=window_days)).date()
    recent = in_window(records, window_start, window_end)

    latest: Optional[CompletedWorkout] = None
    for rec in recent:
        if not _valid(rec.weight):
            continue
        # ">=" so that the last of several same-day records wins
        if latest is None or rec.date >= latest.date:
            latest = rec

    return ProgressSummary(
        completed_this_week=len(recent),
        goal_percentage=goal_percentage(len(recent), goal),
        avg_calories=_average([r.calories for r in recent if _valid(r.calories)]),
        avg_water_intake=_average([r.water_intake for r in recent if _valid(r.water_intake)]),
        latest_weight=latest.weight if latest else None,
        window_start=window_start,
        window_end=window_end,
    )
