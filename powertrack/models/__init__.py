from .records import (
    DAYS,
    CompletedWorkout,
    ExerciseEntry,
    MetricsUpdate,
    WorkoutKey,
    WorkoutRecord,
)

__all__ = [
    "DAYS",
    "CompletedWorkout",
    "ExerciseEntry",
    "MetricsUpdate",
    "WorkoutKey",
    "WorkoutRecord",
]
