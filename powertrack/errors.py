"""Domain exceptions shared by services, models and blueprints."""

from __future__ import annotations

from typing import Dict, Optional


class PowerTrackError(Exception):
    """Base class for all PowerTrack errors."""


class ValidationError(PowerTrackError):
    """Form input rejected before it reaches the reconciler."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class DuplicateRecordError(PowerTrackError):
    """More than one completed workout exists for a (user, day, date) key."""

    def __init__(self, key, count: int):
        self.key = key
        self.count = count
        super().__init__(
            f"{count} completed workouts for user={key.user_id} "
            f"day={key.day} date={key.date.isoformat()}"
        )


class StoreError(PowerTrackError):
    """Reading from or writing to the database failed."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)
