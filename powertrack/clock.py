from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current UTC time (default ``CLOCK``)."""
    return datetime.now(timezone.utc)
