"""Manually advanced clock for testing."""

from datetime import datetime, timedelta, timezone


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        """Move forward by a timedelta(**kwargs) and return the new time."""
        self.now += timedelta(**kwargs)
        return self.now
