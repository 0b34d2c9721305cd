"""Clock abstraction.

Attribution windows are measured on ``now()``, a monotonic reading in
seconds. ``utcnow()`` is wall-clock time for timestamps written to the
account store.
"""

import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Source of time for expiry windows and timestamps."""

    @abstractmethod
    def now(self) -> float:
        """Monotonic seconds, only meaningful as differences."""
        pass

    @abstractmethod
    def utcnow(self) -> datetime:
        """Current wall-clock time in UTC."""
        pass


class SystemClock(Clock):
    """Clock backed by the operating system."""

    def now(self) -> float:
        return time.monotonic()

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)


class ManualClock(Clock):
    """Clock that only moves when told to.

    Used by tests to age ledger entries without sleeping.
    """

    def __init__(
        self, start: float = 0.0, epoch: datetime | None = None
    ) -> None:
        self._now = start
        self._epoch = epoch or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def now(self) -> float:
        return self._now

    def utcnow(self) -> datetime:
        return self._epoch + timedelta(seconds=self._now)

    def advance(self, seconds: float) -> float:
        """Move the clock forward.

        Args:
            seconds: Non-negative number of seconds

        Returns:
            The new reading
        """
        if seconds < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._now += seconds
        return self._now
