from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Clock(Protocol):
    """Port for reading the current time (timezone-aware, UTC)."""

    def now(self) -> datetime: ...


class SystemClock(Clock):
    """Wall clock used in production."""

    def now(self) -> datetime:
        return datetime.now(tz=UTC)


class FixedClock(Clock):
    """Deterministic clock used in unit tests; moves only when told to."""

    def __init__(self, at: datetime | None = None) -> None:
        start = at or datetime(2024, 1, 1, tzinfo=UTC)
        if start.tzinfo is None:
            start = start.replace(tzinfo=UTC)
        self._now = start

    def now(self) -> datetime:
        return self._now

    def set(self, at: datetime) -> None:
        self._now = at if at.tzinfo else at.replace(tzinfo=UTC)

    def advance(self, delta: timedelta) -> datetime:
        self._now = self._now + delta
        return self._now


def to_epoch_ms(moment: datetime) -> int:
    """Convert an aware datetime to integer epoch milliseconds."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return (moment - EPOCH) // timedelta(milliseconds=1)


def from_epoch_ms(value: int) -> datetime:
    """Convert epoch milliseconds back to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=value)
