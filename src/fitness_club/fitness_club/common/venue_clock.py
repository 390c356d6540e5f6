from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Callable, Optional

from ..core.constants import DEFAULT_VENUE_UTC_OFFSET_HOURS


@dataclass(frozen=True)
class DayWindow:
    """Half-open venue-local day: start <= t < end."""

    start: datetime
    end: datetime

    def contains(self, value: datetime) -> bool:
        return self.start <= value < self.end


def utcnow() -> datetime:
    """Current naive UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hour_fraction(value: time) -> float:
    """Clock value as fractional hours, minute precision (08:30 -> 8.5)."""
    return value.hour + value.minute / 60


class VenueClock:
    """Venue-local time under a fixed UTC offset.

    Visit timestamps are stored pre-shifted by the offset (naive datetimes that
    read as the venue wall clock), and the day window is expressed in the same
    representation, so both sides of a day query are directly comparable. The
    host timezone never enters the computation.
    """

    def __init__(
        self,
        offset_hours: float = DEFAULT_VENUE_UTC_OFFSET_HOURS,
        *,
        now_fn: Optional[Callable[[], datetime]] = None,
    ):
        self._offset = timedelta(hours=float(offset_hours))
        self._now_fn = now_fn or utcnow

    @property
    def offset(self) -> timedelta:
        return self._offset

    def now_utc(self) -> datetime:
        return self._now_fn()

    def now_local(self) -> datetime:
        return self.now_utc() + self._offset

    def today(self) -> DayWindow:
        local = self.now_local()
        start = datetime.combine(local.date(), time.min)
        return DayWindow(start=start, end=start + timedelta(days=1))

    def local_hour(self) -> float:
        return hour_fraction(self.now_local().time())
