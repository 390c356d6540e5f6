from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal

from ..common.venue_clock import hour_fraction


@dataclass(frozen=True)
class Tariff:
    """Тариф: шаблон абонемента.

    duration_days is the total visit allotment, duration is the calendar
    validity in months. start_time/end_time are venue-local clock values.
    """

    tariff_id: int
    name: str
    price: Decimal
    duration_days: int
    duration: int
    start_time: time
    end_time: time
    freeze_limit: int = 0

    def is_open_at(self, local_hour: float) -> bool:
        return hour_fraction(self.start_time) <= local_hour <= hour_fraction(self.end_time)

    def working_hours(self) -> dict:
        return {"start": self.start_time.strftime("%H:%M"), "end": self.end_time.strftime("%H:%M")}
