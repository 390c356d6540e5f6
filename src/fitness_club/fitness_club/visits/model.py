from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Visit:
    """Посещение или день заморозки.

    visit_date is stored in the venue-shifted representation, visit_day is its
    calendar date and takes part in the per-day unique key.
    """

    visit_id: int
    client_id: int
    subscription_id: int
    visit_date: datetime
    is_freeze_day: bool
    qr_code: str

    @property
    def visit_day(self) -> date:
        return self.visit_date.date()

    def summary(self) -> dict:
        return {"id": self.visit_id, "visitDate": self.visit_date.isoformat(), "isFreezeDay": self.is_freeze_day}
