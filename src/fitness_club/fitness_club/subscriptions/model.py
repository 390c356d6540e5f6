from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.enums import SubscriptionStatus


@dataclass(frozen=True)
class Subscription:
    """Абонемент клиента.

    remaining_days counts visits left, not calendar days. end_date is the
    calendar expiry in plain UTC wall-clock time.
    """

    subscription_id: int
    client_id: int
    tariff_id: int
    status: SubscriptionStatus
    start_date: datetime
    end_date: datetime
    remaining_days: int
    freeze_used: int = 0

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE

    def is_expired_at(self, now: datetime) -> bool:
        return now > self.end_date

    def evolve(self, **changes) -> "Subscription":
        return replace(self, **changes)

    def summary(self, *, tariff_name: Optional[str] = None) -> dict:
        data = {
            "id": self.subscription_id,
            "status": self.status.value,
            "endDate": self.end_date.isoformat(),
            "remainingDays": self.remaining_days,
            "freezeUsed": self.freeze_used,
        }
        if tariff_name is not None:
            data["tariffName"] = tariff_name
        return data
