from __future__ import annotations

from typing import Optional

from ..common.venue_clock import DayWindow, VenueClock
from .model import Visit
from .repository import VisitRepository


class VisitLedger:
    """Visit records scoped to a client, a subscription and a venue-local day.

    Every timestamp written here comes from VenueClock.now_local(), the same
    shift that produces the day window, so day lookups never straddle two
    calendar days.
    """

    def __init__(self, visits: VisitRepository, clock: VenueClock):
        self._visits = visits
        self._clock = clock

    def find_today(self, client_id: int, subscription_id: int, window: Optional[DayWindow] = None) -> Optional[Visit]:
        return self._find(client_id, subscription_id, window, is_freeze_day=False)

    def find_today_freeze(
        self, client_id: int, subscription_id: int, window: Optional[DayWindow] = None
    ) -> Optional[Visit]:
        return self._find(client_id, subscription_id, window, is_freeze_day=True)

    def _find(self, client_id: int, subscription_id: int, window: Optional[DayWindow], *, is_freeze_day: bool):
        window = window or self._clock.today()
        return self._visits.find_in_window(
            client_id=int(client_id),
            subscription_id=int(subscription_id),
            start=window.start,
            end=window.end,
            is_freeze_day=is_freeze_day,
        )

    def create_and_consume(self, client_id: int, subscription_id: int, *, qr_code: str) -> Optional[Visit]:
        """Record a regular visit now and take one visit off the subscription.

        Both writes land together or not at all. None means nothing was
        written: today's visit already exists or no visits are left.
        """
        visit_date = self._clock.now_local()
        visit_id = self._visits.create_visit_and_consume(
            client_id=int(client_id),
            subscription_id=int(subscription_id),
            visit_date=visit_date,
            qr_code=qr_code,
        )
        if visit_id is None:
            return None
        return Visit(
            visit_id=visit_id,
            client_id=int(client_id),
            subscription_id=int(subscription_id),
            visit_date=visit_date,
            is_freeze_day=False,
            qr_code=qr_code,
        )

    def create_freeze_day(self, client_id: int, subscription_id: int, *, qr_code: str, freeze_used: int) -> Optional[Visit]:
        visit_date = self._clock.now_local()
        visit_id = self._visits.create_freeze_day(
            client_id=int(client_id),
            subscription_id=int(subscription_id),
            visit_date=visit_date,
            qr_code=qr_code,
            freeze_used=int(freeze_used),
        )
        if visit_id is None:
            return None
        return Visit(
            visit_id=visit_id,
            client_id=int(client_id),
            subscription_id=int(subscription_id),
            visit_date=visit_date,
            is_freeze_day=True,
            qr_code=qr_code,
        )

    def delete_freeze_day(self, visit: Visit, *, freeze_used: int) -> bool:
        return self._visits.delete_freeze_day(
            visit_id=visit.visit_id,
            subscription_id=visit.subscription_id,
            freeze_used=max(0, int(freeze_used)),
        )
