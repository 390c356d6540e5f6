from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Visit


class VisitRepository(Protocol):
    def find_in_window(
        self,
        *,
        client_id: int,
        subscription_id: int,
        start: datetime,
        end: datetime,
        is_freeze_day: bool,
    ) -> Optional[Visit]:
        raise NotImplementedError

    def create_visit_and_consume(
        self,
        *,
        client_id: int,
        subscription_id: int,
        visit_date: datetime,
        qr_code: str,
    ) -> Optional[int]:
        """Insert a regular visit and take one visit off the subscription in one transaction.

        The subscription is completed when its counter reaches 0. Returns None
        and writes nothing when the same-day unique key rejects the visit or the
        subscription has no visits left.
        """

        raise NotImplementedError

    def create_freeze_day(
        self,
        *,
        client_id: int,
        subscription_id: int,
        visit_date: datetime,
        qr_code: str,
        freeze_used: int,
    ) -> Optional[int]:
        """Insert a freeze visit and store freeze_used in one transaction."""

        raise NotImplementedError

    def delete_freeze_day(self, *, visit_id: int, subscription_id: int, freeze_used: int) -> bool:
        """Delete a freeze visit and store freeze_used in one transaction."""

        raise NotImplementedError
