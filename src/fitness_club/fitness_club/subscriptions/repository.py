from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SubscriptionStatus
from .model import Subscription


class SubscriptionRepository(Protocol):
    def get_by_id(self, subscription_id: int) -> Optional[Subscription]:
        raise NotImplementedError

    def list_for_client(self, client_id: int, *, status: Optional[SubscriptionStatus] = None) -> Sequence[Subscription]:
        """Subscriptions of a client, latest end_date first."""

        raise NotImplementedError

    def set_status(self, *, subscription_id: int, status: SubscriptionStatus) -> bool:
        raise NotImplementedError

    def extend(self, *, subscription_id: int, days: int, max_remaining: int) -> bool:
        """Move end_date by days and add days to remaining_days, capped at max_remaining.

        Completed subscriptions are left untouched (returns False).
        """

        raise NotImplementedError
