from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...subscriptions.lifecycle import SubscriptionLifecycle
from ...visits.ledger import VisitLedger
from ..model import AttendanceContext, AttendanceOutcome


class DayActionStrategy(ABC):
    """Strategy Pattern: one action on today's freeze state."""

    @abstractmethod
    def apply(
        self,
        ctx: AttendanceContext,
        *,
        lifecycle: SubscriptionLifecycle,
        ledger: VisitLedger,
        visit_id: Optional[int] = None,
    ) -> AttendanceOutcome:
        raise NotImplementedError
