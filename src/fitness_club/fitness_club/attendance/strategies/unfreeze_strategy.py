from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceErrorType
from ...subscriptions.lifecycle import SubscriptionLifecycle
from ...visits.ledger import VisitLedger
from ..model import AttendanceContext, AttendanceOutcome
from .base import DayActionStrategy


class UnfreezeStrategy(DayActionStrategy):
    """Undo today's freeze. Only a freeze record from today can be removed."""

    def apply(
        self,
        ctx: AttendanceContext,
        *,
        lifecycle: SubscriptionLifecycle,
        ledger: VisitLedger,
        visit_id: Optional[int] = None,
    ) -> AttendanceOutcome:
        freeze_visit = ctx.freeze_visit
        if visit_id is not None and freeze_visit is not None and freeze_visit.visit_id != int(visit_id):
            freeze_visit = None

        decision = lifecycle.unfreeze(ctx.subscription, freeze_visit)
        if not decision.ok:
            return AttendanceOutcome.rejected(ctx, decision.error_type)

        if not ledger.delete_freeze_day(freeze_visit, freeze_used=decision.freeze_used):
            return AttendanceOutcome.rejected(ctx, AttendanceErrorType.NOT_FOUND)

        return AttendanceOutcome(
            success=True,
            message="Заморозка на сегодня отменена",
            client=ctx.client,
            subscription=ctx.subscription.evolve(freeze_used=decision.freeze_used),
            tariff=ctx.tariff,
            can_freeze=decision.freeze_used < ctx.tariff.freeze_limit,
            is_frozen_today=False,
            can_unfreeze=False,
        )
