from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceErrorType
from ...subscriptions.lifecycle import SubscriptionLifecycle
from ...visits.ledger import VisitLedger
from ..model import AttendanceContext, AttendanceOutcome
from .base import DayActionStrategy


class FreezeStrategy(DayActionStrategy):
    """Pause today: a freeze visit plus one unit of the freeze quota."""

    def apply(
        self,
        ctx: AttendanceContext,
        *,
        lifecycle: SubscriptionLifecycle,
        ledger: VisitLedger,
        visit_id: Optional[int] = None,
    ) -> AttendanceOutcome:
        if ctx.freeze_visit is not None:
            return AttendanceOutcome.rejected(ctx, AttendanceErrorType.ALREADY_FROZEN_TODAY)

        decision = lifecycle.freeze(ctx.subscription, ctx.tariff)
        if not decision.ok:
            return AttendanceOutcome.rejected(ctx, decision.error_type)

        visit = ledger.create_freeze_day(
            ctx.client.client_id,
            ctx.subscription.subscription_id,
            qr_code=ctx.client.telegram_id,
            freeze_used=decision.freeze_used,
        )
        if visit is None:
            return AttendanceOutcome.rejected(ctx, AttendanceErrorType.ALREADY_FROZEN_TODAY)

        return AttendanceOutcome(
            success=True,
            message="День заморожен",
            client=ctx.client,
            subscription=ctx.subscription.evolve(freeze_used=decision.freeze_used),
            tariff=ctx.tariff,
            visit=visit,
            can_freeze=decision.freeze_used < ctx.tariff.freeze_limit,
            is_frozen_today=True,
            can_unfreeze=True,
        )
