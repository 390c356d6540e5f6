from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Union

from ..clients.repository import ClientRepository
from ..common.validators import require_non_empty
from ..common.venue_clock import VenueClock, hour_fraction
from ..core.enums import AttendanceErrorType, ExpiryReason
from ..subscriptions.lifecycle import SubscriptionLifecycle
from ..tariffs.repository import TariffRepository
from ..visits.ledger import VisitLedger
from .factory import DayActionFactory
from .model import AttendanceContext, AttendanceOutcome

logger = logging.getLogger(__name__)

Gate = Union[AttendanceContext, AttendanceOutcome]


class AttendanceService:
    """Check-in orchestration: check (dry run), commit, freeze and unfreeze.

    Each entry point re-reads client, subscription and today's visits, so a
    commit never acts on what an earlier check saw.
    """

    def __init__(
        self,
        clients: ClientRepository,
        tariffs: TariffRepository,
        lifecycle: SubscriptionLifecycle,
        ledger: VisitLedger,
        clock: VenueClock,
        *,
        action_factory: Optional[DayActionFactory] = None,
    ):
        self._clients = clients
        self._tariffs = tariffs
        self._lifecycle = lifecycle
        self._ledger = ledger
        self._clock = clock
        self._factory = action_factory or DayActionFactory()

    def check(self, telegram_id: str) -> AttendanceOutcome:
        gated = self._gate(telegram_id)
        if isinstance(gated, AttendanceOutcome):
            return gated

        ctx = gated
        is_frozen_today = ctx.freeze_visit is not None
        return AttendanceOutcome(
            success=True,
            message="Доступ разрешен",
            client=ctx.client,
            subscription=ctx.subscription,
            tariff=ctx.tariff,
            can_freeze=ctx.subscription.freeze_used < ctx.tariff.freeze_limit,
            is_frozen_today=is_frozen_today,
            can_unfreeze=is_frozen_today and self._clock.local_hour() < hour_fraction(ctx.tariff.end_time),
        )

    def commit(self, telegram_id: str) -> AttendanceOutcome:
        gated = self._gate(telegram_id)
        if isinstance(gated, AttendanceOutcome):
            return gated

        ctx = gated
        # Reached only on a frozen day that has already been attended.
        if ctx.regular_visit is not None:
            return AttendanceOutcome.rejected(
                ctx, AttendanceErrorType.ALREADY_VISITED_TODAY, visit_time=ctx.regular_visit.visit_date
            )

        subscription = self._lifecycle.record_visit_consumption(ctx.subscription, client=ctx.client)
        visit = self._ledger.create_and_consume(
            ctx.client.client_id, ctx.subscription.subscription_id, qr_code=ctx.client.telegram_id
        )
        if visit is None:
            return self._lost_commit(ctx)

        if subscription.remaining_days == 0:
            logger.info("Subscription %s used up its last visit", subscription.subscription_id)
        logger.info(
            "Visit %s recorded for client %s, %s visits left",
            visit.visit_id,
            ctx.client.client_id,
            subscription.remaining_days,
        )
        return AttendanceOutcome(
            success=True,
            message="Посещение отмечено",
            client=ctx.client,
            subscription=subscription,
            tariff=ctx.tariff,
            visit=visit,
            can_freeze=subscription.freeze_used < ctx.tariff.freeze_limit,
            is_frozen_today=ctx.freeze_visit is not None,
        )

    def freeze_day(self, telegram_id: str, action: str, *, visit_id: Optional[int] = None) -> AttendanceOutcome:
        strategy = self._factory.for_action(action)

        resolved = self._resolve(telegram_id)
        if isinstance(resolved, AttendanceOutcome):
            return resolved

        ctx = self._with_today(resolved)
        outcome = strategy.apply(ctx, lifecycle=self._lifecycle, ledger=self._ledger, visit_id=visit_id)
        if outcome.success:
            logger.info("Client %s: %s today (freeze used %s)", ctx.client.client_id, action, outcome.subscription.freeze_used)
        return outcome

    def _lost_commit(self, ctx: AttendanceContext) -> AttendanceOutcome:
        """Explain a commit whose write was refused by storage."""
        client_id = ctx.client.client_id
        existing = self._ledger.find_today(client_id, ctx.subscription.subscription_id, ctx.window)
        if existing is None:
            current = self._lifecycle.find_active_subscription(client_id)
            if current is None or current.remaining_days <= 0:
                return AttendanceOutcome.failure(AttendanceErrorType.NO_ACTIVE_SUBSCRIPTION, client=ctx.client)
        return AttendanceOutcome.rejected(
            ctx,
            AttendanceErrorType.ALREADY_VISITED_TODAY,
            visit_time=existing.visit_date if existing else None,
        )

    def _resolve(self, telegram_id: str) -> Gate:
        """Identity, active subscription and expiry: the checks every entry point shares."""
        telegram_id = require_non_empty(telegram_id, "Telegram ID")

        client = self._clients.get_by_telegram_id(telegram_id)
        if client is None:
            return AttendanceOutcome.failure(AttendanceErrorType.CLIENT_NOT_FOUND)

        subscription = self._lifecycle.find_active_subscription(client.client_id)
        if subscription is None:
            return AttendanceOutcome.failure(AttendanceErrorType.NO_ACTIVE_SUBSCRIPTION, client=client)

        tariff = self._tariffs.get_by_id(subscription.tariff_id)
        if tariff is None:
            raise RuntimeError(
                f"Tariff {subscription.tariff_id} of subscription {subscription.subscription_id} does not exist"
            )

        reconciliation = self._lifecycle.reconcile_expiry(subscription)
        if reconciliation.reason == ExpiryReason.EXPIRED:
            return AttendanceOutcome.failure(
                AttendanceErrorType.SUBSCRIPTION_EXPIRED,
                client=client,
                subscription=reconciliation.subscription,
                tariff=tariff,
            )
        if reconciliation.completed:
            return AttendanceOutcome.failure(AttendanceErrorType.NO_ACTIVE_SUBSCRIPTION, client=client)

        return AttendanceContext(client=client, subscription=reconciliation.subscription, tariff=tariff)

    def _gate(self, telegram_id: str) -> Gate:
        resolved = self._resolve(telegram_id)
        if isinstance(resolved, AttendanceOutcome):
            return resolved

        ctx = resolved
        if not ctx.tariff.is_open_at(self._clock.local_hour()):
            hours = ctx.tariff.working_hours()
            return AttendanceOutcome.rejected(
                ctx,
                AttendanceErrorType.OUTSIDE_WORKING_HOURS,
                message=f"Фитнес-клуб работает с {hours['start']} до {hours['end']}",
                working_hours=hours,
            )

        ctx = self._with_today(ctx)
        # A frozen day stays open: freezing suppresses consumption, it does not lock the day.
        if ctx.regular_visit is not None and ctx.freeze_visit is None:
            return AttendanceOutcome.rejected(
                ctx, AttendanceErrorType.ALREADY_VISITED_TODAY, visit_time=ctx.regular_visit.visit_date
            )
        return ctx

    def _with_today(self, ctx: AttendanceContext) -> AttendanceContext:
        window = self._clock.today()
        client_id = ctx.client.client_id
        subscription_id = ctx.subscription.subscription_id
        return replace(
            ctx,
            window=window,
            regular_visit=self._ledger.find_today(client_id, subscription_id, window),
            freeze_visit=self._ledger.find_today_freeze(client_id, subscription_id, window),
        )
