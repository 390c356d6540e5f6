from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from ..clients.model import Client
from ..common.validators import require_positive_int
from ..common.venue_clock import VenueClock
from ..core.constants import LOW_BALANCE_MILESTONES
from ..core.enums import AttendanceErrorType, ExpiryReason, SubscriptionStatus
from ..core.exceptions import ValidationError
from ..notifications.service import MilestoneNotifier
from ..tariffs.model import Tariff
from ..visits.model import Visit
from .model import Subscription
from .repository import SubscriptionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciliation:
    subscription: Subscription
    reason: ExpiryReason = ExpiryReason.NONE

    @property
    def completed(self) -> bool:
        return self.reason != ExpiryReason.NONE


@dataclass(frozen=True)
class FreezeDecision:
    """Result of a freeze/unfreeze request.

    On success freeze_used is the value the caller must store together with
    the freeze visit mutation.
    """

    ok: bool
    freeze_used: int
    error_type: Optional[AttendanceErrorType] = None


class SubscriptionLifecycle:
    def __init__(
        self,
        subscriptions: SubscriptionRepository,
        clock: VenueClock,
        notifier: Optional[MilestoneNotifier] = None,
    ):
        self._subscriptions = subscriptions
        self._clock = clock
        self._notifier = notifier

    def find_active_subscription(self, client_id: int) -> Optional[Subscription]:
        active = self._subscriptions.list_for_client(int(client_id), status=SubscriptionStatus.ACTIVE)
        return max(active, key=lambda s: (s.end_date, s.subscription_id), default=None)

    def reconcile_expiry(self, subscription: Subscription) -> Reconciliation:
        """Complete a subscription whose end_date passed or whose visits ran out.

        A failed write is logged and left for the next attempt; the returned
        subscription is completed either way.
        """
        if subscription.status == SubscriptionStatus.COMPLETED:
            return Reconciliation(subscription)

        if subscription.is_expired_at(self._clock.now_utc()):
            reason = ExpiryReason.EXPIRED
        elif subscription.is_active and subscription.remaining_days <= 0:
            reason = ExpiryReason.EXHAUSTED
        else:
            return Reconciliation(subscription)

        completed = subscription.evolve(status=SubscriptionStatus.COMPLETED)
        try:
            self._subscriptions.set_status(
                subscription_id=subscription.subscription_id, status=SubscriptionStatus.COMPLETED
            )
        except Exception:
            logger.exception("Could not mark subscription %s as completed", subscription.subscription_id)
        else:
            logger.info("Subscription %s completed (%s)", subscription.subscription_id, reason.value)
        return Reconciliation(completed, reason)

    def record_visit_consumption(self, subscription: Subscription, *, client: Optional[Client] = None) -> Subscription:
        """Subscription state after one more visit, milestone message included.

        Nothing is written here: the caller stores the decrement together with
        the visit row (VisitLedger.create_and_consume), so the message always
        goes out before the new balance is stored.
        """
        if subscription.remaining_days <= 0:
            return subscription

        remaining = subscription.remaining_days - 1
        if remaining in LOW_BALANCE_MILESTONES and self._notifier is not None and client is not None:
            self._notifier.notify_low_balance(client, remaining)

        updated = subscription.evolve(remaining_days=remaining)
        if remaining == 0:
            updated = updated.evolve(status=SubscriptionStatus.COMPLETED)
        return updated

    def freeze(self, subscription: Subscription, tariff: Tariff) -> FreezeDecision:
        if subscription.freeze_used >= tariff.freeze_limit:
            return FreezeDecision(
                ok=False, freeze_used=subscription.freeze_used, error_type=AttendanceErrorType.QUOTA_EXCEEDED
            )
        return FreezeDecision(ok=True, freeze_used=subscription.freeze_used + 1)

    def unfreeze(self, subscription: Subscription, freeze_visit: Optional[Visit]) -> FreezeDecision:
        if (
            freeze_visit is None
            or not freeze_visit.is_freeze_day
            or freeze_visit.subscription_id != subscription.subscription_id
        ):
            return FreezeDecision(
                ok=False, freeze_used=subscription.freeze_used, error_type=AttendanceErrorType.NOT_FOUND
            )
        return FreezeDecision(ok=True, freeze_used=max(0, subscription.freeze_used - 1))

    # Admin actions on a whole subscription.

    def extend(self, subscription: Subscription, days: int, tariff: Tariff) -> Subscription:
        """Push end_date out by days and add the same number of visits.

        remaining_days never goes past the tariff allotment, and a completed
        subscription stays completed: a new one has to be sold instead.
        """
        days = require_positive_int(days, "Количество дней")
        if subscription.status == SubscriptionStatus.COMPLETED:
            raise ValidationError("Завершенный абонемент нельзя продлить")

        self._subscriptions.extend(
            subscription_id=subscription.subscription_id, days=days, max_remaining=tariff.duration_days
        )
        return self._reload(
            subscription.evolve(
                end_date=subscription.end_date + timedelta(days=days),
                remaining_days=min(subscription.remaining_days + days, tariff.duration_days),
            )
        )

    def complete(self, subscription: Subscription) -> Subscription:
        self._subscriptions.set_status(
            subscription_id=subscription.subscription_id, status=SubscriptionStatus.COMPLETED
        )
        return self._reload(subscription.evolve(status=SubscriptionStatus.COMPLETED))

    def resume(self, subscription: Subscription) -> Subscription:
        if subscription.status != SubscriptionStatus.FROZEN:
            raise ValidationError("Разморозить можно только замороженный абонемент")
        self._subscriptions.set_status(subscription_id=subscription.subscription_id, status=SubscriptionStatus.ACTIVE)
        return self._reload(subscription.evolve(status=SubscriptionStatus.ACTIVE))

    def _reload(self, fallback: Subscription) -> Subscription:
        return self._subscriptions.get_by_id(fallback.subscription_id) or fallback
