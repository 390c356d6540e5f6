from __future__ import annotations

from typing import Any, Optional

from ..core.enums import SubscriptionAction
from ..core.exceptions import NotFoundError, ValidationError
from ..tariffs.repository import TariffRepository
from .lifecycle import SubscriptionLifecycle
from .model import Subscription
from .repository import SubscriptionRepository


class SubscriptionService:
    """Admin actions on a whole subscription (extend, complete, resume)."""

    def __init__(
        self,
        subscriptions: SubscriptionRepository,
        tariffs: TariffRepository,
        lifecycle: SubscriptionLifecycle,
    ):
        self._subscriptions = subscriptions
        self._tariffs = tariffs
        self._lifecycle = lifecycle

    def apply_action(self, *, subscription_id: int, action: str, days: Optional[Any] = None) -> Subscription:
        try:
            sub_action = SubscriptionAction(str(action or "").strip().lower())
        except ValueError:
            raise ValidationError("Неизвестное действие")

        subscription = self._subscriptions.get_by_id(int(subscription_id))
        if subscription is None:
            raise NotFoundError("Абонемент не найден")

        if sub_action == SubscriptionAction.EXTEND:
            tariff = self._tariffs.get_by_id(subscription.tariff_id)
            if tariff is None:
                raise RuntimeError(
                    f"Tariff {subscription.tariff_id} of subscription {subscription.subscription_id} does not exist"
                )
            return self._lifecycle.extend(subscription, days, tariff)
        if sub_action == SubscriptionAction.COMPLETE:
            return self._lifecycle.complete(subscription)
        return self._lifecycle.resume(subscription)
