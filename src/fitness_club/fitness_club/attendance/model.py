from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..clients.model import Client
from ..common.venue_clock import DayWindow
from ..core.enums import AttendanceErrorType
from ..subscriptions.model import Subscription
from ..tariffs.model import Tariff
from ..visits.model import Visit

ERROR_MESSAGES: Dict[AttendanceErrorType, str] = {
    AttendanceErrorType.CLIENT_NOT_FOUND: "Клиент не найден в системе",
    AttendanceErrorType.NO_ACTIVE_SUBSCRIPTION: "У клиента нет активного абонемента",
    AttendanceErrorType.SUBSCRIPTION_EXPIRED: "Срок действия абонемента истек",
    AttendanceErrorType.OUTSIDE_WORKING_HOURS: "Фитнес-клуб сейчас закрыт для этого тарифа",
    AttendanceErrorType.ALREADY_VISITED_TODAY: "Посещение на сегодня уже отмечено",
    AttendanceErrorType.ALREADY_FROZEN_TODAY: "Сегодняшний день уже заморожен",
    AttendanceErrorType.QUOTA_EXCEEDED: "Лимит заморозок исчерпан",
    AttendanceErrorType.NOT_FOUND: "Запись о заморозке на сегодня не найдена",
}


@dataclass(frozen=True)
class AttendanceContext:
    """Everything a check-in decision reads, loaded once per request."""

    client: Client
    subscription: Subscription
    tariff: Tariff
    window: Optional[DayWindow] = None
    regular_visit: Optional[Visit] = None
    freeze_visit: Optional[Visit] = None


@dataclass(frozen=True)
class AttendanceOutcome:
    """Accept/reject result of check, commit and freeze/unfreeze.

    Rule violations are values of this type, not exceptions: callers branch on
    error_type to render their own screens.
    """

    success: bool
    message: str = ""
    error_type: Optional[AttendanceErrorType] = None
    client: Optional[Client] = None
    subscription: Optional[Subscription] = None
    tariff: Optional[Tariff] = None
    visit: Optional[Visit] = None
    visit_time: Optional[datetime] = None
    working_hours: Optional[Dict[str, str]] = None
    can_freeze: bool = False
    is_frozen_today: bool = False
    can_unfreeze: bool = False

    @classmethod
    def failure(
        cls,
        error_type: AttendanceErrorType,
        *,
        client: Optional[Client] = None,
        subscription: Optional[Subscription] = None,
        tariff: Optional[Tariff] = None,
        message: Optional[str] = None,
        **extra: Any,
    ) -> "AttendanceOutcome":
        return cls(
            success=False,
            error_type=error_type,
            message=message or ERROR_MESSAGES[error_type],
            client=client,
            subscription=subscription,
            tariff=tariff,
            **extra,
        )

    @classmethod
    def rejected(cls, ctx: AttendanceContext, error_type: AttendanceErrorType, **extra: Any) -> "AttendanceOutcome":
        return cls.failure(error_type, client=ctx.client, subscription=ctx.subscription, tariff=ctx.tariff, **extra)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success}
        if self.success:
            data["message"] = self.message
        else:
            data["error"] = self.message
            data["errorType"] = self.error_type.value if self.error_type else None

        if self.client is not None:
            data["client"] = self.client.summary()
        if self.subscription is not None:
            tariff_name = self.tariff.name if self.tariff is not None else None
            data["subscription"] = self.subscription.summary(tariff_name=tariff_name)
        if self.working_hours is not None:
            data["workingHours"] = self.working_hours
        if self.visit_time is not None:
            data["visitTime"] = self.visit_time.isoformat()
        if self.visit is not None:
            data["visit"] = self.visit.summary()
        if self.success:
            data["canFreeze"] = self.can_freeze
            data["isFrozenToday"] = self.is_frozen_today
            data["canUnfreeze"] = self.can_unfreeze
        return data
