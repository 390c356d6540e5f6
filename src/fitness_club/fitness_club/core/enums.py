from __future__ import annotations

from enum import Enum


class SubscriptionStatus(str, Enum):
    """Статус абонемента, хранимый в БД."""

    ACTIVE = "active"
    FROZEN = "frozen"
    COMPLETED = "completed"


class AttendanceErrorType(str, Enum):
    """Stable outcome codes the dashboard, bot and scanner branch on."""

    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
    NO_ACTIVE_SUBSCRIPTION = "NO_ACTIVE_SUBSCRIPTION"
    SUBSCRIPTION_EXPIRED = "SUBSCRIPTION_EXPIRED"
    OUTSIDE_WORKING_HOURS = "OUTSIDE_WORKING_HOURS"
    ALREADY_VISITED_TODAY = "ALREADY_VISITED_TODAY"
    ALREADY_FROZEN_TODAY = "ALREADY_FROZEN_TODAY"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"


class ExpiryReason(str, Enum):
    """Why reconcile_expiry moved a subscription to completed."""

    NONE = "NONE"
    EXPIRED = "EXPIRED"
    EXHAUSTED = "EXHAUSTED"


class DayAction(str, Enum):
    FREEZE = "freeze"
    UNFREEZE = "unfreeze"


class SubscriptionAction(str, Enum):
    EXTEND = "extend"
    COMPLETE = "complete"
    RESUME = "resume"
