from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import DayActionFactory
from .attendance.service import AttendanceService
from .clients.mysql_client_repository import MySQLClientRepository
from .clients.repository import ClientRepository
from .common.venue_clock import VenueClock
from .core.constants import DEFAULT_TELEGRAM_TIMEOUT_SECONDS, DEFAULT_VENUE_UTC_OFFSET_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .notifications.gateway import MessageGateway, TelegramGateway
from .notifications.service import MilestoneNotifier
from .subscriptions.lifecycle import SubscriptionLifecycle
from .subscriptions.mysql_subscription_repository import MySQLSubscriptionRepository
from .subscriptions.repository import SubscriptionRepository
from .subscriptions.service import SubscriptionService
from .tariffs.mysql_tariff_repository import MySQLTariffRepository
from .tariffs.repository import TariffRepository
from .visits.ledger import VisitLedger
from .visits.mysql_visit_repository import MySQLVisitRepository
from .visits.repository import VisitRepository


@dataclass(frozen=True)
class Container:
    clock: VenueClock

    clients_repo: ClientRepository
    tariffs_repo: TariffRepository
    subscriptions_repo: SubscriptionRepository
    visits_repo: VisitRepository

    notifier: MilestoneNotifier
    lifecycle: SubscriptionLifecycle
    ledger: VisitLedger
    attendance_service: AttendanceService
    subscription_service: SubscriptionService


def assemble(
    *,
    clients_repo: ClientRepository,
    tariffs_repo: TariffRepository,
    subscriptions_repo: SubscriptionRepository,
    visits_repo: VisitRepository,
    gateway: MessageGateway,
    clock: VenueClock,
) -> Container:
    """Wire services on top of any repository implementations."""
    notifier = MilestoneNotifier(gateway)
    lifecycle = SubscriptionLifecycle(subscriptions_repo, clock, notifier)
    ledger = VisitLedger(visits_repo, clock)
    attendance_service = AttendanceService(
        clients_repo,
        tariffs_repo,
        lifecycle,
        ledger,
        clock,
        action_factory=DayActionFactory(),
    )
    subscription_service = SubscriptionService(subscriptions_repo, tariffs_repo, lifecycle)

    return Container(
        clock=clock,
        clients_repo=clients_repo,
        tariffs_repo=tariffs_repo,
        subscriptions_repo=subscriptions_repo,
        visits_repo=visits_repo,
        notifier=notifier,
        lifecycle=lifecycle,
        ledger=ledger,
        attendance_service=attendance_service,
        subscription_service=subscription_service,
    )


def build_container(
    *,
    db_config: dict,
    venue_offset_hours: float = DEFAULT_VENUE_UTC_OFFSET_HOURS,
    telegram_token: Optional[str] = None,
    telegram_timeout: float = DEFAULT_TELEGRAM_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        clients_repo=MySQLClientRepository(conn),
        tariffs_repo=MySQLTariffRepository(conn),
        subscriptions_repo=MySQLSubscriptionRepository(conn),
        visits_repo=MySQLVisitRepository(conn),
        gateway=TelegramGateway(telegram_token, timeout=telegram_timeout),
        clock=VenueClock(venue_offset_hours),
    )
