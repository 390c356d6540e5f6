from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import SubscriptionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Subscription
from .repository import SubscriptionRepository

_COLUMNS = "subscription_id, client_id, tariff_id, status, start_date, end_date, remaining_days, freeze_used"


def to_subscription(r: Dict[str, Any]) -> Subscription:
    return Subscription(
        subscription_id=int(r["subscription_id"]),
        client_id=int(r["client_id"]),
        tariff_id=int(r["tariff_id"]),
        status=SubscriptionStatus(r["status"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        remaining_days=int(r["remaining_days"]),
        freeze_used=int(r.get("freeze_used") or 0),
    )


class MySQLSubscriptionRepository(SubscriptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, subscription_id: int) -> Optional[Subscription]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subscriptions WHERE subscription_id=%s", (int(subscription_id),))
            r = fetchone(cur)
            return to_subscription(r) if r else None

    def list_for_client(self, client_id: int, *, status: Optional[SubscriptionStatus] = None) -> Sequence[Subscription]:
        clauses = ["client_id=%s"]
        params: list[object] = [int(client_id)]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM subscriptions
                WHERE {" AND ".join(clauses)}
                ORDER BY end_date DESC, subscription_id DESC
                """,
                tuple(params),
            )
            return [to_subscription(r) for r in fetchall(cur)]

    def set_status(self, *, subscription_id: int, status: SubscriptionStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE subscriptions SET status=%s WHERE subscription_id=%s",
                (status.value, int(subscription_id)),
            )
            return cur.rowcount > 0

    def extend(self, *, subscription_id: int, days: int, max_remaining: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE subscriptions
                SET end_date = end_date + INTERVAL %s DAY,
                    remaining_days = LEAST(remaining_days + %s, %s)
                WHERE subscription_id=%s AND status <> 'completed'
                """,
                (int(days), int(days), int(max_remaining), int(subscription_id)),
            )
            return cur.rowcount > 0
