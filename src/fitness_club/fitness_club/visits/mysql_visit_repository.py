from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from .model import Visit
from .repository import VisitRepository

_COLUMNS = "visit_id, client_id, subscription_id, visit_date, is_freeze_day, qr_code"

_INSERT_VISIT = """
    INSERT INTO visits(client_id, subscription_id, visit_date, visit_day, is_freeze_day, qr_code)
    VALUES(%s,%s,%s,%s,%s,%s)
"""

# MySQL evaluates SET left to right, so status sees the decremented counter.
_CONSUME_VISIT = """
    UPDATE subscriptions
    SET remaining_days = remaining_days - 1,
        status = IF(remaining_days = 0, 'completed', status)
    WHERE subscription_id=%s AND status='active' AND remaining_days > 0
"""


def _to_visit(r: Dict[str, Any]) -> Visit:
    return Visit(
        visit_id=int(r["visit_id"]),
        client_id=int(r["client_id"]),
        subscription_id=int(r["subscription_id"]),
        visit_date=r["visit_date"],
        is_freeze_day=bool(r["is_freeze_day"]),
        qr_code=r.get("qr_code") or "",
    )


class MySQLVisitRepository(VisitRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_in_window(
        self,
        *,
        client_id: int,
        subscription_id: int,
        start: datetime,
        end: datetime,
        is_freeze_day: bool,
    ) -> Optional[Visit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM visits
                WHERE client_id=%s AND subscription_id=%s
                  AND visit_date >= %s AND visit_date < %s
                  AND is_freeze_day=%s
                ORDER BY visit_date ASC
                LIMIT 1
                """,
                (int(client_id), int(subscription_id), start, end, int(bool(is_freeze_day))),
            )
            r = fetchone(cur)
            return _to_visit(r) if r else None

    def create_visit_and_consume(
        self,
        *,
        client_id: int,
        subscription_id: int,
        visit_date: datetime,
        qr_code: str,
    ) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_CONSUME_VISIT, (int(subscription_id),))
                if cur.rowcount == 0:
                    return None
                # A duplicate here rolls the decrement back with it.
                cur.execute(
                    _INSERT_VISIT,
                    (int(client_id), int(subscription_id), visit_date, visit_date.date(), 0, qr_code),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                return None
            raise

    def create_freeze_day(
        self,
        *,
        client_id: int,
        subscription_id: int,
        visit_date: datetime,
        qr_code: str,
        freeze_used: int,
    ) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    _INSERT_VISIT,
                    (int(client_id), int(subscription_id), visit_date, visit_date.date(), 1, qr_code),
                )
                visit_id = int(cur.lastrowid)
                cur.execute(
                    "UPDATE subscriptions SET freeze_used=%s WHERE subscription_id=%s",
                    (int(freeze_used), int(subscription_id)),
                )
                return visit_id
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                return None
            raise

    def delete_freeze_day(self, *, visit_id: int, subscription_id: int, freeze_used: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM visits WHERE visit_id=%s AND subscription_id=%s AND is_freeze_day=1",
                (int(visit_id), int(subscription_id)),
            )
            if cur.rowcount == 0:
                return False
            cur.execute(
                "UPDATE subscriptions SET freeze_used=%s WHERE subscription_id=%s",
                (max(0, int(freeze_used)), int(subscription_id)),
            )
            return True
