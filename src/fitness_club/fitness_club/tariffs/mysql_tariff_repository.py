from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Tariff
from .repository import TariffRepository


class MySQLTariffRepository(TariffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, tariff_id: int) -> Optional[Tariff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tariff_id, name, price, duration_days, duration, start_time, end_time, freeze_limit
                FROM tariffs
                WHERE tariff_id=%s
                """,
                (int(tariff_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Tariff(
                tariff_id=int(r["tariff_id"]),
                name=r["name"],
                price=Decimal(str(r.get("price") or 0)),
                duration_days=int(r["duration_days"]),
                duration=int(r.get("duration") or 0),
                start_time=normalize_mysql_time(r["start_time"]),
                end_time=normalize_mysql_time(r["end_time"]),
                freeze_limit=int(r.get("freeze_limit") or 0),
            )
