from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Client
from .repository import ClientRepository

_COLUMNS = "client_id, telegram_id, full_name, phone, photo_url"


def _to_client(r: Dict[str, Any]) -> Client:
    return Client(
        client_id=int(r["client_id"]),
        telegram_id=str(r["telegram_id"]),
        full_name=r["full_name"],
        phone=r.get("phone"),
        photo_url=r.get("photo_url"),
    )


class MySQLClientRepository(ClientRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, client_id: int) -> Optional[Client]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM clients WHERE client_id=%s", (int(client_id),))
            r = fetchone(cur)
            return _to_client(r) if r else None

    def get_by_telegram_id(self, telegram_id: str) -> Optional[Client]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM clients WHERE telegram_id=%s", (str(telegram_id),))
            r = fetchone(cur)
            return _to_client(r) if r else None
