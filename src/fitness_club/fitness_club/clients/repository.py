from __future__ import annotations

from typing import Optional, Protocol

from .model import Client


class ClientRepository(Protocol):
    def get_by_id(self, client_id: int) -> Optional[Client]:
        raise NotImplementedError

    def get_by_telegram_id(self, telegram_id: str) -> Optional[Client]:
        raise NotImplementedError
