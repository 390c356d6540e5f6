from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Client:
    """Клиент клуба.

    telegram_id is the external chat identity; it is also what the member's
    QR code encodes and what the scanner sends back.
    """

    client_id: int
    telegram_id: str
    full_name: str
    phone: Optional[str] = None
    photo_url: Optional[str] = None

    def summary(self) -> dict:
        return {"id": self.client_id, "fullName": self.full_name, "phone": self.phone}
