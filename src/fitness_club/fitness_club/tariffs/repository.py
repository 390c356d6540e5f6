from __future__ import annotations

from typing import Optional, Protocol

from .model import Tariff


class TariffRepository(Protocol):
    def get_by_id(self, tariff_id: int) -> Optional[Tariff]:
        raise NotImplementedError
