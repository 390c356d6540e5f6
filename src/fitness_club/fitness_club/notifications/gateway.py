from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import requests

from ..core.constants import DEFAULT_TELEGRAM_TIMEOUT_SECONDS, TELEGRAM_API_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    ok: bool
    description: Optional[str] = None


class MessageGateway(Protocol):
    def send(self, identity: str, text: str) -> SendResult:
        raise NotImplementedError


class TelegramGateway(MessageGateway):
    """Outbound text messages through the Telegram Bot API."""

    def __init__(
        self,
        bot_token: Optional[str],
        *,
        timeout: float = DEFAULT_TELEGRAM_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        api_url: str = TELEGRAM_API_URL,
    ):
        self._bot_token = (bot_token or "").strip()
        self._timeout = timeout
        self._session = session or requests.Session()
        self._api_url = api_url.rstrip("/")

    def send(self, identity: str, text: str) -> SendResult:
        if not self._bot_token:
            return SendResult(ok=False, description="Telegram bot token is not configured")

        response = self._session.post(
            f"{self._api_url}/bot{self._bot_token}/sendMessage",
            json={"chat_id": str(identity), "text": text},
            timeout=self._timeout,
        )
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        ok = bool(payload.get("ok")) and response.status_code == 200
        description = payload.get("description")
        if not ok:
            logger.warning("Telegram sendMessage to %s failed: %s %s", identity, response.status_code, description)
        return SendResult(ok=ok, description=description)
