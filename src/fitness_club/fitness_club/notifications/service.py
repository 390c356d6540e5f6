from __future__ import annotations

import logging

from ..clients.model import Client
from .gateway import MessageGateway

logger = logging.getLogger(__name__)


def low_balance_text(client: Client, remaining: int) -> str:
    return (
        f"{client.full_name}, в вашем абонементе осталось посещений: {remaining}.\n"
        "Не забудьте продлить абонемент."
    )


class MilestoneNotifier:
    """Low-balance messages to members.

    Delivery is fire-and-forget: failures are logged and never reach the
    attendance flow that triggered them.
    """

    def __init__(self, gateway: MessageGateway):
        self._gateway = gateway

    def notify_low_balance(self, client: Client, remaining: int) -> bool:
        try:
            result = self._gateway.send(client.telegram_id, low_balance_text(client, remaining))
        except Exception:
            logger.exception("Low-balance notification to client %s failed", client.client_id)
            return False

        if not result.ok:
            logger.warning(
                "Low-balance notification to client %s not delivered: %s", client.client_id, result.description
            )
        return result.ok
