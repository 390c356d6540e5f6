from __future__ import annotations

import logging

import requests

from fakes import RecordingGateway, make_client
from src.fitness_club.fitness_club.notifications.gateway import TelegramGateway
from src.fitness_club.fitness_club.notifications.service import MilestoneNotifier, low_balance_text


class FakeResponse:
    def __init__(self, status_code: int, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response: FakeResponse):
        self.response = response
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        return self.response


def test_send_posts_to_bot_api():
    session = FakeSession(FakeResponse(200, {"ok": True, "result": {"message_id": 1}}))
    gateway = TelegramGateway("123:abc", timeout=5, session=session)

    result = gateway.send("555001", "hello")

    assert result.ok is True
    assert session.calls == [
        {
            "url": "https://api.telegram.org/bot123:abc/sendMessage",
            "json": {"chat_id": "555001", "text": "hello"},
            "timeout": 5,
        }
    ]


def test_missing_token_skips_http():
    session = FakeSession(FakeResponse(200, {"ok": True}))

    result = TelegramGateway("  ", session=session).send("555001", "hello")

    assert result.ok is False
    assert session.calls == []


def test_rejected_message_is_not_ok(caplog):
    session = FakeSession(FakeResponse(403, {"ok": False, "description": "Forbidden: bot was blocked by the user"}))

    with caplog.at_level(logging.WARNING):
        result = TelegramGateway("123:abc", session=session).send("555001", "hello")

    assert result.ok is False
    assert result.description == "Forbidden: bot was blocked by the user"
    assert "sendMessage" in caplog.text


def test_non_json_reply_is_not_ok():
    session = FakeSession(FakeResponse(502))

    assert TelegramGateway("123:abc", session=session).send("555001", "hello").ok is False


def test_low_balance_text_mentions_name_and_count():
    text = low_balance_text(make_client(), 2)

    assert "Айгерим Садыкова" in text
    assert ": 2." in text


def test_notifier_delivers_to_member_identity():
    gateway = RecordingGateway()

    assert MilestoneNotifier(gateway).notify_low_balance(make_client(), 3) is True
    assert gateway.sent[0][0] == "555001"


def test_notifier_swallows_transport_errors(caplog):
    gateway = RecordingGateway(error=requests.ConnectionError("network down"))

    with caplog.at_level(logging.ERROR):
        delivered = MilestoneNotifier(gateway).notify_low_balance(make_client(), 1)

    assert delivered is False
    assert "Low-balance notification" in caplog.text


def test_notifier_reports_undelivered(caplog):
    with caplog.at_level(logging.WARNING):
        delivered = MilestoneNotifier(RecordingGateway(ok=False)).notify_low_balance(make_client(), 1)

    assert delivered is False
    assert "not delivered" in caplog.text
