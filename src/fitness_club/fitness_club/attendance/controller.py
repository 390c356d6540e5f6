from __future__ import annotations

import logging
from typing import Callable

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container
from .model import AttendanceOutcome

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _telegram_id(data: dict) -> str:
        return str(data.get("telegramId") or "").strip()

    def _respond(run: Callable[[], AttendanceOutcome], *, what: str):
        try:
            outcome = run()
            return jsonify(outcome.to_dict()), 200
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Attendance %s failed", what)
            return jsonify({"error": "Внутренняя ошибка сервера"}), 500

    @app.route("/api/visits", methods=["POST"], endpoint="api_visit_check")
    def api_visit_check():
        """Dry run: can this member come in right now?"""
        data = request.get_json(silent=True) or {}
        telegram_id = _telegram_id(data)
        if not telegram_id:
            return jsonify({"error": "Telegram ID обязателен"}), 400
        return _respond(lambda: container.attendance_service.check(telegram_id), what="check")

    @app.route("/api/visits", methods=["PUT"], endpoint="api_visit_commit")
    def api_visit_commit():
        """Confirm the visit after the scanner's confirmation screen."""
        data = request.get_json(silent=True) or {}
        telegram_id = _telegram_id(data)
        if not telegram_id:
            return jsonify({"error": "Telegram ID обязателен"}), 400
        return _respond(lambda: container.attendance_service.commit(telegram_id), what="commit")

    @app.route("/api/visits/freeze", methods=["POST"], endpoint="api_visit_freeze")
    def api_visit_freeze():
        data = request.get_json(silent=True) or {}
        telegram_id = _telegram_id(data)
        if not telegram_id:
            return jsonify({"error": "Telegram ID обязателен"}), 400

        visit_id = data.get("visitId")
        try:
            visit_id = int(visit_id) if visit_id not in (None, "") else None
        except (TypeError, ValueError):
            return jsonify({"error": "Некорректный ID посещения"}), 400

        return _respond(
            lambda: container.attendance_service.freeze_day(telegram_id, data.get("action", ""), visit_id=visit_id),
            what="freeze",
        )
