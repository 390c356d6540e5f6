from __future__ import annotations

import logging

from flask import Flask, jsonify, send_file

from ..core.enums import AttendanceErrorType
from ..container import Container
from .qr import render_member_qr

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clients/<int:client_id>/qr", methods=["GET"], endpoint="api_client_qr")
    def api_client_qr(client_id: int):
        try:
            client = container.clients_repo.get_by_id(client_id)
            if client is None:
                return jsonify({"error": "Клиент не найден", "errorType": AttendanceErrorType.CLIENT_NOT_FOUND.value}), 404
            return send_file(render_member_qr(client), mimetype="image/png", download_name=f"qr-{client_id}.png")
        except Exception:
            logger.exception("QR generation failed for client %s", client_id)
            return jsonify({"error": "Ошибка при генерации QR-кода"}), 500
