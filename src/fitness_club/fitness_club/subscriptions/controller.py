from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/subscriptions/<int:subscription_id>", methods=["PUT"], endpoint="api_subscription_action")
    def api_subscription_action(subscription_id: int):
        data = request.get_json(silent=True) or {}
        try:
            subscription = container.subscription_service.apply_action(
                subscription_id=subscription_id,
                action=data.get("action", ""),
                days=data.get("days"),
            )
            return jsonify({"success": True, "subscription": subscription.summary()}), 200
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Subscription action failed for %s", subscription_id)
            return jsonify({"error": "Внутренняя ошибка сервера"}), 500
