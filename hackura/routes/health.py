"""Health endpoint for container and load-balancer checks.

``GET /healthz`` answers ``{"status", "db", "version"}``; a failed catalog
database round-trip turns the status into ``degraded`` with HTTP 500.
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hackura import config as app_config
from hackura.db.engine import app_session
from hackura.utils.logging import get_logger

LOG = get_logger("hackura.health")

bp = Blueprint("health", __name__)


def probe_database() -> bool:
    try:
        with app_session() as s:
            s.execute(text("SELECT 1"))
    except (SQLAlchemyError, RuntimeError) as exc:
        LOG.warning("Catalog DB probe failed: %s", exc)
        return False
    return True


def health_report() -> Tuple[Dict[str, Any], int]:
    db_ok = probe_database()
    payload = {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
        "version": app_config.metadata()["version"],
    }
    return payload, 200 if db_ok else 500


@bp.route("/healthz", methods=["GET"])
def healthz():
    payload, status_code = health_report()
    return jsonify(payload), status_code


def register_health(app: Any) -> None:
    if getattr(app, "_hackura_health_bp", None):
        return
    app.register_blueprint(bp)
    setattr(app, "_hackura_health_bp", bp)


__all__ = ["probe_database", "health_report", "register_health"]
