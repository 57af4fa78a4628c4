from flask import Blueprint, jsonify
from sqlalchemy import text

from app.container import get_container
from app.core.clock import utcnow

bp_health = Blueprint("health", __name__)


@bp_health.get("/")
def index():
    return jsonify(
        {
            "status": "ok",
            "message": "Seniorble 백엔드 서버가 정상 작동 중입니다.",
            "timestamp": utcnow().isoformat() + "Z",
        }
    ), 200


@bp_health.get("/health")
def health():
    return jsonify({"status": "healthy", "timestamp": utcnow().isoformat() + "Z"}), 200


@bp_health.get("/health/db")
def health_db():
    with get_container().db.session() as session:
        session.execute(text("select 1"))
    return jsonify({"db": "ok"}), 200
