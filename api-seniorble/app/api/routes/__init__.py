# app/api/routes/__init__.py

from flask import Flask

from app.api.routes.health_routes import bp_health
from app.api.routes.auth_routes import bp_auth
from app.api.routes.patient_routes import bp_patients


def register_routes(app: Flask) -> None:
    app.register_blueprint(bp_health)

    # /signup, /login, /logout, /auth/*
    app.register_blueprint(bp_auth)

    app.register_blueprint(bp_patients, url_prefix="/patients")
