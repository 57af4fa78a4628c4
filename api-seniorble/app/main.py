# app/main.py
from __future__ import annotations

from datetime import timedelta

import click
from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from app.api.middlewares.error_handler import register_error_handlers
from app.api.routes import register_routes
from app.config.flask_config import configure_app
from app.config.settings import Settings, load_settings
from app.container import EXTENSION_KEY, build_container, get_container
from app.core.clock import utcnow
from app.core.logging import setup_logging


def create_app(settings: Settings | None = None) -> Flask:
    # configuração carregada uma única vez; falta de segredo JWT aborta aqui
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)

    if settings.proxy_hops > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=settings.proxy_hops)

    # ✅ credentials=True: o refresh token vai em cookie
    CORS(
        app,
        origins=settings.cors_origins,
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "OPTIONS"],
    )

    configure_app(app, settings)

    container = build_container(settings)
    if settings.db_auto_create:
        container.db.create_all()
    app.extensions[EXTENSION_KEY] = container

    register_routes(app)
    register_error_handlers(app, debug=settings.debug)
    register_commands(app)

    return app


def register_commands(app: Flask) -> None:
    @app.cli.command("purge-refresh-tokens")
    @click.option("--days", type=int, default=None, help="Retenção após a expiração (padrão: REFRESH_RETENTION_DAYS).")
    def purge_refresh_tokens(days: int | None) -> None:
        container = get_container()
        retention = days if days is not None else container.settings.refresh_retention_days
        removed = container.sessions.purge_expired(before=utcnow() - timedelta(days=retention))
        click.echo(f"{removed} refresh tokens removidos")


if __name__ == "__main__":
    # em produção: gunicorn -k eventlet wsgi:app
    create_app().run(host="0.0.0.0", port=8000, debug=True)
