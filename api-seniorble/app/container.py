# app/container.py
from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from app.config.settings import Settings
from app.infrastructure.database.session import Database
from app.infrastructure.security.jwt_provider import JwtProvider
from app.infrastructure.security.password_hasher import PasswordHasher
from app.repositories.refresh_token_repository import SqlRefreshTokenStore
from app.services.session_service import SessionService

EXTENSION_KEY = "seniorble"


@dataclass(frozen=True)
class ServiceContainer:
    """Tudo que é montado uma vez na inicialização e só lido depois."""

    settings: Settings
    db: Database
    jwt_provider: JwtProvider
    hasher: PasswordHasher
    sessions: SessionService


def build_container(settings: Settings) -> ServiceContainer:
    db = Database(settings.database_url, echo=settings.debug)
    jwt_provider = JwtProvider(settings)
    hasher = PasswordHasher(settings.bcrypt_rounds)

    sessions = SessionService(
        db=db,
        store=SqlRefreshTokenStore(db),
        jwt_provider=jwt_provider,
        hasher=hasher,
        reuse_revokes_family=settings.refresh_reuse_revokes_family,
    )
    return ServiceContainer(
        settings=settings,
        db=db,
        jwt_provider=jwt_provider,
        hasher=hasher,
        sessions=sessions,
    )


def get_container() -> ServiceContainer:
    return current_app.extensions[EXTENSION_KEY]
