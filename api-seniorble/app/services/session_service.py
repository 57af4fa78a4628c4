# app/services/session_service.py
"""
Ciclo de vida da sessão: login, rotação do refresh token e logout.

Estados de um refresh token: ACTIVE -> REVOKED, ou ACTIVE -> EXPIRED -> REVOKED
(expiração detectada no uso). REVOKED é terminal.

Falhas esperadas de autenticação voltam como ``Err(AuthFailure)``; exceções
ficam para erro de infraestrutura (banco, configuração).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from app.core.clock import Clock, utcnow
from app.core.exceptions import TokenInvalid
from app.core.interfaces.refresh_token_store import RefreshTokenStore
from app.core.logging import mask_email
from app.core.result import AuthFailure, Err, Ok, Result
from app.entities.account import Account
from app.entities.refresh_token import RefreshTokenRecord
from app.infrastructure.database.session import Database
from app.infrastructure.security.jwt_provider import JwtProvider
from app.infrastructure.security.password_hasher import PasswordHasher
from app.infrastructure.security.token_hash import hash_token
from app.repositories.user_repository import UserRepository
from app.services.user_service import normalize_email, to_account

log = logging.getLogger("seniorble.auth")

REASON_LOGOUT = "logout"
REASON_ROTATED = "rotated"
REASON_EXPIRED = "expired"
REASON_REUSE = "reuse_detected"


@dataclass(frozen=True)
class ClientInfo:
    user_agent: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    refresh_token: str
    account: Account


class SessionService:
    def __init__(
        self,
        *,
        db: Database,
        store: RefreshTokenStore,
        jwt_provider: JwtProvider,
        hasher: PasswordHasher,
        reuse_revokes_family: bool = True,
        clock: Clock = utcnow,
    ) -> None:
        self._db = db
        self._store = store
        self._jwt = jwt_provider
        self._hasher = hasher
        self._reuse_revokes_family = reuse_revokes_family
        self._clock = clock

    # -------------------------
    # Helpers
    # -------------------------

    def _load_user(self, *, email: str | None = None, user_id: int | None = None):
        with self._db.session() as session:
            repo = UserRepository(session)
            if email is not None:
                return repo.get_by_email(email)
            return repo.get_by_id(user_id)

    def _issue_access(self, account: Account) -> str:
        return self._jwt.issue_access_token(subject=str(account.id), role=account.role, email=account.email)

    def _start_refresh(self, *, user_id: int, family_id: str, client: ClientInfo) -> tuple[str, RefreshTokenRecord]:
        token = self._jwt.issue_refresh_token(subject=str(user_id))
        claims = self._jwt.verify_refresh(token)

        record = self._store.insert(
            RefreshTokenRecord(
                user_id=user_id,
                token_hash=hash_token(token),
                jti=claims.jti,
                family_id=family_id,
                expires_at=claims.expires_at.astimezone(timezone.utc).replace(tzinfo=None),
                user_agent=client.user_agent,
                ip_address=client.ip_address,
                created_at=self._clock(),
            )
        )
        return token, record

    def _has_successor(self, record: RefreshTokenRecord) -> bool:
        # rotação interrompida (insert falhou): sucessor nunca gravado, não é replay
        if not record.replaced_by_jti:
            return False
        return self._store.find_by_jti(record.replaced_by_jti) is not None

    def _handle_reuse(self, record: RefreshTokenRecord) -> Err:
        # token já rotacionado apresentado de novo: sinal de roubo
        if self._reuse_revokes_family:
            revoked = self._store.revoke_family(record.family_id, reason=REASON_REUSE)
            log.warning(
                "refresh reuse detected: user_id=%s family=%s revoked=%s",
                record.user_id, record.family_id, revoked,
            )
        else:
            log.warning("refresh reuse detected: user_id=%s family=%s", record.user_id, record.family_id)
        return Err(AuthFailure.REUSE_DETECTED)

    # -------------------------
    # Operações
    # -------------------------

    def login(self, *, email: str, password: str, client: ClientInfo | None = None) -> Result[LoginResult]:
        client = client or ClientInfo()
        email = normalize_email(email)

        user = self._load_user(email=email)
        if user is None:
            # mesmo custo de bcrypt do caminho "senha errada"
            self._hasher.dummy_verify(password)
            log.info("login failed: email=%s", mask_email(email))
            return Err(AuthFailure.INVALID_CREDENTIALS)

        if not self._hasher.verify_password(password, user.password_hash):
            log.info("login failed: email=%s", mask_email(email))
            return Err(AuthFailure.INVALID_CREDENTIALS)

        account = to_account(user)
        access = self._issue_access(account)
        refresh, record = self._start_refresh(user_id=account.id, family_id=uuid4().hex, client=client)

        log.info("login ok: user_id=%s refresh_id=%s", account.id, record.id)
        return Ok(LoginResult(access_token=access, refresh_token=refresh, account=account))

    def refresh(self, presented: str | None, *, client: ClientInfo | None = None) -> Result[TokenPair]:
        client = client or ClientInfo()

        if not presented:
            return Err(AuthFailure.MISSING_CREDENTIAL)

        try:
            claims = self._jwt.verify_refresh(presented)
        except TokenInvalid as e:
            log.info("refresh rejected: %s", e)
            return Err(AuthFailure.INVALID_TOKEN)

        record = self._store.find_by_hash(hash_token(presented))
        if record is None:
            log.info("refresh rejected: unknown token sub=%s", claims.subject)
            return Err(AuthFailure.UNKNOWN_TOKEN)

        if record.revoked:
            if record.reason == REASON_ROTATED and self._has_successor(record):
                return self._handle_reuse(record)
            log.info("refresh rejected: revoked id=%s reason=%s", record.id, record.reason)
            return Err(AuthFailure.REVOKED)

        now = self._clock()
        if record.is_expired(now):
            self._store.revoke(record.id, reason=REASON_EXPIRED, last_used_at=now)
            log.info("refresh rejected: expired id=%s", record.id)
            return Err(AuthFailure.EXPIRED)

        user = self._load_user(user_id=record.user_id)
        if user is None:
            self._store.revoke(record.id, reason=REASON_LOGOUT, last_used_at=now)
            log.warning("refresh rejected: account gone user_id=%s", record.user_id)
            return Err(AuthFailure.UNKNOWN_ACCOUNT)

        # ✅ rotação: o novo jti é gerado antes para ficar registrado no antigo
        new_refresh = self._jwt.issue_refresh_token(subject=str(record.user_id))
        new_claims = self._jwt.verify_refresh(new_refresh)

        # revoga primeiro (commit próprio); se outro request já rotacionou, perdemos
        won = self._store.revoke(
            record.id,
            reason=REASON_ROTATED,
            replaced_by_jti=new_claims.jti,
            last_used_at=now,
        )
        if not won:
            return self._handle_reuse(record)

        # se o insert falhar aqui, o antigo já está revogado: cliente fica deslogado
        self._store.insert(
            RefreshTokenRecord(
                user_id=record.user_id,
                token_hash=hash_token(new_refresh),
                jti=new_claims.jti,
                family_id=record.family_id,
                expires_at=new_claims.expires_at.astimezone(timezone.utc).replace(tzinfo=None),
                user_agent=client.user_agent,
                ip_address=client.ip_address,
                created_at=now,
            )
        )

        access = self._issue_access(to_account(user))
        log.info("refresh ok: user_id=%s family=%s", record.user_id, record.family_id)
        return Ok(TokenPair(access_token=access, refresh_token=new_refresh))

    def logout(self, presented: str | None) -> None:
        if not presented:
            return
        self._store.revoke_by_hash(hash_token(presented), reason=REASON_LOGOUT)
        log.info("logout: refresh revoked")

    def purge_expired(self, *, before: datetime) -> int:
        removed = self._store.purge_expired(before=before)
        log.info("purged %s refresh tokens expired before %s", removed, before.isoformat())
        return removed
