# app/repositories/refresh_token_repository.py

from datetime import datetime

from sqlalchemy import delete, select, update

from app.core.base_repository import BaseRepository
from app.core.clock import utcnow
from app.entities.refresh_token import RefreshTokenRecord
from app.infrastructure.database.models.refresh_token_model import RefreshTokenModel
from app.infrastructure.database.session import Database


def _to_record(model: RefreshTokenModel) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        id=model.id,
        user_id=model.user_id,
        token_hash=model.token_hash,
        jti=model.jti,
        family_id=model.family_id,
        expires_at=model.expires_at,
        revoked=bool(model.revoked),
        revoked_at=model.revoked_at,
        reason=model.reason,
        replaced_by_jti=model.replaced_by_jti,
        last_used_at=model.last_used_at,
        user_agent=model.user_agent,
        ip_address=model.ip_address,
        created_at=model.created_at,
    )


class RefreshTokenRepository(BaseRepository[RefreshTokenModel]):
    def get_by_hash(self, token_hash: str) -> RefreshTokenModel | None:
        stmt = select(RefreshTokenModel).where(RefreshTokenModel.token_hash == token_hash)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_jti(self, jti: str) -> RefreshTokenModel | None:
        stmt = select(RefreshTokenModel).where(RefreshTokenModel.jti == jti)
        return self._session.execute(stmt).scalar_one_or_none()

    def revoke(
        self,
        *,
        token_id: int,
        reason: str | None = None,
        replaced_by_jti: str | None = None,
        last_used_at: datetime | None = None,
    ) -> bool:
        values = {"revoked": True, "revoked_at": utcnow(), "reason": reason, "replaced_by_jti": replaced_by_jti}
        if last_used_at is not None:
            values["last_used_at"] = last_used_at

        # compare-and-set: só a primeira revogação "vence"
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.id == token_id, RefreshTokenModel.revoked.is_(False))
            .values(**values)
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    def revoke_by_hash(self, *, token_hash: str, reason: str | None = None) -> bool:
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash, RefreshTokenModel.revoked.is_(False))
            .values(revoked=True, revoked_at=utcnow(), reason=reason)
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    def revoke_family(self, *, family_id: str, reason: str | None = None) -> int:
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.family_id == family_id, RefreshTokenModel.revoked.is_(False))
            .values(revoked=True, revoked_at=utcnow(), reason=reason)
        )
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)

    def delete_expired(self, *, before: datetime) -> int:
        # só o prazo conta: revogado e ainda no prazo fica, para detectar replay
        stmt = delete(RefreshTokenModel).where(RefreshTokenModel.expires_at < before)
        result = self._session.execute(stmt)
        return int(result.rowcount or 0)


class SqlRefreshTokenStore:
    """RefreshTokenStore sobre o repositório: uma transação por operação."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def insert(self, record: RefreshTokenRecord) -> RefreshTokenRecord:
        with self._db.session() as session:
            model = RefreshTokenModel(
                user_id=record.user_id,
                token_hash=record.token_hash,
                jti=record.jti,
                family_id=record.family_id,
                created_at=record.created_at or utcnow(),
                expires_at=record.expires_at,
                last_used_at=record.last_used_at,
                revoked=False,
                revoked_at=None,
                replaced_by_jti=None,
                reason=None,
                user_agent=record.user_agent[:255] if record.user_agent else None,
                ip_address=record.ip_address,
            )
            RefreshTokenRepository(session).add(model)
            return _to_record(model)

    def find_by_hash(self, token_hash: str) -> RefreshTokenRecord | None:
        with self._db.session() as session:
            model = RefreshTokenRepository(session).get_by_hash(token_hash)
            return _to_record(model) if model is not None else None

    def find_by_jti(self, jti: str) -> RefreshTokenRecord | None:
        with self._db.session() as session:
            model = RefreshTokenRepository(session).get_by_jti(jti)
            return _to_record(model) if model is not None else None

    def revoke(
        self,
        record_id: int,
        *,
        reason: str,
        replaced_by_jti: str | None = None,
        last_used_at: datetime | None = None,
    ) -> bool:
        with self._db.session() as session:
            return RefreshTokenRepository(session).revoke(
                token_id=record_id,
                reason=reason,
                replaced_by_jti=replaced_by_jti,
                last_used_at=last_used_at,
            )

    def revoke_by_hash(self, token_hash: str, *, reason: str) -> None:
        with self._db.session() as session:
            RefreshTokenRepository(session).revoke_by_hash(token_hash=token_hash, reason=reason)

    def revoke_family(self, family_id: str, *, reason: str) -> int:
        with self._db.session() as session:
            return RefreshTokenRepository(session).revoke_family(family_id=family_id, reason=reason)

    def purge_expired(self, *, before: datetime) -> int:
        with self._db.session() as session:
            return RefreshTokenRepository(session).delete_expired(before=before)
