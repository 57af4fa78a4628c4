# app/core/interfaces/refresh_token_store.py
from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.entities.refresh_token import RefreshTokenRecord


class RefreshTokenStore(Protocol):
    """
    Persistência dos refresh tokens (somente hashes).
    Cada operação é atômica e já confirmada quando retorna.
    """

    def insert(self, record: RefreshTokenRecord) -> RefreshTokenRecord:
        ...

    def find_by_hash(self, token_hash: str) -> RefreshTokenRecord | None:
        ...

    def find_by_jti(self, jti: str) -> RefreshTokenRecord | None:
        ...

    def revoke(
        self,
        record_id: int,
        *,
        reason: str,
        replaced_by_jti: str | None = None,
        last_used_at: datetime | None = None,
    ) -> bool:
        # True somente para a chamada que fez revoked false -> true
        ...

    def revoke_by_hash(self, token_hash: str, *, reason: str) -> None:
        ...

    def revoke_family(self, family_id: str, *, reason: str) -> int:
        ...

    def purge_expired(self, *, before: datetime) -> int:
        ...
