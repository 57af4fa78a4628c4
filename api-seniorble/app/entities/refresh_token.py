# app/entities/refresh_token.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class RefreshTokenRecord:
    user_id: int
    token_hash: str
    jti: str
    family_id: str
    expires_at: datetime

    revoked: bool = False
    revoked_at: Optional[datetime] = None
    reason: Optional[str] = None
    replaced_by_jti: Optional[str] = None
    last_used_at: Optional[datetime] = None

    user_agent: Optional[str] = None
    ip_address: Optional[str] = None

    # preenchidos pelo store no insert
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
