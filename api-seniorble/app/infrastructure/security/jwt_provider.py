# app/infrastructure/security/jwt_provider.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from app.config.settings import Settings
from app.core.clock import Clock
from app.core.exceptions import TokenInvalid, TokenTypeMismatch

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class AccessClaims:
    subject: str
    role: str
    email: str | None
    issuer: str
    expires_at: datetime
    jti: str


@dataclass(frozen=True)
class RefreshClaims:
    subject: str
    issuer: str
    expires_at: datetime
    jti: str
    type: str = REFRESH


def _aware_utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class JwtProvider:
    def __init__(self, settings: Settings, *, clock: Clock | None = None) -> None:
        self._access_secret = settings.jwt_secret
        self._refresh_secret = settings.jwt_refresh_secret
        self._issuer = settings.jwt_issuer
        self._algorithm = settings.jwt_algorithm
        self._access_ttl = timedelta(minutes=settings.jwt_access_minutes)
        self._refresh_ttl = timedelta(days=settings.jwt_refresh_days)
        self._clock = clock or _aware_utcnow

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    def _issue(self, *, subject: str, payload: dict, ttl: timedelta, token_type: str, secret: str) -> str:
        now = self._now()
        exp = now + ttl

        claims = {
            "iss": self._issuer,
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "jti": uuid4().hex,
            "typ": token_type,
        }
        claims.update(payload)
        return jwt.encode(claims, secret, algorithm=self._algorithm)

    def issue_access_token(self, *, subject: str, role: str, email: str | None) -> str:
        return self._issue(
            subject=subject,
            payload={"role": role, "email": email},
            ttl=self._access_ttl,
            token_type=ACCESS,
            secret=self._access_secret,
        )

    def issue_refresh_token(self, *, subject: str) -> str:
        # refresh token deve ser minimalista: sem role/email
        return self._issue(
            subject=subject,
            payload={},
            ttl=self._refresh_ttl,
            token_type=REFRESH,
            secret=self._refresh_secret,
        )

    def _decode(self, token: str, *, secret: str) -> dict:
        if not token:
            raise TokenInvalid("Token ausente.")
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss", "sub", "jti", "typ"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenInvalid("Token expirado.") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalid("Token inválido.") from e

    def verify_access(self, token: str) -> AccessClaims:
        claims = self._decode(token, secret=self._access_secret)
        if claims.get("typ") != ACCESS:
            raise TokenTypeMismatch()
        if not claims.get("role"):
            raise TokenInvalid("Token sem role.")

        return AccessClaims(
            subject=str(claims["sub"]),
            role=str(claims["role"]),
            email=claims.get("email"),
            issuer=str(claims["iss"]),
            expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
            jti=str(claims["jti"]),
        )

    def verify_refresh(self, token: str) -> RefreshClaims:
        claims = self._decode(token, secret=self._refresh_secret)
        if claims.get("typ") != REFRESH:
            raise TokenTypeMismatch()

        return RefreshClaims(
            subject=str(claims["sub"]),
            issuer=str(claims["iss"]),
            expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
            jti=str(claims["jti"]),
        )
