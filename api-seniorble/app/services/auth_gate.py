# app/services/auth_gate.py
"""
Gate de autorização: funções puras sobre um ``AuthContext`` imutável.

``authenticate`` e ``require_role`` devolvem um contexto novo (ou ``Err``),
então podem ser compostas em sequência sem mutar o request.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from app.core.exceptions import TokenInvalid
from app.core.result import AuthFailure, Err, Ok, Result
from app.entities.account import Identity
from app.infrastructure.security.jwt_provider import JwtProvider

BEARER = "Bearer"


@dataclass(frozen=True)
class AuthContext:
    authorization: str | None = None
    identity: Identity | None = None

    def with_identity(self, identity: Identity) -> "AuthContext":
        return replace(self, identity=identity)


def extract_bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2:
        return None
    scheme, token = parts
    if scheme != BEARER or not token.strip():
        return None
    return token.strip()


def _verify(ctx: AuthContext, jwt_provider: JwtProvider) -> Result[AuthContext]:
    token = extract_bearer(ctx.authorization)
    if token is None:
        return Err(AuthFailure.MISSING_CREDENTIAL)

    try:
        claims = jwt_provider.verify_access(token)
        user_id = int(claims.subject)
    except (TokenInvalid, ValueError):
        return Err(AuthFailure.INVALID_TOKEN)

    return Ok(ctx.with_identity(Identity(id=user_id, role=claims.role, email=claims.email)))


def authenticate(ctx: AuthContext, jwt_provider: JwtProvider) -> Result[AuthContext]:
    return _verify(ctx, jwt_provider)


def optional_authenticate(ctx: AuthContext, jwt_provider: JwtProvider) -> AuthContext:
    result = _verify(ctx, jwt_provider)
    return result.value if isinstance(result, Ok) else ctx


def require_role(ctx: AuthContext, allowed_roles: Iterable[str]) -> Result[AuthContext]:
    if ctx.identity is None:
        return Err(AuthFailure.MISSING_CREDENTIAL)
    if ctx.identity.role not in set(allowed_roles):
        return Err(AuthFailure.FORBIDDEN)
    return Ok(ctx)
