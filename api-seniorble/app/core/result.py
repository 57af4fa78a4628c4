# app/core/result.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class AuthFailure(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    UNKNOWN_TOKEN = "unknown_token"
    REVOKED = "revoked"
    EXPIRED = "expired"
    REUSE_DETECTED = "reuse_detected"
    UNKNOWN_ACCOUNT = "unknown_account"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    reason: AuthFailure


# falhas esperadas de autenticação não usam exceção; quem chama decide o status HTTP
Result = Union[Ok[T], Err]
