# app/entities/account.py
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

DEFAULT_ROLE = "guardian"


@dataclass(frozen=True)
class Account:
    """Visão saneada da conta: nunca carrega o hash da senha."""

    id: int
    email: str
    name: str
    phone: Optional[str]
    role: str
    created_at: Optional[datetime]

    def to_public(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "role": self.role,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Identity:
    id: int
    role: str
    email: Optional[str]

    def to_public(self) -> dict[str, Any]:
        return {"id": self.id, "role": self.role, "email": self.email}
