# app/services/user_service.py

import logging

from sqlalchemy.exc import IntegrityError

from app.core.clock import utcnow
from app.core.exceptions import ConflictError
from app.core.logging import mask_email
from app.entities.account import DEFAULT_ROLE, Account
from app.infrastructure.database.models.user_model import UserModel
from app.infrastructure.security.password_hasher import PasswordHasher
from app.repositories.user_repository import UserRepository

log = logging.getLogger("seniorble.users")


def to_account(model: UserModel) -> Account:
    return Account(
        id=int(model.id),
        email=model.email,
        name=model.name,
        phone=model.phone,
        role=model.role or DEFAULT_ROLE,
        created_at=model.created_at,
    )


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserService:
    def __init__(self, user_repository: UserRepository, *, hasher: PasswordHasher) -> None:
        self._user_repository = user_repository
        self._hasher = hasher

    def create_user(self, *, email: str, password: str, name: str, phone: str | None, role: str = DEFAULT_ROLE) -> Account:
        email = normalize_email(email)

        existing = self._user_repository.get_by_email(email)
        if existing is not None:
            log.info("signup rejected: duplicate email=%s", mask_email(email))
            raise ConflictError("이미 가입된 이메일입니다.")

        model = UserModel(
            email=email,
            password_hash=self._hasher.hash_password(password),
            name=name.strip(),
            phone=phone,
            role=role,
            created_at=utcnow(),
        )
        try:
            self._user_repository.add(model)
        except IntegrityError as e:
            # cadastro concorrente com o mesmo email
            raise ConflictError("이미 가입된 이메일입니다.") from e

        log.info("signup ok: user_id=%s", model.id)
        return to_account(model)
