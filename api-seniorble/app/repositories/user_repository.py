# app/repositories/user_repository.py

from sqlalchemy import func, select

from app.core.base_repository import BaseRepository
from app.infrastructure.database.models.user_model import UserModel


class UserRepository(BaseRepository[UserModel]):
    def get_by_email(self, email: str) -> UserModel | None:
        # comparação case-insensitive, mesmo para linhas antigas não normalizadas
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.strip().lower())
        return self._session.execute(stmt).scalars().first()

    def get_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        return self._session.execute(stmt).scalar_one_or_none()
