# app/core/base_repository.py

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

TModel = TypeVar("TModel")


class BaseRepository(Generic[TModel]):
    """Repositórios operam sobre a sessão recebida; commit/rollback ficam com Database.session()."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, model: TModel) -> TModel:
        # flush para obter o id gerado sem fechar a transação
        self._session.add(model)
        self._session.flush()
        return model
