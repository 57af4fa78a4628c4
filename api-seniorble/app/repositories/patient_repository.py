# app/repositories/patient_repository.py

from sqlalchemy import select

from app.core.base_repository import BaseRepository
from app.infrastructure.database.models.patient_model import PatientModel


class PatientRepository(BaseRepository[PatientModel]):
    def list_by_guardian(self, guardian_id: int) -> list[PatientModel]:
        stmt = (
            select(PatientModel)
            .where(PatientModel.guardian_id == guardian_id)
            .order_by(PatientModel.created_at.desc(), PatientModel.id.desc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def get_by_device_serial(self, serial: str) -> PatientModel | None:
        stmt = select(PatientModel).where(PatientModel.device_serial_number == serial)
        return self._session.execute(stmt).scalar_one_or_none()
