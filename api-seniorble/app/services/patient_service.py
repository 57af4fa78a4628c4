# app/services/patient_service.py

from datetime import date

from sqlalchemy.exc import IntegrityError

from app.core.clock import utcnow
from app.core.exceptions import ConflictError
from app.infrastructure.database.models.patient_model import PatientModel
from app.repositories.patient_repository import PatientRepository

DEVICE_TAKEN = "해당 센서는 이미 다른 환자에게 등록되어 있습니다."


class PatientService:
    def __init__(self, repo: PatientRepository) -> None:
        self._repo = repo

    def list_patients(self, *, guardian_id: int) -> list[PatientModel]:
        return self._repo.list_by_guardian(guardian_id)

    def register_patient(
        self,
        *,
        guardian_id: int,
        name: str,
        birthdate: date,
        gender: str,
        device_serial_number: str,
        relationship: str,
        notes: str | None = None,
    ) -> PatientModel:
        serial = device_serial_number.strip().upper()
        if self._repo.get_by_device_serial(serial) is not None:
            raise ConflictError(DEVICE_TAKEN)

        model = PatientModel(
            guardian_id=guardian_id,
            name=name.strip(),
            birthdate=birthdate,
            gender=gender,
            device_serial_number=serial,
            notes=(notes or "").strip() or None,
            relationship=relationship.strip(),
            created_at=utcnow(),
        )
        try:
            return self._repo.add(model)
        except IntegrityError as e:
            raise ConflictError(DEVICE_TAKEN) from e
