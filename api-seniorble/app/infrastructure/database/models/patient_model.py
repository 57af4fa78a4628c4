# app/infrastructure/database/models/patient_model.py

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base_model import BaseModel, BigIntPK


class PatientModel(BaseModel):
    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    guardian_id: Mapped[int] = mapped_column(BigIntPK, ForeignKey("users.id"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    birthdate: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)

    # sensor pareado: um sensor pertence a um único paciente
    device_serial_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    notes: Mapped[str] = mapped_column(Text, nullable=True)
    relationship: Mapped[str] = mapped_column(String(50), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
