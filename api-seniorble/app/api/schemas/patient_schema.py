# app/api/schemas/patient_schema.py
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field


class CreatePatientRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    birthdate: date
    gender: Literal["male", "female"]
    device_serial_number: str = Field(min_length=4, max_length=64)
    notes: str | None = Field(default=None, max_length=2000)
    relationship: str = Field(min_length=1, max_length=50)


class PatientResponse(BaseModel):
    id: int
    guardian_id: int
    name: str
    birthdate: date
    age: int
    gender: str
    device_serial_number: str
    notes: str | None = None
    relationship: str
    created_at: datetime


def age_on(birthdate: date, today: date) -> int:
    # idade completa (만 나이)
    before_birthday = (today.month, today.day) < (birthdate.month, birthdate.day)
    return today.year - birthdate.year - (1 if before_birthday else 0)
