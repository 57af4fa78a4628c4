# app/api/routes/patient_routes.py

from __future__ import annotations

from flask import Blueprint, jsonify, g, request

from app.api.middlewares.auth_middleware import require_auth, require_roles
from app.api.schemas.patient_schema import CreatePatientRequest, PatientResponse, age_on
from app.container import get_container
from app.core.clock import utcnow
from app.repositories.patient_repository import PatientRepository
from app.services.patient_service import PatientService

bp_patients = Blueprint("patients", __name__)

GUARDIAN = "guardian"


def _to_response(model) -> dict:
    return PatientResponse(
        id=model.id,
        guardian_id=model.guardian_id,
        name=model.name,
        birthdate=model.birthdate,
        age=age_on(model.birthdate, utcnow().date()),
        gender=model.gender,
        device_serial_number=model.device_serial_number,
        notes=model.notes,
        relationship=model.relationship,
        created_at=model.created_at,
    ).model_dump(mode="json")


@bp_patients.get("")
@require_auth
@require_roles(GUARDIAN)
def list_patients():
    guardian_id = g.auth.identity.id

    with get_container().db.session() as session:
        patients = PatientService(PatientRepository(session)).list_patients(guardian_id=guardian_id)
        items = [_to_response(p) for p in patients]

    return jsonify({"success": True, "patients": items}), 200


@bp_patients.post("")
@require_auth
@require_roles(GUARDIAN)
def create_patient():
    payload = CreatePatientRequest.model_validate(request.get_json(force=True, silent=True) or {})
    guardian_id = g.auth.identity.id

    with get_container().db.session() as session:
        created = PatientService(PatientRepository(session)).register_patient(
            guardian_id=guardian_id,
            **payload.model_dump(),
        )
        body = _to_response(created)

    return jsonify({"success": True, "patient": body}), 201
