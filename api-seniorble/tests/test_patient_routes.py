from datetime import datetime, timedelta, timezone

import pytest

from app.infrastructure.security.jwt_provider import JwtProvider
from app.services.patient_service import PatientService

from conftest import login

PATIENT = {
    "name": "김철수",
    "birthdate": "1945-03-15",
    "gender": "male",
    "device_serial_number": "sn-abc123456789",
    "notes": "고혈압, 무릎 수술 이력",
    "relationship": "son",
}


@pytest.fixture
def access_token(client, user):
    return login(client).get_json()["accessToken"]


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestPatients:
    def test_register_and_list(self, client, user, access_token):
        created = client.post("/patients", json=PATIENT, headers=_bearer(access_token))

        assert created.status_code == 201
        patient = created.get_json()["patient"]
        assert patient["guardian_id"] == user.id
        assert patient["device_serial_number"] == "SN-ABC123456789"
        assert patient["age"] >= 79

        listed = client.get("/patients", headers=_bearer(access_token)).get_json()
        assert listed["success"] is True
        assert [p["id"] for p in listed["patients"]] == [patient["id"]]

    def test_device_already_paired(self, client, access_token):
        client.post("/patients", json=PATIENT, headers=_bearer(access_token))
        again = client.post("/patients", json={**PATIENT, "name": "이영희"}, headers=_bearer(access_token))

        assert again.status_code == 409
        assert again.get_json()["message"] == "해당 센서는 이미 다른 환자에게 등록되어 있습니다."

    def test_guardians_only_see_their_patients(self, client, make_user, access_token):
        client.post("/patients", json=PATIENT, headers=_bearer(access_token))
        make_user("b@x.com", "Other1!pass")
        other = login(client, "b@x.com", "Other1!pass").get_json()["accessToken"]

        assert client.get("/patients", headers=_bearer(other)).get_json()["patients"] == []

    def test_invalid_body(self, client, access_token):
        resp = client.post("/patients", json={**PATIENT, "gender": "x"}, headers=_bearer(access_token))
        assert resp.status_code == 400


class TestPatientsGate:
    def test_without_token(self, client):
        assert client.get("/patients").status_code == 401

    def test_role_other_is_forbidden(self, client, make_user):
        make_user("other@x.com", "Other1!pass", role="other")
        token = login(client, "other@x.com", "Other1!pass").get_json()["accessToken"]

        resp = client.get("/patients", headers=_bearer(token))
        assert resp.status_code == 403
        assert resp.get_json() == {"success": False, "message": "권한이 없습니다."}

    def test_expired_token_never_reaches_handler(self, client, settings, user, monkeypatch):
        calls = []
        monkeypatch.setattr(PatientService, "list_patients", lambda self, **kw: calls.append(kw) or [])

        stale = JwtProvider(settings, clock=lambda: datetime.now(tz=timezone.utc) - timedelta(hours=1))
        token = stale.issue_access_token(subject=str(user.id), role="guardian", email=user.email)

        resp = client.get("/patients", headers=_bearer(token))
        assert resp.status_code == 401
        assert calls == []
