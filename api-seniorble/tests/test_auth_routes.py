from datetime import datetime, timedelta, timezone

from app.container import EXTENSION_KEY
from app.infrastructure.security.jwt_provider import JwtProvider
from app.infrastructure.security.token_hash import hash_token
from app.main import create_app
from app.repositories.refresh_token_repository import SqlRefreshTokenStore

from conftest import USER_EMAIL, USER_PASSWORD, cookie_value, login, refresh_cookie_header

GENERIC_LOGIN_FAILURE = "이메일 또는 비밀번호가 올바르지 않습니다."


def _cookie(value: str) -> dict:
    return {"Cookie": f"refresh_token={value}"}


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class TestSignup:
    def test_creates_account_without_hash(self, client):
        resp = client.post(
            "/signup",
            json={"email": "New@X.com", "password": "Correct1!pass", "name": " 김보호 ", "phone": "010-1111-2222"},
        )

        assert resp.status_code == 201
        body = resp.get_json()
        assert body["success"] is True
        assert body["user"]["email"] == "new@x.com"
        assert body["user"]["name"] == "김보호"
        assert body["user"]["role"] == "guardian"
        assert "password_hash" not in body["user"]

    def test_duplicate_email_conflict(self, client, user):
        resp = client.post(
            "/signup",
            json={"email": "A@X.COM", "password": "Another1!pass", "name": "홍길동", "phone": "010-1111-2222"},
        )

        assert resp.status_code == 409
        assert resp.get_json()["success"] is False

    def test_invalid_input_lists_errors(self, client):
        resp = client.post(
            "/signup",
            json={"email": "not-an-email", "password": "short", "name": "a", "phone": "02-123-4567"},
        )

        assert resp.status_code == 400
        body = resp.get_json()
        assert body["success"] is False
        assert len(body["errors"]) == 4


class TestLogin:
    def test_success_returns_access_token_and_cookie(self, client, user):
        resp = login(client)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["success"] is True
        assert body["accessToken"]
        assert body["user"] == {
            "id": user.id,
            "email": USER_EMAIL,
            "name": "김보호",
            "phone": "010-1234-5678",
            "role": "guardian",
            "created_at": body["user"]["created_at"],
        }

        header = refresh_cookie_header(resp)
        assert header is not None
        assert "HttpOnly" in header
        assert "Path=/auth/refresh" in header
        assert "SameSite=Strict" in header
        assert f"Max-Age={30 * 24 * 60 * 60}" in header
        # refresh token nunca vai no corpo
        assert cookie_value(header) not in resp.get_data(as_text=True)

    def test_wrong_password_and_unknown_email_look_the_same(self, client, user):
        wrong = client.post("/login", json={"email": USER_EMAIL, "password": "wrong"})
        unknown = client.post("/login", json={"email": "ghost@x.com", "password": USER_PASSWORD})

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.get_json() == unknown.get_json() == {"success": False, "message": GENERIC_LOGIN_FAILURE}
        assert refresh_cookie_header(wrong) is None

    def test_malformed_body(self, client):
        resp = client.post("/login", json={"email": "nope"})
        assert resp.status_code == 400

    def test_forwarded_for_is_ignored_without_trusted_proxy(self, client, container, user):
        resp = client.post(
            "/login",
            json={"email": USER_EMAIL, "password": USER_PASSWORD},
            headers={"X-Forwarded-For": "6.6.6.6"},
        )

        token = cookie_value(refresh_cookie_header(resp))
        record = SqlRefreshTokenStore(container.db).find_by_hash(hash_token(token))
        assert record.ip_address == "127.0.0.1"

    def test_forwarded_for_is_used_behind_trusted_proxy(self, settings, user):
        proxied = create_app(settings.model_copy(update={"proxy_hops": 1}))
        try:
            resp = proxied.test_client(use_cookies=False).post(
                "/login",
                json={"email": USER_EMAIL, "password": USER_PASSWORD},
                headers={"X-Forwarded-For": "203.0.113.9"},
            )

            token = cookie_value(refresh_cookie_header(resp))
            record = SqlRefreshTokenStore(proxied.extensions[EXTENSION_KEY].db).find_by_hash(hash_token(token))
            assert record.ip_address == "203.0.113.9"
        finally:
            proxied.extensions[EXTENSION_KEY].db.dispose()


class TestRefresh:
    def test_without_cookie_is_401(self, client):
        resp = client.post("/auth/refresh")
        assert resp.status_code == 401
        assert resp.get_json()["success"] is False

    def test_rotates_cookie(self, client, user):
        old = cookie_value(refresh_cookie_header(login(client)))

        resp = client.post("/auth/refresh", headers=_cookie(old))

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["success"] is True
        assert body["accessToken"]
        new = cookie_value(refresh_cookie_header(resp))
        assert new and new != old

    def test_body_or_header_token_is_ignored(self, client, user):
        old = cookie_value(refresh_cookie_header(login(client)))

        resp = client.post("/auth/refresh", json={"refresh_token": old}, headers=_bearer(old))
        assert resp.status_code == 401

    def test_replay_is_rejected_with_generic_message(self, client, user):
        old = cookie_value(refresh_cookie_header(login(client)))

        assert client.post("/auth/refresh", headers=_cookie(old)).status_code == 200
        replay = client.post("/auth/refresh", headers=_cookie(old))
        garbage = client.post("/auth/refresh", headers=_cookie("garbage"))

        assert replay.status_code == garbage.status_code == 401
        assert replay.get_json() == garbage.get_json()
        # cookie limpo no cliente
        assert "Max-Age=0" in refresh_cookie_header(replay)


class TestLogout:
    def test_logout_revokes_and_clears_cookie(self, client, user):
        token = cookie_value(refresh_cookie_header(login(client)))

        resp = client.post("/logout", headers=_cookie(token))

        assert resp.status_code == 200
        header = refresh_cookie_header(resp)
        assert "Max-Age=0" in header
        assert "Path=/auth/refresh" in header

        assert client.post("/auth/refresh", headers=_cookie(token)).status_code == 401

    def test_logout_under_cookie_path(self, client, user):
        token = cookie_value(refresh_cookie_header(login(client)))

        assert client.post("/auth/refresh/logout", headers=_cookie(token)).status_code == 200
        assert client.post("/auth/refresh", headers=_cookie(token)).status_code == 401

    def test_logout_without_cookie_still_succeeds(self, client):
        resp = client.post("/logout")
        assert resp.status_code == 200
        assert resp.get_json()["success"] is True


class TestMe:
    def test_returns_identity(self, client, user):
        access = login(client).get_json()["accessToken"]

        for path in ("/auth/me", "/auth/verify"):
            resp = client.get(path, headers=_bearer(access))
            assert resp.status_code == 200
            assert resp.get_json()["user"] == {"id": user.id, "role": "guardian", "email": USER_EMAIL}

    def test_requires_bearer_scheme(self, client, user):
        access = login(client).get_json()["accessToken"]

        assert client.get("/auth/me").status_code == 401
        assert client.get("/auth/me", headers={"Authorization": access}).status_code == 401
        assert client.get("/auth/me", headers={"Authorization": f"Token {access}"}).status_code == 401

    def test_expired_access_token(self, client, settings, user):
        stale = JwtProvider(settings, clock=lambda: datetime.now(tz=timezone.utc) - timedelta(minutes=20))
        token = stale.issue_access_token(subject=str(user.id), role="guardian", email=USER_EMAIL)

        resp = client.get("/auth/me", headers=_bearer(token))
        assert resp.status_code == 401
        assert resp.get_json() == {"success": False, "message": "인증이 필요합니다."}


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_health(client):
    assert client.get("/health").get_json()["status"] == "healthy"
    assert client.get("/health/db").get_json() == {"db": "ok"}
