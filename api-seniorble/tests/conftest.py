from __future__ import annotations

import pytest

from app.config.settings import Settings, load_settings
from app.container import EXTENSION_KEY, ServiceContainer
from app.main import create_app
from app.repositories.user_repository import UserRepository
from app.services.user_service import UserService

ACCESS_SECRET = "test-access-secret-0123456789abcdef"
REFRESH_SECRET = "test-refresh-secret-fedcba9876543210"

USER_EMAIL = "a@x.com"
USER_PASSWORD = "Correct1!pass"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("JWT_SECRET", "JWT_REFRESH_SECRET", "DATABASE_URL_OVERRIDE", "BCRYPT_ROUNDS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return load_settings(
        database_url_override=f"sqlite:///{tmp_path / 'seniorble.db'}",
        jwt_secret=ACCESS_SECRET,
        jwt_refresh_secret=REFRESH_SECRET,
        environment="test",
        bcrypt_rounds=10,
        refresh_cookie_secure=False,
    )


@pytest.fixture
def app(settings: Settings):
    flask_app = create_app(settings)
    flask_app.config["TESTING"] = True
    yield flask_app
    flask_app.extensions[EXTENSION_KEY].db.dispose()


@pytest.fixture
def container(app) -> ServiceContainer:
    return app.extensions[EXTENSION_KEY]


@pytest.fixture
def client(app):
    # cookies enviados explicitamente em cada teste
    return app.test_client(use_cookies=False)


@pytest.fixture
def make_user(container: ServiceContainer):
    def _make(email: str = USER_EMAIL, password: str = USER_PASSWORD, *, name: str = "김보호", role: str = "guardian"):
        with container.db.session() as session:
            service = UserService(UserRepository(session), hasher=container.hasher)
            return service.create_user(email=email, password=password, name=name, phone="010-1234-5678", role=role)

    return _make


@pytest.fixture
def user(make_user):
    return make_user()


def refresh_cookie_header(response, name: str = "refresh_token") -> str | None:
    for header in response.headers.getlist("Set-Cookie"):
        if header.startswith(f"{name}="):
            return header
    return None


def cookie_value(header: str) -> str:
    return header.split(";", 1)[0].split("=", 1)[1]


def login(client, email: str = USER_EMAIL, password: str = USER_PASSWORD):
    return client.post("/login", json={"email": email, "password": password})
