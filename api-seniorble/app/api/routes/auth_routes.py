import logging

from flask import Blueprint, jsonify, request, g

from app.api.cookies import clear_refresh_cookie, read_refresh_cookie, set_refresh_cookie
from app.api.middlewares.auth_middleware import require_auth
from app.api.schemas.user_schema import (
    IdentityResponse,
    LoginRequest,
    LoginResponse,
    RefreshResponse,
    SignupRequest,
    UserResponse,
)
from app.container import get_container
from app.core.exceptions import UnauthorizedError
from app.core.result import Err
from app.repositories.user_repository import UserRepository
from app.services.session_service import ClientInfo
from app.services.user_service import UserService

bp_auth = Blueprint("auth", __name__)

log = logging.getLogger("seniorble.auth")

LOGIN_FAILED = "이메일 또는 비밀번호가 올바르지 않습니다."
AUTH_REQUIRED = "인증이 필요합니다."


# -------------------------
# Helpers
# -------------------------

def _client_info() -> ClientInfo:
    return ClientInfo(
        user_agent=request.headers.get("User-Agent"),
        # remote_addr já vem corrigido pelo ProxyFix quando PROXY_HOPS > 0
        ip_address=request.remote_addr or None,
    )


def _json_body() -> dict:
    return request.get_json(force=True, silent=True) or {}


# -------------------------
# Cadastro / login
# -------------------------

@bp_auth.post("/signup")
def signup():
    payload = SignupRequest.model_validate(_json_body())
    container = get_container()

    with container.db.session() as session:
        service = UserService(UserRepository(session), hasher=container.hasher)
        account = service.create_user(
            email=payload.email,
            password=payload.password,
            name=payload.name,
            phone=payload.phone,
        )

    return jsonify(
        {
            "success": True,
            "message": "회원가입이 완료되었습니다.",
            "user": UserResponse(**account.to_public()).model_dump(mode="json"),
        }
    ), 201


@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(_json_body())
    container = get_container()

    result = container.sessions.login(email=payload.email, password=payload.password, client=_client_info())
    if isinstance(result, Err):
        raise UnauthorizedError(LOGIN_FAILED)

    login_result = result.value
    body = LoginResponse(
        access_token=login_result.access_token,
        user=UserResponse(**login_result.account.to_public()),
    )

    response = jsonify(body.model_dump(mode="json", by_alias=True))
    set_refresh_cookie(response, container.settings, login_result.refresh_token)
    return response, 200


# -------------------------
# Refresh / logout
# -------------------------

@bp_auth.post("/auth/refresh")
def refresh():
    container = get_container()
    presented = read_refresh_cookie(container.settings)

    result = container.sessions.refresh(presented, client=_client_info())
    if isinstance(result, Err):
        log.info("refresh failed: reason=%s", result.reason.value)
        response = jsonify({"success": False, "message": AUTH_REQUIRED})
        clear_refresh_cookie(response, container.settings)
        return response, 401

    pair = result.value
    response = jsonify(RefreshResponse(access_token=pair.access_token).model_dump(by_alias=True))
    set_refresh_cookie(response, container.settings, pair.refresh_token)
    return response, 200


@bp_auth.post("/logout")
@bp_auth.post("/auth/refresh/logout")
def logout():
    # sempre 200: o cookie é limpo de qualquer forma
    container = get_container()
    container.sessions.logout(read_refresh_cookie(container.settings))

    response = jsonify({"success": True, "message": "로그아웃되었습니다."})
    clear_refresh_cookie(response, container.settings)
    return response, 200


# -------------------------
# Identidade
# -------------------------

@bp_auth.get("/auth/me")
@bp_auth.get("/auth/verify")
@require_auth
def me():
    identity = g.auth.identity
    return jsonify({"success": True, "user": IdentityResponse(**identity.to_public()).model_dump()}), 200
