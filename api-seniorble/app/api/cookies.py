# app/api/cookies.py

from flask import Response, request

from app.config.settings import Settings


def read_refresh_cookie(settings: Settings) -> str | None:
    # o refresh token só é aceito via cookie (nunca body/header)
    value = request.cookies.get(settings.refresh_cookie_name)
    return value or None


def set_refresh_cookie(response: Response, settings: Settings, token: str) -> Response:
    response.set_cookie(
        settings.refresh_cookie_name,
        token,
        max_age=settings.refresh_max_age_seconds,
        path=settings.refresh_cookie_path,
        secure=settings.cookie_secure,
        httponly=True,
        samesite=settings.refresh_cookie_samesite,
    )
    return response


def clear_refresh_cookie(response: Response, settings: Settings) -> Response:
    # mesmo nome e path, senão o navegador não remove
    response.set_cookie(
        settings.refresh_cookie_name,
        "",
        max_age=0,
        expires=0,
        path=settings.refresh_cookie_path,
        secure=settings.cookie_secure,
        httponly=True,
        samesite=settings.refresh_cookie_samesite,
    )
    return response
