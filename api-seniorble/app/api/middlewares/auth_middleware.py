import logging
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import request, g

from app.container import get_container
from app.core.exceptions import UnauthorizedError, ForbiddenError
from app.core.result import Err
from app.services.auth_gate import AuthContext, authenticate, optional_authenticate, require_role

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger("seniorble.auth")


def _request_context() -> AuthContext:
    return AuthContext(authorization=request.headers.get("Authorization"))


def require_auth(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        result = authenticate(_request_context(), get_container().jwt_provider)
        if isinstance(result, Err):
            log.info("auth rejected: %s %s reason=%s", request.method, request.path, result.reason.value)
            raise UnauthorizedError()

        g.auth = result.value
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def optional_auth(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.auth = optional_authenticate(_request_context(), get_container().jwt_provider)
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*allowed_roles: str):
    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            ctx = getattr(g, "auth", None)
            if ctx is None:
                raise UnauthorizedError()

            result = require_role(ctx, allowed_roles)
            if isinstance(result, Err):
                if ctx.identity is None:
                    raise UnauthorizedError()
                log.info("role rejected: user_id=%s role=%s", ctx.identity.id, ctx.identity.role)
                raise ForbiddenError()

            g.auth = result.value
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
