# app/core/exceptions.py

class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(AppError):
    def __init__(self, message: str = "입력값이 올바르지 않습니다.", *, errors: list[str] | None = None) -> None:
        super().__init__(message, status_code=400)
        self.errors = list(errors or [])


class ConflictError(AppError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=409)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "인증이 필요합니다.") -> None:
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    def __init__(self, message: str = "권한이 없습니다.") -> None:
        super().__init__(message, status_code=403)


class InternalError(AppError):
    def __init__(self, message: str = "서버 내부 오류가 발생했습니다.") -> None:
        super().__init__(message, status_code=500)


# ✅ tokens: detalhe fica no log, o cliente sempre recebe 401 genérico
class TokenInvalid(UnauthorizedError):
    def __init__(self, message: str = "Token inválido.") -> None:
        super().__init__(message)


class TokenTypeMismatch(TokenInvalid):
    def __init__(self, message: str = "Tipo de token inválido.") -> None:
        super().__init__(message)


class HashFormatError(InternalError):
    def __init__(self, message: str = "Hash de senha inválido.") -> None:
        super().__init__(message)


class ConfigError(RuntimeError):
    """Erro de configuração: fatal na inicialização, nunca vira resposta HTTP."""
