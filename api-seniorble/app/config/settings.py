# app/config/settings.py
from urllib.parse import quote_plus

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.exceptions import ConfigError


class Settings(BaseSettings):
    # 🔵 Banco principal (PostgreSQL / Supabase)
    # DATABASE_URL tem prioridade sobre os campos separados
    database_url_override: str | None = None
    db_host: str | None = None
    db_port: int = 5432
    db_name: str | None = None
    db_user: str | None = None
    db_password: str | None = None
    db_auto_create: bool = True

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    cors_origins_raw: str = "http://localhost:5500,http://127.0.0.1:5500"

    # proxies confiáveis na frente da API; 0 = X-Forwarded-For é ignorado
    proxy_hops: int = 0

    # 🔐 JWT: chaves separadas para access e refresh (obrigatórias)
    jwt_secret: str
    jwt_refresh_secret: str
    jwt_issuer: str = "seniorble"
    jwt_algorithm: str = "HS256"
    jwt_access_minutes: int = 15
    jwt_refresh_days: int = 30

    # ✅ reuso de refresh já rotacionado => revoga a cadeia inteira
    refresh_reuse_revokes_family: bool = True
    refresh_retention_days: int = 90

    bcrypt_rounds: int = 10

    # 🍪 cookie do refresh token
    refresh_cookie_name: str = "refresh_token"
    refresh_cookie_path: str = "/auth/refresh"
    refresh_cookie_samesite: str = "Strict"
    refresh_cookie_secure: bool | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", "jwt_secret", "jwt_refresh_secret", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("refresh_cookie_samesite")
    @classmethod
    def check_samesite(cls, v: str) -> str:
        normalized = v.strip().capitalize()
        if normalized not in ("Strict", "Lax", "None"):
            raise ValueError("refresh_cookie_samesite deve ser Strict, Lax ou None")
        return normalized

    @model_validator(mode="after")
    def check_secrets(self):
        if not self.jwt_secret or not self.jwt_refresh_secret:
            raise ValueError("JWT_SECRET e JWT_REFRESH_SECRET são obrigatórios")
        if self.jwt_secret == self.jwt_refresh_secret:
            raise ValueError("JWT_SECRET e JWT_REFRESH_SECRET devem ser diferentes")
        if self.jwt_access_minutes <= 0 or self.jwt_refresh_days <= 0:
            raise ValueError("Tempos de expiração devem ser positivos")
        if self.proxy_hops < 0:
            raise ValueError("PROXY_HOPS não pode ser negativo")
        return self

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override

        if not (self.db_host and self.db_name and self.db_user and self.db_password is not None):
            raise ConfigError("Banco não configurado: defina DATABASE_URL_OVERRIDE ou DB_HOST/DB_NAME/DB_USER/DB_PASSWORD")

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        return f"postgresql+psycopg2://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_raw.split(",") if o.strip()]

    @property
    def cookie_secure(self) -> bool:
        if self.refresh_cookie_secure is not None:
            return self.refresh_cookie_secure
        return self.environment != "development"

    @property
    def refresh_max_age_seconds(self) -> int:
        return self.jwt_refresh_days * 24 * 60 * 60


def load_settings(**overrides) -> Settings:
    """Carrega a configuração uma única vez, na inicialização do processo."""
    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        raise ConfigError(f"Configuração inválida: {e}") from e
