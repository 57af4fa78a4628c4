"""
Configuração de logging da aplicação (Flask + gunicorn).
"""
import logging


def setup_logging(level: str = "INFO") -> None:
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    for name in ("seniorble", "gunicorn.error", "werkzeug"):
        logging.getLogger(name).setLevel(resolved)


def mask_email(email: str | None) -> str:
    # a***@dominio.com
    if not email or "@" not in email:
        return "-"
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"
