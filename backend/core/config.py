import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


INSECURE_SESSION_SECRET = "fallback_secret_key"


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    database_url: str = "sqlite:///./appointments.db"

    session_secret: str = INSECURE_SESSION_SECRET
    session_algorithm: str = "HS256"
    session_expires_minutes: int = 480
    session_cookie_name: str = "admin_session"
    session_cookie_secure: bool = False

    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    bcrypt_rounds: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            app_env=os.getenv("APP_ENV", "development"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./appointments.db"),
            session_secret=os.getenv("SESSION_SECRET", INSECURE_SESSION_SECRET),
            session_algorithm=os.getenv("SESSION_ALGORITHM", "HS256"),
            session_expires_minutes=int(os.getenv("SESSION_EXPIRES_MINUTES", "480")),
            session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "admin_session"),
            session_cookie_secure=_get_bool(os.getenv("SESSION_COOKIE_SECURE"), default=False),
            cors_origins=_get_list(os.getenv("CORS_ORIGINS"), default=["*"]),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def validate_runtime_config(settings: Settings) -> None:
    if settings.app_env.lower() == "production" and settings.session_secret == INSECURE_SESSION_SECRET:
        raise RuntimeError("SESSION_SECRET must be set in production.")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
