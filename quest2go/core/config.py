import os
from dataclasses import dataclass

from dotenv import load_dotenv

from quest2go.core.errors import ConfigError


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return tuple(default)
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    jwt_secret: str = ""
    app_env: str = "development"
    database_url: str = "sqlite:///./quest2go.db"
    jwt_algorithm: str = "HS256"
    session_ttl_seconds: int = 86400
    session_cookie_name: str = "token"
    cookie_secure: bool = False
    bcrypt_rounds: int = 10
    cors_origins: tuple[str, ...] = ("http://localhost:3000",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        app_env = os.getenv("APP_ENV", "development")
        return cls(
            jwt_secret=os.getenv("JWT_SECRET", ""),
            app_env=app_env,
            database_url=os.getenv("DATABASE_URL", "sqlite:///./quest2go.db"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            session_ttl_seconds=int(os.getenv("SESSION_TTL_SECONDS", "86400")),
            session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "token"),
            # Secure cookies only make sense behind HTTPS, which production terminates upstream.
            cookie_secure=_get_bool(os.getenv("COOKIE_SECURE"), default=app_env.lower() == "production"),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
            cors_origins=_get_list(os.getenv("CORS_ORIGINS"), ("http://localhost:3000",)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


def validate_runtime_config(settings: Settings) -> None:
    if not settings.jwt_secret:
        raise ConfigError("JWT_SECRET must be set.")
    if settings.session_ttl_seconds <= 0:
        raise ConfigError("SESSION_TTL_SECONDS must be positive.")
