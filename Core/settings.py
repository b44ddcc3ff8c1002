# Core/settings.py
import os
import secrets
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DAY = 24 * 60 * 60


class ConfigError(RuntimeError):
    """Raised at startup when an environment variable is missing or invalid."""


class Settings(BaseModel):
    environment: str = "development"
    port: int = 8000
    database_url: str = "sqlite:///portfolio.db"

    session_secret: str = Field(default_factory=lambda: secrets.token_hex(32))
    session_max_age: int = 30 * DAY
    session_cookie_name: str = "portfolio.sid"
    password_pepper: str = ""

    cors_origins: List[str] = ["http://localhost:5173"]
    rate_limit_window: int = 15 * 60
    rate_limit_max: int = 100
    login_rate_limit_max: int = 5
    login_rate_limit_window: int = 15 * 60
    contact_rate_limit_max: int = 3
    contact_rate_limit_window: int = 60 * 60

    log_level: str = "DEBUG"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a valid number. Received: {raw}")


def load_settings() -> Settings:
    """Collect every environment variable the service needs into one object."""
    environment = os.getenv("APP_ENV", "development")
    production = environment == "production"

    secret = os.getenv("SESSION_SECRET")
    if production:
        if not secret:
            raise ConfigError("Missing required environment variable: SESSION_SECRET")
        if len(secret) < 32:
            raise ConfigError(
                f"SESSION_SECRET must be at least 32 characters long. Current length: {len(secret)}"
            )

    origins = os.getenv("CORS_ORIGIN", "http://localhost:5173")
    values = dict(
        environment=environment,
        port=_int_env("PORT", 8000),
        database_url=os.getenv("DATABASE_URL") or "sqlite:///portfolio.db",
        session_max_age=_int_env("SESSION_MAX_AGE", 30 * DAY),
        session_cookie_name=os.getenv("SESSION_COOKIE_NAME", "portfolio.sid"),
        password_pepper=os.getenv("PASSWORD_PEPPER", ""),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        rate_limit_window=_int_env("RATE_LIMIT_WINDOW", 15 * 60),
        rate_limit_max=_int_env("RATE_LIMIT_MAX", 100),
        login_rate_limit_max=_int_env("LOGIN_RATE_LIMIT_MAX", 5),
        contact_rate_limit_max=_int_env("CONTACT_RATE_LIMIT_MAX", 3),
        log_level=os.getenv("LOG_LEVEL") or ("INFO" if production else "DEBUG"),
    )
    if secret:
        values["session_secret"] = secret
    return Settings(**values)
