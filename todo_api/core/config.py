"""Configuration for the Todo API, loaded from the environment."""
from datetime import timedelta
import os
import re

from dotenv import load_dotenv
from pydantic import BaseModel

# Dev-only signing secret; production refuses to start without JWT_SECRET
DEV_JWT_SECRET = "dev-insecure-jwt-secret-change-me"

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a compact duration such as "7d", "12h", "30m" or "3600".

    Args:
        value: Duration string, bare numbers are seconds

    Returns:
        The equivalent timedelta

    Raises:
        ValueError: If the string is not a positive duration
    """
    match = _DURATION_PATTERN.match(str(value).lower())
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount = int(match.group(1))
    if amount <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")

    return timedelta(**{_DURATION_UNITS[match.group(2)]: amount})


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Runtime settings for the API server."""

    database_url: str = "sqlite:///./todo_app.db"
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expire: str = "7d"
    bcrypt_rounds: int = 10
    environment: str = "development"
    frontend_url: str = "http://localhost:5173"
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def token_lifetime(self) -> timedelta:
        return parse_duration(self.jwt_expire)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and a .env file if present)."""
        load_dotenv()

        environment = os.environ.get("ENVIRONMENT", "development")
        jwt_secret = os.environ.get("JWT_SECRET")
        if not jwt_secret:
            if environment == "production":
                raise ValueError("JWT_SECRET environment variable is not set.")
            jwt_secret = DEV_JWT_SECRET

        settings = cls(
            database_url=os.environ.get("DATABASE_URL", "sqlite:///./todo_app.db"),
            jwt_secret=jwt_secret,
            jwt_expire=os.environ.get("JWT_EXPIRE", "7d"),
            bcrypt_rounds=int(os.environ.get("BCRYPT_ROUNDS", "10")),
            environment=environment,
            frontend_url=os.environ.get("FRONTEND_URL", "http://localhost:5173"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            sql_echo=_env_flag("SQL_ECHO"),
        )

        # Fail at startup rather than on the first login
        settings.token_lifetime
        return settings
