# =======================================================================================
# rfid_dashboard/config.py - Configuration Management
# =======================================================================================
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    """Helper to parse boolean environment variables."""
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_port() -> int:
    """PORT wins (cloud platforms set it), then API_PORT, then 5000."""
    v = os.getenv("PORT") or os.getenv("API_PORT")
    return int(v) if v and v.isdigit() else 5000


class Config:
    # Runtime mode: anything other than "development" requires a real JWT_SECRET
    APP_ENV: str = os.getenv("APP_ENV", "development")

    # Database
    DB_URL: str = os.getenv("DB_URL", "sqlite:///./rfid_dashboard.db")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "20"))

    # API Settings
    API_DEBUG: bool = _env_bool("API_DEBUG")
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    PORT: int = _env_port()
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Session tokens
    JWT_SECRET: Optional[str] = os.getenv("JWT_SECRET")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    TOKEN_TTL_HOURS: int = int(os.getenv("TOKEN_TTL_HOURS", "24"))

    # Password hashing (pbkdf2_sha256 rounds)
    PASSWORD_HASH_ROUNDS: int = int(os.getenv("PASSWORD_HASH_ROUNDS", "29000"))

    # Event log / live channel
    LOGS_LIMIT: int = int(os.getenv("LOGS_LIMIT", "100"))
    VIEWER_QUEUE_SIZE: int = int(os.getenv("VIEWER_QUEUE_SIZE", "100"))
    LIVE_REQUIRE_AUTH: bool = _env_bool("LIVE_REQUIRE_AUTH")

    # Bootstrap identity
    SEED_DEFAULT_USER: bool = _env_bool("SEED_DEFAULT_USER", "true")
    DEFAULT_USER_REG_NUMBER: str = os.getenv("DEFAULT_USER_REG_NUMBER", "6216922")
    DEFAULT_USER_NAME: str = os.getenv("DEFAULT_USER_NAME", "Default User")
    DEFAULT_USER_EMAIL: str = os.getenv("DEFAULT_USER_EMAIL", "user@example.com")
    DEFAULT_USER_PASSWORD: str = os.getenv("DEFAULT_USER_PASSWORD", "password123")

    def __init__(self, **overrides):
        for name, value in overrides.items():
            if not hasattr(type(self), name):
                raise AttributeError(f"Unknown config option: {name}")
            setattr(self, name, value)

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() in ("development", "dev", "test")


config = Config()
