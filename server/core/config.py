# server/core/config.py

from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Process-wide configuration read from the environment (and .env).
    The signing secret has no default: when unset, token issue and
    verification fail closed.
    """

    jwt_secret: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 8000
    database_url: str = "sqlite:///./data/app.db"
    bcrypt_rounds: int = 10
    token_expire_minutes: int = 60
    cors_origins: str = "*"         # comma-separated
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("jwt_secret")
    @classmethod
    def _blank_secret_is_missing(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
