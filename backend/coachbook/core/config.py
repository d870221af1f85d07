# backend/coachbook/core/config.py
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "CoachBook"
    environment: Literal["development", "test", "production"] = "development"

    # Auth
    secret_key: SecretStr = Field(
        default=SecretStr("change-me-in-production"),
        description="HMAC key used to sign access tokens",
    )
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=7 * 24 * 60, ge=1)

    # Relational backend
    database_url: str = "sqlite:///./coachbook.db"

    # Comma-separated allowlist
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    # Logging
    log_level: str = "INFO"
    log_validation_failures: bool = True

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
